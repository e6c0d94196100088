from uuid import uuid4

import pytest

from school_api.core.security import create_session_token
from school_api.db.session import get_session_factory
from school_api.api.main import app

ADMIN_ENDPOINTS = [
    ("GET", "/api/employee/summary"),
    ("POST", "/api/employee/fix-school-ids"),
    ("GET", "/api/students/list"),
    ("GET", "/api/employee"),
]


@pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS + [("GET", "/api/academic/grades")])
async def test_missing_session_is_401(client, method, path):
    resp = await client.request(method, path)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


async def test_garbage_token_is_401(client):
    resp = await client.get("/api/academic/grades", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_token_signed_with_other_key_is_401(client, school_a):
    from jose import jwt

    token = jwt.encode({"sub": "u1", "role": "ADMIN", "school_id": str(school_a.id)}, "other", algorithm="HS256")
    resp = await client.get("/api/academic/grades", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


async def test_expired_token_is_401(client, school_a):
    token = create_session_token("u1", "ADMIN", school_id=str(school_a.id), expires_minutes=-5)
    resp = await client.get("/api/employee/summary", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


@pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
async def test_non_admin_is_403(client, auth_headers, school_a, method, path):
    resp = await client.request(method, path, headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 403
    assert resp.json()["error"] == "Forbidden - ADMIN access required"


async def test_session_without_school_is_403(client, auth_headers):
    resp = await client.get("/api/academic/grades", headers=auth_headers("ADMIN"))
    assert resp.status_code == 403
    assert resp.json()["error"] == "No school is associated with this account"


async def test_session_cookie_is_accepted(client, school_a):
    token = create_session_token("u1", "ADMIN", school_id=str(school_a.id), school_name="Alpha School")
    client.cookies.set("session-token", token)
    resp = await client.get("/api/health/session")
    assert resp.status_code == 200
    body = resp.json()
    assert body["userId"] == "u1"
    assert body["role"] == "ADMIN"
    assert body["schoolId"] == str(school_a.id)


async def test_role_claim_is_case_insensitive(client, school_a):
    token = create_session_token("u1", "admin", school_id=str(school_a.id))
    resp = await client.get("/api/employee/summary", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


async def test_rejected_requests_never_reach_the_store(client, auth_headers):
    calls = []

    def _recording_factory():
        calls.append(1)
        raise AssertionError("store touched")

    app.dependency_overrides[get_session_factory] = _recording_factory
    no_session = await client.get("/api/employee/summary")
    wrong_role = await client.post("/api/employee/fix-school-ids", headers=auth_headers("TEACHER", uuid4()))
    assert no_session.status_code == 401
    assert wrong_role.status_code == 403
    assert calls == []


async def test_health_is_public_and_carries_correlation_id(client):
    resp = await client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Healthy"}
    assert resp.headers["X-Correlation-ID"] == "abc-123"
