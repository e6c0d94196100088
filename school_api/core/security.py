from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from school_api.core.settings import get_app_settings
from school_api.schemas.auth import SessionUser


# PUBLIC_INTERFACE
def create_session_token(
    subject: str,
    role: str,
    school_id: Optional[str] = None,
    school_name: Optional[str] = None,
    expires_minutes: int = 60,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Sign a session token carrying the claims the identity provider issues.

    The service never logs anyone in; this exists for local tooling and tests
    that need a token the guard will accept.
    """
    settings = get_app_settings()
    now = datetime.now(tz=timezone.utc)
    payload: Dict[str, Any] = {
        "sub": subject,
        "role": role,
        "school_id": school_id,
        "school_name": school_name,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


# PUBLIC_INTERFACE
def decode_session_token(token: str) -> Dict[str, Any]:
    """Decode and validate a session JWT; raises JWTError if invalid/expired."""
    settings = get_app_settings()
    return jwt.decode(token, settings.SESSION_SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])


# PUBLIC_INTERFACE
def resolve_session(token: str) -> Optional[SessionUser]:
    """Return the SessionUser encoded in a token, or None when it is invalid."""
    try:
        claims = decode_session_token(token)
    except JWTError:
        return None
    if not claims.get("sub") or not claims.get("role"):
        return None
    try:
        return SessionUser(
            user_id=str(claims["sub"]),
            role=str(claims["role"]).upper(),
            school_id=claims.get("school_id"),
            school_name=claims.get("school_name"),
        )
    except ValueError:
        # malformed school_id claim
        return None
