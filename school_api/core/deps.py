from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from school_api.core.logging import school_id_var
from school_api.core.security import resolve_session
from school_api.core.settings import get_app_settings
from school_api.schemas.auth import SessionUser

logger = logging.getLogger(__name__)

# Bearer is accepted alongside the session cookie (used by docs and service callers)
bearer_scheme = HTTPBearer(auto_error=False)


# PUBLIC_INTERFACE
async def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Return the raw session token from the session cookie or the Authorization header.

    The cookie wins when both are present.
    """
    settings = get_app_settings()
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


# PUBLIC_INTERFACE
async def get_current_session(token: Optional[str] = Depends(get_session_token)) -> SessionUser:
    """
    Resolve the caller's session.

    Raises:
        HTTPException: 401 Unauthorized if the token is missing, invalid or expired.
    """
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user = resolve_session(token)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if user.school_id is not None:
        school_id_var.set(str(user.school_id))
    return user


# PUBLIC_INTERFACE
def require_roles(*required: str):
    """
    Create a dependency that requires the current session to hold one of the given roles.

    Returns the SessionUser so handlers can read the school affiliation.
    """
    required_set = {r.upper() for r in required}

    async def _dep(user: SessionUser = Depends(get_current_session)) -> SessionUser:
        if user.role not in required_set:
            logger.warning("Role %s denied; requires one of %s", user.role, sorted(required_set))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden - {' or '.join(sorted(required_set))} access required",
            )
        return user

    return _dep


# PUBLIC_INTERFACE
def school_scope(user: SessionUser) -> UUID:
    """
    Return the caller's school id for tenant-scoped queries.

    Raises:
        HTTPException: 403 when the session carries no school affiliation.
    """
    if user.school_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No school is associated with this account",
        )
    return user.school_id
