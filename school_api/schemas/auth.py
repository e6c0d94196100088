from __future__ import annotations

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    """Roles the identity provider assigns to school users."""
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    TRANSPORT = "TRANSPORT"


class SessionUser(BaseModel):
    """Caller identity resolved from a verified session token."""
    user_id: str = Field(..., description="User id (token subject)")
    role: str = Field(..., description="User role, e.g. ADMIN")
    school_id: Optional[UUID] = Field(None, description="School (tenant) affiliation")
    school_name: Optional[str] = Field(None)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
