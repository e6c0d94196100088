"""
Database package: settings, the lazily created async engine, and the ORM
models of the school schema.
"""

from .base import Base
from .config import get_settings, Settings
from .session import (
    dispose_engine,
    get_async_session,
    get_engine,
    get_session_factory,
)

# Registers every model on Base.metadata
from . import models as models  # noqa: F401

__all__ = [
    "Base",
    "Settings",
    "get_settings",
    "dispose_engine",
    "get_engine",
    "get_async_session",
    "get_session_factory",
    "models",
]
