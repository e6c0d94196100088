"""
Public Pydantic schemas used by FastAPI routes, services, and tests.

Schemas are grouped by area (academic, staff, dashboard) on top of common
reusable models. Responses serialize with camelCase keys.
"""

from .common import ErrorResponse, MessageResponse  # noqa: F401
