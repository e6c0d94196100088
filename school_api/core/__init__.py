"""
Core application utilities for settings and FastAPI dependencies.

This package provides:
- Application-level settings (separate from DB settings)
- Session token verification and the role/school guards used by routes
- Logging configuration with correlation and school context
"""
