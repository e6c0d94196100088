"""
API route modules for the school dashboard.

This package contains subrouters for:
- Academic: attendance sheets and grade lists
- Students: roster
- Employee: listing, summary and the school_id back-fill
- Dashboard, Operations: per-school statistics
- Reports: roster exports

Routers are included from school_api.api.main (under the /api prefix).
"""
