"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy queries for each domain area. Every
repository is bound to one school_id and filters on it explicitly.
"""
