"""
Service layer: composes repository reads into response payloads.

Independent aggregates run concurrently, each on its own session.
"""
