"""Infrastructure Layer — database sessions, credentials and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Library exceptions (SQLAlchemy, PyJWT) are mapped to core/errors.py types here
"""
