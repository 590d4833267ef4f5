"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy errors are mapped to core/errors.py storage errors here
"""
