"""Infrastructure Layer — database, logging and rate limiting.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver exceptions are mapped to core/errors.py types at this boundary

Design Decisions:
    - Thin wrappers over SQLAlchemy / slowapi rather than custom clients (ADR: ExMA single responsibility)
"""
