"""Services — use-case orchestration between routes and repositories.

Invariants:
    - Services own the transaction boundary (commit/rollback); repositories never commit
    - Services raise core/errors.py types only; routes never build error bodies
    - Services return schema objects ready for serialization

Design Decisions:
    - Thin routes delegate to services (ADR: ExMA impureim sandwich)
"""
