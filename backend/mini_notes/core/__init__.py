"""Core Layer — pure domain logic: errors, domain types, token codec, hashing, statistics.

Invariants:
    - No imports from infrastructure/, services/ or api/
    - No database or HTTP access

Design Decisions:
    - Pure functions are unit-tested without a database (ADR: ExMA impureim sandwich)
"""
