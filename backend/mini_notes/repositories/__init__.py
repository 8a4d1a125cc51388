"""Repositories — parameterized SQL over the users and notes tables.

Invariants:
    - Every query built with SQLAlchemy expressions (bound parameters, no string SQL)
    - Repositories never commit; the calling service owns the transaction boundary
    - Sort columns come from an Enum whitelist, never from raw client strings

Design Decisions:
    - One class per table, constructed per request with the AsyncSession
      (ADR: same shape as the service handler classes, trivially mockable)
"""
