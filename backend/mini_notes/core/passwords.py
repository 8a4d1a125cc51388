"""Password Hashing — bcrypt hash/verify.

Invariants:
    - Plaintext passwords never leave this module (never logged, never stored)
    - Input longer than 72 bytes is truncated before hashing: bcrypt only ever
      reads the first 72 bytes, and current bcrypt releases reject longer input

Design Decisions:
    - bcrypt directly over passlib: passlib's bcrypt backend detection breaks on bcrypt>=4.1
    - Cost factor passed in from settings (12 in production, lower in tests)
"""

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False
