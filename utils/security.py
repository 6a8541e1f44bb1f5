"""
security helpers:
- Argon2 password hashing via argon2-cffi
- A fixed dummy hash so unknown-email logins cost the same as wrong passwords
"""
from __future__ import annotations

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2 (random salt per call)."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against a stored Argon2 hash."""
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return ph.hash("not-a-real-password")


def burn_password_check(password: str) -> None:
    """Run a full verification against a throwaway hash; result is ignored."""
    verify_password(password, _dummy_hash())
