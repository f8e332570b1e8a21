"""
Password hashing and verification.

Plain unsalted SHA-256 — deterministic and one-way, but NOT suitable for
production (no salt, no work factor).  Kept deliberately simple; swapping
in bcrypt/argon2 would change the stored-hash contract.
"""

from __future__ import annotations

import hashlib
import hmac


def hash_password(password: str) -> str:
    """Hex SHA-256 digest of *password*.  Lone surrogates are hashed, not rejected."""
    return hashlib.sha256(password.encode("utf-8", "surrogatepass")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)
