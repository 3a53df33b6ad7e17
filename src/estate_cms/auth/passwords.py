"""
estate_cms.auth.passwords

Password hashing for staff accounts (bcrypt).
"""

from __future__ import annotations

import bcrypt


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Corrupt or non-bcrypt hash in storage; treat as a mismatch.
        return False
