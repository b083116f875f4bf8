from __future__ import annotations

from argon2 import PasswordHasher

# Argon2 hash strings encode parameters + salt
_ph = PasswordHasher()


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise ValueError("password must be non-empty")
    return _ph.hash(plain_password)
