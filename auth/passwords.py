"""
auth/passwords.py -- bcrypt hashing for seeded credential secrets.

Seeded secrets are hashed once at startup so the credential set held in
memory never contains plaintext. bcrypt.checkpw compares in constant time
and its fixed work factor lets CredentialStore equalize the timing of
"unknown identity" and "wrong secret" rejections.

bcrypt is used directly rather than through passlib: passlib's wrap-bug
detection hashes a >72 byte password, which bcrypt 4.x rejects.
"""

from __future__ import annotations

import bcrypt


def hash_password(plain: str, rounds: int = 12) -> str:
    """Return a bcrypt hash of the given plaintext secret.

    Secrets longer than 72 bytes are truncated by bcrypt. Login bodies are
    capped at 255 characters by the API models.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext secret matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash or a secret bcrypt refuses to process.
        return False
