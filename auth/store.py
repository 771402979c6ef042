"""
auth/store.py -- In-memory credential store.

The credential set is fixed for the lifetime of the process: it is seeded
from Settings.credentials when the application starts and there is no API to
add or remove entries. Secrets are held only as bcrypt hashes.

resolve() is the only lookup. It never tells the caller *why* a login failed
(unknown identity vs. wrong secret) and takes the same time in both cases, so
the login endpoint cannot be used to enumerate identities.

Layer rule: no imports from api/ or fleet/.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from auth.exceptions import InvalidCredentials
from auth.models import Credential
from auth.passwords import hash_password, verify_password

logger = logging.getLogger("fleetgate.auth")


class CredentialStore:
    """Fixed set of (identity, secret) pairs.

    Usage:
        store = CredentialStore.from_plaintext({"admin": "1234"})
        identity = store.resolve("admin", "1234")   # -> "admin"
        store.resolve("admin", "nope")              # raises InvalidCredentials
    """

    def __init__(self, credentials: Iterable[Credential], rounds: int = 12) -> None:
        self._by_identity: dict[str, Credential] = {}
        for cred in credentials:
            if cred.identity in self._by_identity:
                raise ValueError(f"duplicate identity in credential seed: {cred.identity!r}")
            self._by_identity[cred.identity] = cred
        # Timing equalization hash. Computed at the same cost factor as the
        # seeded hashes so a miss costs as much as a wrong secret.
        self._dummy_hash = hash_password("fleetgate_timing_dummy", rounds=rounds)

    @classmethod
    def from_plaintext(cls, pairs: Mapping[str, str], rounds: int = 12) -> "CredentialStore":
        """Hash each plaintext secret and build a store from the result."""
        creds = [
            Credential(identity=identity, hashed_secret=hash_password(secret, rounds=rounds))
            for identity, secret in pairs.items()
        ]
        logger.info("Credential store seeded (%d identities)", len(creds))
        return cls(creds, rounds=rounds)

    def __len__(self) -> int:
        return len(self._by_identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._by_identity

    def resolve(self, identity: str, secret: str) -> str:
        """Return identity if (identity, secret) is a seeded pair.

        Both fields are compared case-sensitively. Raises InvalidCredentials
        otherwise, with the same message whichever field was wrong.
        """
        cred = self._by_identity.get(identity)
        if cred is None:
            # Do NOT return before running bcrypt.
            verify_password(secret, self._dummy_hash)
            raise InvalidCredentials("invalid identity or secret")
        if not verify_password(secret, cred.hashed_secret):
            raise InvalidCredentials("invalid identity or secret")
        return cred.identity
