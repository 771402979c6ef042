"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, minimal logic). Mirrors the
approach in fleet/models.py -- dataclasses own domain shape; the store and
the token authority do the work.

Layer rule: no imports from api/ or fleet/.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from auth.exceptions import MalformedToken


@dataclass(frozen=True)
class Credential:
    """A seeded login credential.

    hashed_secret is a bcrypt hash. The plaintext secret is hashed once when
    the CredentialStore is built and is never kept.
    """

    identity: str
    hashed_secret: str


@dataclass(frozen=True)
class TokenClaims:
    """The fixed claim set carried by every FleetGate token.

    Timestamps are integer seconds since the epoch, matching the JWT
    NumericDate encoding of the registered "iat" and "exp" claims.
    """

    subject: str
    issuer: str
    audience: str
    issued_at: int
    expires_at: int

    def to_payload(self) -> dict[str, Any]:
        """Return the JWT payload using the registered claim names."""
        return {
            "sub": self.subject,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenClaims":
        """Build claims from a decoded JWT payload.

        Raises MalformedToken if a claim is missing or has the wrong type.
        Extra claims are ignored. bool is rejected for the timestamps even
        though it subclasses int.
        """
        strings = {}
        for name in ("sub", "iss", "aud"):
            value = payload.get(name)
            if not isinstance(value, str) or not value:
                raise MalformedToken(f"claim {name!r} missing or not a string")
            strings[name] = value

        times = {}
        for name in ("iat", "exp"):
            value = payload.get(name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedToken(f"claim {name!r} missing or not a number")
            times[name] = int(value)

        return cls(
            subject=strings["sub"],
            issuer=strings["iss"],
            audience=strings["aud"],
            issued_at=times["iat"],
            expires_at=times["exp"],
        )
