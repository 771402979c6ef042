"""
auth/tokens.py -- Bearer token issuance and validation.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry exactly five claims -- sub, iss,
       aud, iat, exp -- modelled by auth.models.TokenClaims. The signing key is
       Settings.secret_key; issuer, audience and lifetime are service-wide
       settings, never per-request input.

  Validation order: structure -> signature -> issuer -> audience -> expiry.
       Each step raises its own AuthFailure subclass so logs and tests can
       tell them apart. The HTTP layer collapses them into one 401.

       jwt.decode() is not used for the checks because it folds every
       signature and structure problem into a bare JWTError and checks expiry
       before issuer/audience. Instead the claims are read unverified, then
       jws.verify() checks the HMAC (hmac.compare_digest under the hood),
       then the claims are compared here.

  Stateless: no token registry. An issued token is valid until its exp
       claim passes; there is no revocation.

Layer rule: no imports from api/ or fleet/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from jose import JWTError, jws, jwt
from jose.exceptions import JWSError

from auth.exceptions import BadAudience, BadIssuer, BadSignature, MalformedToken, TokenExpired
from auth.models import TokenClaims
from core.config import Settings

logger = logging.getLogger("fleetgate.auth")

_ALGORITHM = "HS256"


class TokenAuthority:
    """Issues and validates signed, time-bounded identity tokens.

    clock returns the current time as epoch seconds. Tests inject a fake
    clock to move across the expiry boundary without sleeping.

    Safe to share across threads: the instance is never mutated after
    construction.
    """

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._secret_key = secret_key
        self.issuer = issuer
        self.audience = audience
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Callable[[], float] = time.time) -> "TokenAuthority":
        return cls(
            secret_key=settings.secret_key,
            issuer=settings.token_issuer,
            audience=settings.token_audience,
            ttl_seconds=settings.token_expire_seconds,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Issue
    # ------------------------------------------------------------------

    def issue(self, identity: str) -> str:
        """Return a signed token asserting identity.

        Does not re-check credentials: callers pass an identity already
        returned by CredentialStore.resolve().
        """
        now = int(self._clock())
        claims = TokenClaims(
            subject=identity,
            issuer=self.issuer,
            audience=self.audience,
            issued_at=now,
            expires_at=now + self.ttl_seconds,
        )
        return self.encode(claims)

    def encode(self, claims: TokenClaims) -> str:
        """Sign an arbitrary claim set with this authority's key."""
        return jwt.encode(claims.to_payload(), self._secret_key, algorithm=_ALGORITHM)

    # ------------------------------------------------------------------
    # Validate
    # ------------------------------------------------------------------

    def decode_claims(self, token: str | None) -> TokenClaims:
        """Parse the token's claims WITHOUT verifying the signature.

        Raises MalformedToken if the token is absent, is not a compact JWS,
        or its payload does not carry the five required claims.
        """
        if not token or not isinstance(token, str):
            raise MalformedToken("no token presented")
        try:
            payload = jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedToken(str(exc)) from exc
        return TokenClaims.from_payload(payload)

    def validate(self, token: str | None) -> str:
        """Verify token and return the identity in its subject claim.

        Raises, in check order: MalformedToken, BadSignature, BadIssuer,
        BadAudience, TokenExpired. A token is still valid at the exact second
        named by its exp claim.
        """
        claims = self.decode_claims(token)

        try:
            jws.verify(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWSError as exc:
            raise BadSignature(str(exc)) from exc

        if claims.issuer != self.issuer:
            raise BadIssuer(f"unexpected issuer {claims.issuer!r}")
        if claims.audience != self.audience:
            raise BadAudience(f"unexpected audience {claims.audience!r}")
        if self._clock() > claims.expires_at:
            raise TokenExpired(f"token for {claims.subject!r} expired at {claims.expires_at}")

        return claims.subject
