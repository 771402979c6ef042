"""
auth/exceptions.py -- Authentication failure hierarchy.

Every failure carries a short machine-readable ``reason``. The reason is for
server-side logs and tests only: the HTTP layer reports every token failure
with the same 401 body so callers cannot tell which check rejected them.
"""

from __future__ import annotations


class AuthFailure(Exception):
    """Base class for credential and token rejections."""

    reason = "auth_failure"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.reason)


class InvalidCredentials(AuthFailure):
    """Unknown identity or wrong secret. Deliberately indistinguishable."""

    reason = "invalid_credentials"


class MalformedToken(AuthFailure):
    """Token is missing, cannot be decoded, or lacks a required claim."""

    reason = "malformed"


class BadSignature(AuthFailure):
    reason = "bad_signature"


class BadIssuer(AuthFailure):
    reason = "bad_issuer"


class BadAudience(AuthFailure):
    reason = "bad_audience"


class TokenExpired(AuthFailure):
    reason = "expired"
