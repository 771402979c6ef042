"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Tokens travel in the Authorization header as "Bearer <token>". There is no
cookie or API-key path: FleetGate is an API-only service.

bearer_token() is the soft extractor (returns None when no header is sent).
get_current_identity() validates the token and returns the identity. It lets
AuthFailure propagate; api/main.py registers one handler that turns every
AuthFailure into the same 401 response.

Layer rule: no imports from fleet/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.tokens import TokenAuthority


def bearer_token(request: Request) -> str | None:
    """Return the raw token from "Authorization: Bearer <token>", or None.

    The scheme name is matched case-insensitively per RFC 6750.
    """
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_identity(request: Request) -> str:
    """Require a valid bearer token. Raises AuthFailure otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(identity: str = Depends(get_current_identity)): ...
    """
    authority: TokenAuthority = request.app.state.token_authority
    return authority.validate(bearer_token(request))
