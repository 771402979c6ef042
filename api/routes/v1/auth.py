"""
api/routes/v1/auth.py -- Authentication REST endpoints.

Routes:
  POST /api/v1/auth/login   -- credential check; returns a bearer token
  GET  /api/v1/auth/me      -- identity behind the presented token (requires auth)

Security:
  CredentialStore.resolve() provides timing equalization -- use it, never
  inline a dict lookup plus bcrypt check.
  Cache-Control: no-store on every login response so tokens are not cached
  by intermediaries.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import ErrorDetail, ErrorResponse, LoginRequest, LoginResponse, MeResponse
from auth.dependencies import get_current_identity
from auth.exceptions import InvalidCredentials
from auth.store import CredentialStore
from auth.tokens import TokenAuthority

logger = logging.getLogger("fleetgate.api")

# Auth policy:
# - POST /api/v1/auth/login: public -- login endpoint must be unauthenticated
# - GET  /api/v1/auth/me:    requires auth (get_current_identity)
router = APIRouter()


@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Check credentials and issue a bearer token.

    Sync handler on purpose: bcrypt is CPU-bound, so FastAPI runs it in the
    thread pool instead of blocking the event loop.

    Unknown username and wrong password produce the same 401 body.
    """
    credentials: CredentialStore = request.app.state.credential_store
    authority: TokenAuthority = request.app.state.token_authority

    try:
        identity = credentials.resolve(body.username, body.password)
    except InvalidCredentials:
        logger.warning("Login rejected for %r", body.username)
        resp = JSONResponse(
            status_code=401,
            content=ErrorResponse(
                error=ErrorDetail(code="bad_credentials", message="Invalid username or password.")
            ).model_dump(),
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    token = authority.issue(identity)
    logger.info("Token issued for %s", identity)
    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(
            token=token,
            token_type="bearer",  # noqa: S106 # nosec B106 -- OAuth token type, not a password
            expires_in=authority.ttl_seconds,
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/auth/me", response_model=MeResponse)
def me(identity: str = Depends(get_current_identity)) -> MeResponse:
    """Return the identity asserted by the presented bearer token."""
    return MeResponse(identity=identity)
