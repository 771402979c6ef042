"""
api/main.py -- FastAPI application entry point for FleetGate.

Run with:  uvicorn api.main:app --reload
           python main.py serve

Middleware stack (outermost to innermost):
  1. CORSMiddleware  -- adds CORS headers for allowed browser origins
  2. log_requests    -- one access log line per request

Lifespan builds the credential store, token authority, vehicle store and
gate from Settings and attaches them to app.state. Nothing is created at
import time, so tests can swap the lifespan and wire their own components.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.v1.auth import router as auth_router
from api.routes.v1.vehicles import router as vehicles_router
from auth.exceptions import AuthFailure
from auth.store import CredentialStore
from auth.tokens import TokenAuthority
from core.config import get_settings
from fleet.gate import ResourceGate
from fleet.store import DEFAULT_VEHICLES, VehicleStore

VERSION = "0.1.0"

_settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("fleetgate.api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the process-lifetime components and attach them to app.state.

    Startup order matters:
      1. Credential store -- bcrypt-hashes the seeded secrets.
      2. Token authority -- needs only settings.
      3. Vehicle store, then the gate that wraps it and the authority.
    """
    settings = get_settings()
    logger.info("FleetGate API starting up")
    app.state.credential_store = CredentialStore.from_plaintext(settings.credentials, rounds=settings.bcrypt_rounds)
    app.state.token_authority = TokenAuthority.from_settings(settings)
    app.state.vehicle_store = VehicleStore(DEFAULT_VEHICLES if settings.seed_vehicles else ())
    app.state.gate = ResourceGate(
        app.state.vehicle_store,
        app.state.token_authority,
        require_auth=settings.require_auth_for_writes,
    )
    logger.info(
        "Vehicle store initialized (%d vehicles, require_auth_for_writes=%s)",
        len(app.state.vehicle_store),
        settings.require_auth_for_writes,
    )

    yield

    logger.info("FleetGate API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="FleetGate API",
    description="Token-authenticated vehicle listings.",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api/v1", tags=["Auth"])
app.include_router(vehicles_router, prefix="/api/v1", tags=["Vehicles"])


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


@app.exception_handler(AuthFailure)
async def auth_failure_handler(request: Request, exc: AuthFailure) -> JSONResponse:
    """Return one fixed 401 body for every token rejection.

    The reason (bad signature, expired, wrong audience...) is logged but never
    sent to the client.
    """
    logger.warning("Auth rejected on %s %s: %s", request.method, request.url.path, exc.reason)
    return JSONResponse(
        status_code=401,
        content=ErrorResponse(
            error=ErrorDetail(code="unauthorized", message="Authentication required."),
        ).model_dump(),
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bad login or vehicle body: 422 validation_error. The store is untouched."""
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error=ErrorDetail(
                code="validation_error",
                message="Request validation failed.",
                detail=str(exc.errors()),
            )
        ).model_dump(),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Vehicle routes raise 404 vehicle_not_found and 409 duplicate_plate with
    an ErrorDetail dict as detail, passed through as is. Any other detail is
    wrapped under an http_<status> code.
    """
    if isinstance(exc.detail, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(
                code=f"http_{exc.status_code}",
                message=str(exc.detail),
            )
        ).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 internal_error; the traceback is logged, not returned."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ErrorDetail(
                code="internal_error",
                message="An unexpected error occurred.",
            )
        ).model_dump(),
    )


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/api/v1/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return API liveness and current version."""
    return HealthResponse(version=VERSION)
