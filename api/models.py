"""
API request and response models for FleetGate REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in fleet/models.py, which
own the internal domain representation. Route handlers map between the two.

Separation of concerns: fleet/ models = domain truth; api/ models = API contract.
"""

from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from fleet.models import Vehicle, VehiclePatch

# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/auth/login.

    Accepts username/password or identity/secret. No whitespace stripping:
    credentials are compared exactly.
    """

    username: str = Field(
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("username", "identity"),
    )
    password: str = Field(
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("password", "secret"),
    )


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    token_type: str = "bearer"
    expires_in: int


class MeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: str


# ---------------------------------------------------------------------------
# Vehicles
# ---------------------------------------------------------------------------


class VehicleCreate(BaseModel):
    """Request body for POST /api/v1/vehicles.

    id is optional; the store assigns the next free id when it is omitted.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = Field(default=None, ge=1)
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    plate: str = Field(min_length=1, max_length=20)
    year: int = Field(ge=1886, le=2100)
    color: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(ge=0)
    description: str = Field(default="", max_length=1000)

    def to_domain(self) -> Vehicle:
        return Vehicle(
            id=self.id,
            make=self.make,
            model=self.model,
            plate=self.plate,
            year=self.year,
            color=self.color,
            price=self.price,
            description=self.description,
        )


class VehicleUpdate(BaseModel):
    """Request body for PUT /api/v1/vehicles/{plate}.

    id and plate are accepted so clients can send back a full record, but
    they are ignored: the plate in the path selects the vehicle and neither
    key can be changed.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = None
    plate: Optional[str] = None
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1886, le=2100)
    color: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(ge=0)
    description: str = Field(default="", max_length=1000)

    def to_patch(self) -> VehiclePatch:
        return VehiclePatch(
            make=self.make,
            model=self.model,
            year=self.year,
            color=self.color,
            price=self.price,
            description=self.description,
        )


class VehicleResponse(BaseModel):
    """One vehicle. price is rendered as exact decimal text ("12500.50")."""

    model_config = ConfigDict(frozen=True)

    id: int
    make: str
    model: str
    plate: str
    year: int
    color: str
    price: Decimal
    description: str

    @classmethod
    def from_domain(cls, vehicle: Vehicle) -> "VehicleResponse":
        """Build a VehicleResponse from a fleet Vehicle.

        Factory Method -- the mapping lives here, colocated with the output
        model, rather than being repeated in every route handler.
        """
        return cls(
            id=vehicle.id,
            make=vehicle.make,
            model=vehicle.model,
            plate=vehicle.plate,
            year=vehicle.year,
            color=vehicle.color,
            price=vehicle.price,
            description=vehicle.description,
        )


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
