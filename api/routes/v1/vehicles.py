"""
api/routes/v1/vehicles.py -- Vehicle collection routes for the FleetGate REST API.

Routes:
  GET    /vehicles            -- list all vehicles (public)
  GET    /vehicles/{plate}    -- one vehicle by plate (public)
  POST   /vehicles            -- create vehicle (bearer token)
  PUT    /vehicles/{plate}    -- overwrite mutable fields (bearer token)
  DELETE /vehicles/{plate}    -- remove vehicle (bearer token)

Authorization lives in fleet.gate.ResourceGate, not in a router dependency:
the gate decides whether writes need a token (REQUIRE_AUTH_FOR_WRITES), and
reads never do. Handlers only extract the raw bearer token and hand it over.
An AuthFailure raised by the gate propagates to the handler in api/main.py.
"""

from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request, Response

from api.models import ErrorDetail, VehicleCreate, VehicleResponse, VehicleUpdate
from auth.dependencies import bearer_token
from fleet.exceptions import DuplicatePlate, VehicleNotFound
from fleet.gate import ResourceGate

router = APIRouter()


def _not_found(exc: VehicleNotFound) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="vehicle_not_found", message=str(exc)).model_dump(),
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


@router.get("/vehicles", response_model=list[VehicleResponse])
def list_vehicles(request: Request) -> list[VehicleResponse]:
    """Return every vehicle in the collection."""
    gate: ResourceGate = request.app.state.gate
    return [VehicleResponse.from_domain(v) for v in gate.list()]


@router.get("/vehicles/{plate}", response_model=VehicleResponse)
def get_vehicle(request: Request, plate: str) -> VehicleResponse:
    """Return the vehicle registered under plate."""
    gate: ResourceGate = request.app.state.gate
    try:
        vehicle = gate.get_by_plate(plate)
    except VehicleNotFound as exc:
        raise _not_found(exc) from exc
    return VehicleResponse.from_domain(vehicle)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


@router.post("/vehicles", response_model=VehicleResponse, status_code=201)
def create_vehicle(request: Request, response: Response, body: VehicleCreate) -> VehicleResponse:
    """Add a vehicle. The plate must not already be registered.

    Responds 201 with a Location header pointing at the new record.
    """
    gate: ResourceGate = request.app.state.gate
    vehicle = body.to_domain()
    # Header values are latin-1 only, so the plate goes in percent-encoded.
    response.headers["Location"] = f"{request.url.path}/{quote(vehicle.plate, safe='')}"
    try:
        created = gate.create(vehicle, bearer_token(request))
    except DuplicatePlate as exc:
        raise HTTPException(
            status_code=409,
            detail=ErrorDetail(code="duplicate_plate", message=str(exc)).model_dump(),
        ) from exc
    return VehicleResponse.from_domain(created)


@router.put("/vehicles/{plate}", response_model=VehicleResponse)
def update_vehicle(request: Request, plate: str, body: VehicleUpdate) -> VehicleResponse:
    """Overwrite make, model, year, color, price and description.

    id and plate in the body are ignored.
    """
    gate: ResourceGate = request.app.state.gate
    try:
        updated = gate.update(plate, body.to_patch(), bearer_token(request))
    except VehicleNotFound as exc:
        raise _not_found(exc) from exc
    return VehicleResponse.from_domain(updated)


@router.delete("/vehicles/{plate}", status_code=204)
def delete_vehicle(request: Request, plate: str) -> Response:
    """Remove the vehicle registered under plate."""
    gate: ResourceGate = request.app.state.gate
    try:
        gate.delete(plate, bearer_token(request))
    except VehicleNotFound as exc:
        raise _not_found(exc) from exc
    return Response(status_code=204)
