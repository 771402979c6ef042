"""
fleet/models.py -- Domain dataclasses for the vehicle collection.

Pure data containers. Records are frozen: an update builds a new Vehicle with
dataclasses.replace() and swaps it into the store, so a reader holding a
reference never sees a half-applied change.

Separation of concerns: these dataclasses are the fleet's domain truth. The
Pydantic models in api/models.py own the HTTP contract and are mapped to and
from these in the route handlers.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

# Fields an update may overwrite. id and plate are identity, not content.
MUTABLE_FIELDS = ("make", "model", "year", "color", "price", "description")


@dataclass(frozen=True)
class Vehicle:
    """A vehicle listing, keyed by its licence plate.

    plate is unique across the live collection. id is None until the store
    assigns one on insert (callers may also supply their own).
    """

    make: str
    model: str
    plate: str
    year: int
    color: str
    price: Decimal
    description: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class VehiclePatch:
    """Replacement values for the mutable fields of an existing Vehicle."""

    make: str
    model: str
    year: int
    color: str
    price: Decimal
    description: str = ""
