"""
fleet/store.py -- Thread-safe in-memory vehicle collection.

Pattern: Repository. VehicleStore is the one interface to the collection;
route handlers and the gate never touch the underlying dict.

Concurrency: FastAPI runs sync route handlers in a thread pool, so every
method takes the same lock.
  - insert() checks plate uniqueness and inserts inside one critical
    section, so two concurrent creates with the same plate cannot both pass.
  - replace() swaps in a new frozen Vehicle -- readers see the old record or
    the new one, never a mix.
  - list() copies the values under the lock; callers can iterate the result
    while other threads mutate the store.

Storage is a dict keyed by plate (insertion ordered), so lookups are O(1)
and list() keeps creation order.

Usage:
    store = VehicleStore(DEFAULT_VEHICLES)
    store.insert(Vehicle(make="Kia", model="Rio", plate="NEW001", ...))
    store.get("NEW001")
    store.replace("NEW001", VehiclePatch(...))
    store.remove("NEW001")
"""

import dataclasses
import logging
import threading
from collections.abc import Iterable
from decimal import Decimal

from fleet.exceptions import DuplicatePlate, VehicleNotFound
from fleet.models import MUTABLE_FIELDS, Vehicle, VehiclePatch

logger = logging.getLogger("fleetgate.fleet")

_SEED_ROWS = [
    # id, make, model, plate, year, color, price, description
    (1, "Toyota", "XX", "VWY001", 2023, "Gris", "16000", "Carro nuevo"),
    (2, "Mercedes", "XX", "DDS703", 2020, "Gris", "20000", "Carro nuevo"),
    (3, "Nissan", "XX", "VML0712", 2025, "Gris", "15000", "Carro nuevo"),
    (4, "Honda", "XX", "SKJ290", 2021, "Gris", "14000", "Carro nuevo"),
]

DEFAULT_VEHICLES: tuple[Vehicle, ...] = tuple(
    Vehicle(id=i, make=make, model=model, plate=plate, year=year, color=color, price=Decimal(price), description=desc)
    for i, make, model, plate, year, color, price, desc in _SEED_ROWS
)


class VehicleStore:
    def __init__(self, seed: Iterable[Vehicle] = ()) -> None:
        self._lock = threading.Lock()
        self._by_plate: dict[str, Vehicle] = {}
        for vehicle in seed:
            self.insert(vehicle)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_plate)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> list[Vehicle]:
        """Return a snapshot of every vehicle in insertion order."""
        with self._lock:
            return list(self._by_plate.values())

    def get(self, plate: str) -> Vehicle:
        """Return the vehicle with this plate. Raises VehicleNotFound."""
        with self._lock:
            vehicle = self._by_plate.get(plate)
        if vehicle is None:
            raise VehicleNotFound(plate)
        return vehicle

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, vehicle: Vehicle) -> Vehicle:
        """Add a vehicle. Raises DuplicatePlate if the plate is taken.

        A vehicle without an id gets max(existing ids) + 1. Returns the
        stored record, which differs from the argument only in that case.
        """
        with self._lock:
            if vehicle.plate in self._by_plate:
                raise DuplicatePlate(vehicle.plate)
            if vehicle.id is None:
                vehicle = dataclasses.replace(vehicle, id=self._next_id())
            self._by_plate[vehicle.plate] = vehicle
        logger.debug("Vehicle %s added (id=%s)", vehicle.plate, vehicle.id)
        return vehicle

    def replace(self, plate: str, patch: VehiclePatch) -> Vehicle:
        """Overwrite the mutable fields of the vehicle with this plate.

        id and plate are kept. Raises VehicleNotFound.
        """
        changes = {name: getattr(patch, name) for name in MUTABLE_FIELDS}
        with self._lock:
            current = self._by_plate.get(plate)
            if current is None:
                raise VehicleNotFound(plate)
            updated = dataclasses.replace(current, **changes)
            self._by_plate[plate] = updated
        logger.debug("Vehicle %s replaced", plate)
        return updated

    def remove(self, plate: str) -> None:
        """Delete the vehicle with this plate. Raises VehicleNotFound."""
        with self._lock:
            if self._by_plate.pop(plate, None) is None:
                raise VehicleNotFound(plate)
        logger.debug("Vehicle %s removed", plate)

    def _next_id(self) -> int:
        # Caller holds the lock.
        ids = [v.id for v in self._by_plate.values() if v.id is not None]
        return max(ids, default=0) + 1
