"""
fleet/gate.py -- Token-gated access to the vehicle collection.

ResourceGate is the only thing the HTTP layer talks to for vehicles. Reads
pass straight through to the store. Every write first validates the bearer
token with the TokenAuthority; an AuthFailure propagates before the store is
touched, so a rejected request never mutates the collection.

require_auth=False turns the gate into a pass-through for writes as well
(REQUIRE_AUTH_FOR_WRITES=false). Tokens are then ignored entirely.
"""

from __future__ import annotations

import logging

from auth.tokens import TokenAuthority
from fleet.models import Vehicle, VehiclePatch
from fleet.store import VehicleStore

logger = logging.getLogger("fleetgate.fleet")


class ResourceGate:
    def __init__(self, store: VehicleStore, authority: TokenAuthority, require_auth: bool = True) -> None:
        self.store = store
        self.authority = authority
        self.require_auth = require_auth

    def _authorize(self, token: str | None, action: str) -> str | None:
        """Return the caller identity, or None when writes are open."""
        if not self.require_auth:
            return None
        identity = self.authority.validate(token)
        logger.debug("%s authorized for %s", action, identity)
        return identity

    # ------------------------------------------------------------------
    # Reads (no auth)
    # ------------------------------------------------------------------

    def list(self) -> list[Vehicle]:
        return self.store.list()

    def get_by_plate(self, plate: str) -> Vehicle:
        return self.store.get(plate)

    # ------------------------------------------------------------------
    # Writes (token required unless require_auth is off)
    # ------------------------------------------------------------------

    def create(self, vehicle: Vehicle, token: str | None) -> Vehicle:
        """Validate token, then insert. Raises AuthFailure or DuplicatePlate."""
        identity = self._authorize(token, "create")
        created = self.store.insert(vehicle)
        logger.info("Vehicle %s created by %s", created.plate, identity or "anonymous")
        return created

    def update(self, plate: str, patch: VehiclePatch, token: str | None) -> Vehicle:
        """Validate token, then overwrite mutable fields. Raises AuthFailure or VehicleNotFound."""
        identity = self._authorize(token, "update")
        updated = self.store.replace(plate, patch)
        logger.info("Vehicle %s updated by %s", plate, identity or "anonymous")
        return updated

    def delete(self, plate: str, token: str | None) -> None:
        """Validate token, then remove. Raises AuthFailure or VehicleNotFound."""
        identity = self._authorize(token, "delete")
        self.store.remove(plate)
        logger.info("Vehicle %s deleted by %s", plate, identity or "anonymous")
