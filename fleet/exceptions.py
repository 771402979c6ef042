"""
fleet/exceptions.py -- Errors raised by the vehicle store and gate.

Unlike auth failures these carry enough detail (the plate) for a legitimate
client to correct its request.
"""


class FleetError(Exception):
    """Base class for vehicle collection errors."""


class VehicleNotFound(FleetError):
    def __init__(self, plate: str) -> None:
        super().__init__(f"No vehicle with plate {plate!r}.")
        self.plate = plate


class DuplicatePlate(FleetError):
    def __init__(self, plate: str) -> None:
        super().__init__(f"A vehicle with plate {plate!r} already exists.")
        self.plate = plate
