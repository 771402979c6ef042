"""Unit tests for fleet/gate.py -- ResourceGate.

Covers:
- reads need no token
- every write validates the token first and never mutates on rejection
- uniqueness / not-found rules surface through the gate
- require_auth=False opens writes
- the login -> token -> create walkthrough end to end
"""

from decimal import Decimal

import pytest

from auth.exceptions import AuthFailure, BadSignature, InvalidCredentials, MalformedToken, TokenExpired
from fleet.exceptions import DuplicatePlate, VehicleNotFound
from fleet.gate import ResourceGate
from fleet.models import Vehicle, VehiclePatch
from fleet.store import DEFAULT_VEHICLES, VehicleStore


@pytest.fixture
def gate(authority):
    return ResourceGate(VehicleStore(DEFAULT_VEHICLES), authority)


@pytest.fixture
def token(authority):
    return authority.issue("admin")


def _vehicle(plate: str) -> Vehicle:
    return Vehicle(make="Kia", model="Rio", plate=plate, year=2024, color="Azul", price=Decimal("9000"))


_PATCH = VehiclePatch(make="Honda", model="Civic", year=2022, color="Negro", price=Decimal("15500"), description="")


class TestReads:
    def test_list_without_token(self, gate):
        assert len(gate.list()) == 4

    def test_get_by_plate_without_token(self, gate):
        assert gate.get_by_plate("VML0712").make == "Nissan"

    def test_get_missing(self, gate):
        with pytest.raises(VehicleNotFound):
            gate.get_by_plate("NOPE")


class TestCreate:
    def test_create_with_valid_token(self, gate, token):
        created = gate.create(_vehicle("NEW001"), token)
        assert created.id == 5
        assert gate.get_by_plate("NEW001") == created

    @pytest.mark.parametrize("bad", [None, "", "garbage"])
    def test_create_without_usable_token(self, gate, bad):
        with pytest.raises(MalformedToken):
            gate.create(_vehicle("NEW001"), bad)
        assert len(gate.list()) == 4

    def test_create_with_forged_token(self, gate, token):
        header, payload, signature = token.split(".")
        forged = f"{header}.{payload}.{'A' if signature[0] != 'A' else 'B'}{signature[1:]}"
        with pytest.raises(BadSignature):
            gate.create(_vehicle("NEW001"), forged)
        assert len(gate.list()) == 4

    def test_auth_checked_before_duplicate(self, gate):
        with pytest.raises(AuthFailure):
            gate.create(_vehicle("VWY001"), None)

    def test_duplicate_plate(self, gate, token):
        before = gate.list()
        with pytest.raises(DuplicatePlate):
            gate.create(_vehicle("VWY001"), token)
        assert gate.list() == before


class TestUpdate:
    def test_update_preserves_keys(self, gate, token):
        updated = gate.update("SKJ290", _PATCH, token)
        assert (updated.id, updated.plate) == (4, "SKJ290")
        assert updated.model == "Civic"

    def test_update_with_expired_token(self, gate, token, clock):
        clock.advance(3601)
        with pytest.raises(TokenExpired):
            gate.update("SKJ290", _PATCH, token)
        assert gate.get_by_plate("SKJ290").model == "XX"

    def test_update_missing(self, gate, token):
        before = gate.list()
        with pytest.raises(VehicleNotFound):
            gate.update("NOPE", _PATCH, token)
        assert gate.list() == before


class TestDelete:
    def test_delete_twice(self, gate, token):
        gate.delete("DDS703", token)
        with pytest.raises(VehicleNotFound):
            gate.delete("DDS703", token)
        assert len(gate.list()) == 3

    def test_delete_without_token(self, gate):
        with pytest.raises(MalformedToken):
            gate.delete("DDS703", None)
        assert gate.get_by_plate("DDS703")


class TestOpenWrites:
    def test_writes_ignore_token_when_auth_disabled(self, authority):
        gate = ResourceGate(VehicleStore(DEFAULT_VEHICLES), authority, require_auth=False)
        gate.create(_vehicle("NEW001"), None)
        gate.update("NEW001", _PATCH, "garbage")
        gate.delete("VWY001", None)
        assert [v.plate for v in gate.list()] == ["DDS703", "VML0712", "SKJ290", "NEW001"]


def test_login_issue_create_walkthrough(credential_store, authority, gate):
    identity = credential_store.resolve("admin", "1234")
    assert identity == "admin"

    token = authority.issue(identity)
    assert authority.validate(token) == "admin"

    with pytest.raises(DuplicatePlate):
        gate.create(_vehicle("VWY001"), token)

    size = len(gate.list())
    gate.create(_vehicle("NEW001"), token)
    assert len(gate.list()) == size + 1

    with pytest.raises(InvalidCredentials):
        credential_store.resolve("admin", "0000")
