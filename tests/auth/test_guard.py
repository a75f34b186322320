"""Tests for the ownership guard."""

import pytest

from pocketnotes.auth.guard import Operation, check_owner, guard_resource
from pocketnotes.auth.principal import Principal
from pocketnotes.auth.schemas import AccountResponse
from pocketnotes.exceptions import Forbidden, ResourceNotFound


def make_principal(account_id: str) -> Principal:
    account = AccountResponse(id=account_id, name="Someone", email=f"{account_id}@x.com")
    return Principal(account_id=account_id, account=account)


ANN = make_principal("ann-id")
BOB = make_principal("bob-id")


class TestCheckOwner:
    """Tests for the pure ownership decision."""

    @pytest.mark.parametrize("operation", list(Operation))
    def test_owner_allowed(self, operation):
        assert check_owner(ANN, "ann-id", operation) is None

    @pytest.mark.parametrize("operation", list(Operation))
    def test_non_owner_forbidden(self, operation):
        with pytest.raises(Forbidden):
            check_owner(BOB, "ann-id", operation)

    def test_operation_values(self):
        assert {op.value for op in Operation} == {"read", "mutate", "delete"}


class TestGuardResource:
    """Tests for guard_resource (fetch, then decide)."""

    def setup_method(self):
        self.store = {"note-1": {"id": "note-1", "owner_id": "ann-id", "title": "a"}}
        self.fetched = []

    def fetch(self, resource_id):
        self.fetched.append(resource_id)
        return self.store.get(resource_id)

    def test_owner_gets_resource_back(self):
        resource = guard_resource(ANN, "note-1", Operation.MUTATE, self.fetch)

        assert resource["title"] == "a"
        assert self.fetched == ["note-1"]

    def test_missing_resource_not_found(self):
        with pytest.raises(ResourceNotFound) as exc_info:
            guard_resource(ANN, "nope", Operation.DELETE, self.fetch)

        assert exc_info.value.details == {"id": "nope"}

    def test_missing_resource_not_found_for_any_principal(self):
        """Nonexistent IDs are NotFound, never Forbidden."""
        with pytest.raises(ResourceNotFound):
            guard_resource(BOB, "nope", Operation.MUTATE, self.fetch)

    @pytest.mark.parametrize("operation", [Operation.MUTATE, Operation.DELETE])
    def test_other_owner_forbidden(self, operation):
        with pytest.raises(Forbidden):
            guard_resource(BOB, "note-1", operation, self.fetch)

    def test_custom_owner_field(self):
        store = {"x": {"user": "ann-id"}}
        resource = guard_resource(ANN, "x", Operation.READ, store.get, owner_field="user")
        assert resource == {"user": "ann-id"}

    def test_works_with_sqlite_rows(self, core, credential_store):
        """The real persistence lookup can be passed as fetch."""
        ann = credential_store.register(core, "Ann", "ann@x.com", "secret1")
        note_id = core.note.create(ann.id, "t", "c")
        principal = make_principal(ann.id)

        row = guard_resource(principal, note_id, Operation.MUTATE, core.note.get_by_id)
        assert row["id"] == note_id

        with pytest.raises(Forbidden):
            guard_resource(BOB, note_id, Operation.DELETE, core.note.get_by_id)
