"""
Tests for the client repository.
"""
import pytest

from core.errors import NotFoundError, ValidationError
from core.models import Client
from core.services.clients import (
    add_client,
    get_client,
    list_active_clients,
    list_clients,
    search_clients,
    set_client_active,
    update_client,
    validate_client_input,
)
from core.services.items import add_item
from core.store import CLIENTS_KEY


class TestAddClient:
    def test_add_assigns_id_and_active(self, store):
        c = add_client(store, name="Prime Graphics", phone="123", billing_name="Prime Graphics Inc.")
        assert c.id == 1
        assert c.is_active is True
        assert list_clients(store) == [c]

    def test_blank_optional_fields_stored_as_none(self, store):
        c = add_client(store, name="Walk-in", phone="  ", billing_name="")
        assert c.phone is None
        assert c.billing_name is None

    def test_ids_strictly_increasing(self, store):
        ids = []
        for n in range(4):
            ids.append(add_client(store, name=f"Client {n}").id)
            # Item creation does not touch the client counter.
            add_item(store, sku=f"SKU-{n}", name="x", uom="sheets")
        assert ids == [1, 2, 3, 4]

    def test_persisted_layout(self, store):
        add_client(store, name="A")
        assert store.get(CLIENTS_KEY) == [
            {"id": 1, "name": "A", "phone": None, "billing_name": None, "is_active": True}
        ]


class TestUpdateClient:
    def test_update_replaces_record(self, store):
        c = add_client(store, name="Old Name")
        c.name = "New Name"
        c.phone = "555"
        update_client(store, c)
        assert get_client(store, c.id).name == "New Name"
        assert get_client(store, c.id).phone == "555"

    def test_update_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            update_client(store, Client(id=99, name="Ghost"))

    def test_deactivate_hides_from_active_list(self, store):
        a = add_client(store, name="A")
        b = add_client(store, name="B")
        set_client_active(store, a.id, False)

        assert [c.id for c in list_active_clients(store)] == [b.id]
        assert len(list_clients(store)) == 2

    def test_set_active_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            set_client_active(store, 5, False)


class TestSearchAndValidation:
    def test_search_is_case_insensitive(self, store):
        add_client(store, name="Creative Solutions")
        add_client(store, name="Prime Graphics")
        assert [c.name for c in search_clients(store, "CREAT")] == ["Creative Solutions"]

    def test_name_required(self):
        with pytest.raises(ValidationError):
            validate_client_input("   ")
        assert validate_client_input("  Acme ") == "Acme"
