"""
Cash register and device brand tests.

Verifies:
- Registers are bound to an existing store (REFERENCE_POLICY)
- Brands outside the catalog are accepted with a warning (BRAND_POLICY)
- Device address resolution order
- Brand catalog maintenance
"""

import logging
from types import SimpleNamespace

import pytest

from storeadmin.models import CashRegister
from storeadmin.services import register_service
from storeadmin.validation import NotFoundError, ValidationError


class TestCreateRegister:

    def test_create_register(self, db_session, store, setup_brands):
        register = register_service.create_register("Kassa 2", store.id, brand="Sunmi", ip_address=" 10.0.0.9 ")
        assert register.id.startswith("cr-")
        assert register.store_id == store.id
        assert register.ip_address == "10.0.0.9"

    def test_brand_and_ip_optional(self, db_session, store):
        register = register_service.create_register("Kassa 2", store.id)
        assert register.brand is None
        assert register.ip_address is None

    def test_unknown_store_rejected(self, db_session):
        with pytest.raises(ValidationError):
            register_service.create_register("Kassa", "ghost")
        assert db_session.query(CashRegister).count() == 0

    def test_warehouse_is_not_a_store(self, db_session, warehouse):
        with pytest.raises(ValidationError):
            register_service.create_register("Kassa", warehouse.id)

    def test_unknown_brand_warns(self, db_session, store, setup_brands, caplog):
        with caplog.at_level(logging.WARNING):
            register = register_service.create_register("Kassa", store.id, brand="Acme")
        assert register.brand == "Acme"
        assert "Acme" in caplog.text

    def test_unknown_brand_rejected_when_configured(self, app, db_session, store, monkeypatch):
        monkeypatch.setitem(app.config, "BRAND_POLICY", "reject")
        with pytest.raises(ValidationError):
            register_service.create_register("Kassa", store.id, brand="Acme")

    def test_name_required(self, db_session, store):
        with pytest.raises(ValidationError):
            register_service.create_register(None, store.id)


class TestUpdateDeleteRegister:

    def test_update_register(self, db_session, register, other_store):
        updated = register_service.update_register(register.id, "Kassa 9", other_store.id, brand="Star")
        assert updated.name == "Kassa 9"
        assert updated.store_id == other_store.id
        # Full replace: omitted ip is cleared
        assert updated.ip_address is None

    def test_update_missing(self, db_session, store):
        with pytest.raises(NotFoundError):
            register_service.update_register("nope", "Kassa", store.id)

    def test_delete_register(self, db_session, register):
        register_service.delete_register(register.id)
        assert register_service.get_register(register.id) is None

    def test_list_by_store(self, db_session, register, other_store):
        register_service.create_register("Kassa 5", other_store.id)
        assert [r.name for r in register_service.list_registers()] == ["Kassa 1", "Kassa 5"]
        assert [r.id for r in register_service.list_registers(register.store_id)] == ["r1"]


class TestDescribeRegister:

    def test_full_label(self, db_session, register):
        assert register_service.describe_register(register) == "Kassa 1 - Epson (10.0.0.5) - S1"

    def test_label_without_optional_parts(self, db_session, store):
        register = register_service.create_register("Kassa 2", store.id)
        assert register_service.describe_register(register) == "Kassa 2 - S1"

    def test_label_skips_missing_store(self, db_session, register):
        assert register_service.describe_register(register, locations=[]) == "Kassa 1 - Epson (10.0.0.5)"


class TestResolveDeviceAddress:

    def _registers(self):
        return [
            SimpleNamespace(id="a", ip_address=None),
            SimpleNamespace(id="b", ip_address="10.0.0.2"),
            SimpleNamespace(id="c", ip_address="10.0.0.3"),
        ]

    def test_assigned_register_wins(self, app):
        user = SimpleNamespace(assigned_cash_register_id="c")
        assert register_service.resolve_device_address(user, self._registers(), "192.168.1.1") == "10.0.0.3"

    def test_fallback_when_assigned_has_no_ip(self, app):
        user = SimpleNamespace(assigned_cash_register_id="a")
        assert register_service.resolve_device_address(user, self._registers(), "192.168.1.1") == "192.168.1.1"

    def test_first_register_with_ip(self, app):
        user = SimpleNamespace(assigned_cash_register_id=None)
        assert register_service.resolve_device_address(user, self._registers(), "") == "10.0.0.2"

    def test_assigned_without_ip_never_uses_another_register(self, app):
        user = SimpleNamespace(assigned_cash_register_id="a")
        assert register_service.resolve_device_address(user, self._registers(), "") is None

    def test_missing_assigned_register_never_uses_another_register(self, app):
        user = SimpleNamespace(assigned_cash_register_id="gone")
        assert register_service.resolve_device_address(user, self._registers(), "") is None

    def test_nothing_known(self, app):
        assert register_service.resolve_device_address(None, [], "") is None

    def test_configured_fallback(self, app, monkeypatch):
        monkeypatch.setitem(app.config, "DEFAULT_DEVICE_IP", "172.16.0.1")
        user = SimpleNamespace(assigned_cash_register_id="gone")
        assert register_service.resolve_device_address(user, self._registers()) == "172.16.0.1"


class TestBrandCatalog:

    def test_default_brands_in_order(self, db_session, setup_brands):
        assert register_service.list_brands() == ["Epson", "Sunmi", "Star", "Generic"]

    def test_seeding_is_idempotent(self, db_session, setup_brands):
        assert register_service.ensure_default_brands() == 0

    def test_add_brand(self, db_session, setup_brands):
        register_service.add_brand("Datecs")
        assert register_service.list_brands()[-1] == "Datecs"

    def test_add_duplicate_brand(self, db_session, setup_brands):
        with pytest.raises(ValidationError):
            register_service.add_brand("Epson")

    def test_rename_brand_keeps_register_text(self, db_session, register):
        register_service.rename_brand("Epson", "Epson TM")
        assert "Epson TM" in register_service.list_brands()
        assert register_service.get_register(register.id).brand == "Epson"

    def test_rename_to_existing_name(self, db_session, setup_brands):
        with pytest.raises(ValidationError):
            register_service.rename_brand("Epson", "Star")

    def test_rename_missing(self, db_session, setup_brands):
        with pytest.raises(NotFoundError):
            register_service.rename_brand("Nope", "Other")

    def test_remove_brand(self, db_session, setup_brands):
        register_service.remove_brand("Generic")
        assert "Generic" not in register_service.list_brands()

    def test_list_returns_copy(self, db_session, setup_brands):
        brands = register_service.list_brands()
        brands.append("Mutated")
        assert "Mutated" not in register_service.list_brands()
