"""
User service tests.

Verifies:
- Creation defaults (role, password, scope lists)
- Write-time reference checks and their policies
- Full-replace updates that keep the password unless a new one is given
- Derived access rules: eligible registers, permission checks, scope
"""

import logging
from types import SimpleNamespace

import pytest

from storeadmin.models import Role, User
from storeadmin.services import auth_service, location_service, register_service, role_service, user_service
from storeadmin.validation import NotFoundError, ValidationError


class TestCreateUser:

    def test_defaults(self, app, db_session, setup_roles):
        user = user_service.create_user(username="anna", first_name="Anna")

        assert user.id.startswith("u-")
        assert user.role_id == "cashier_role"
        assert user.role_class == "STAFF"
        assert user.last_name == ""
        assert user.phone == ""
        assert user.allowed_store_ids == []
        assert user.allowed_warehouse_ids == []
        assert user.assigned_cash_register_id is None
        assert auth_service.verify_password(app.config["DEFAULT_PASSWORD"], user.password_hash)

    def test_password_is_hashed(self, db_session, setup_roles):
        user = user_service.create_user(username="anna", first_name="Anna", password="s3cret")
        assert user.password_hash != "s3cret"
        assert auth_service.verify_password("s3cret", user.password_hash)

    def test_admin_role_class(self, db_session, admin_user):
        assert admin_user.role_class == "ADMIN"
        assert admin_user.to_dict()["role"] == "ADMIN"

    def test_to_dict_hides_password(self, db_session, admin_user):
        assert "password_hash" not in admin_user.to_dict()
        assert "password" not in admin_user.to_dict()

    @pytest.mark.parametrize("field", ["username", "first_name"])
    def test_required_fields(self, db_session, setup_roles, field):
        kwargs = {"username": "anna", "first_name": "Anna", field: "  "}
        with pytest.raises(ValidationError):
            user_service.create_user(**kwargs)
        assert db_session.query(User).count() == 0

    def test_duplicate_username_rejected(self, db_session, admin_user):
        with pytest.raises(ValidationError):
            user_service.create_user(username="admin", first_name="Other")

    def test_duplicate_username_allowed_when_ignored(self, app, db_session, admin_user, monkeypatch):
        monkeypatch.setitem(app.config, "USERNAME_POLICY", "ignore")
        user_service.create_user(username="admin", first_name="Other", user_id="zz-other")
        assert db_session.query(User).filter_by(username="admin").count() == 2
        # The oldest account wins the login lookup
        assert user_service.get_user_by_username("admin").id == admin_user.id

    def test_unknown_role_rejected(self, db_session, setup_roles):
        with pytest.raises(ValidationError):
            user_service.create_user(username="anna", first_name="Anna", role_id="ghost_role")

    def test_store_scope_must_be_stores(self, db_session, setup_roles, warehouse):
        with pytest.raises(ValidationError):
            user_service.create_user(username="anna", first_name="Anna", allowed_store_ids=[warehouse.id])

    def test_warehouse_scope_must_be_warehouses(self, db_session, setup_roles, store):
        with pytest.raises(ValidationError):
            user_service.create_user(username="anna", first_name="Anna", allowed_warehouse_ids=[store.id])

    def test_register_outside_allowed_stores_warns(self, db_session, setup_roles, register, other_store, caplog):
        with caplog.at_level(logging.WARNING):
            user = user_service.create_user(
                username="anna",
                first_name="Anna",
                allowed_store_ids=[other_store.id],
                assigned_cash_register_id=register.id,
            )
        assert user.assigned_cash_register_id == register.id
        assert "REGISTER_SCOPE_POLICY" in caplog.text

    def test_register_outside_allowed_stores_rejected(self, app, db_session, setup_roles, register, other_store, monkeypatch):
        monkeypatch.setitem(app.config, "REGISTER_SCOPE_POLICY", "reject")
        with pytest.raises(ValidationError):
            user_service.create_user(
                username="anna",
                first_name="Anna",
                allowed_store_ids=[other_store.id],
                assigned_cash_register_id=register.id,
            )

    def test_register_with_no_store_restriction(self, app, db_session, setup_roles, register, monkeypatch):
        monkeypatch.setitem(app.config, "REGISTER_SCOPE_POLICY", "reject")
        user = user_service.create_user(username="anna", first_name="Anna", assigned_cash_register_id=register.id)
        assert user.assigned_cash_register_id == register.id

    def test_non_string_password_rejected(self, db_session, setup_roles):
        with pytest.raises(ValidationError, match="password must be a string"):
            user_service.create_user(username="anna", first_name="Anna", password=1234)
        assert db_session.query(User).count() == 0

    def test_invalid_policy_value(self, app, db_session, setup_roles, monkeypatch):
        monkeypatch.setitem(app.config, "REFERENCE_POLICY", "sometimes")
        with pytest.raises(ValueError, match="REFERENCE_POLICY must be one of"):
            user_service.create_user(username="anna", first_name="Anna", role_id="ghost_role")


class TestUpdateDeleteUser:

    def test_update_keeps_password_when_omitted(self, db_session, cashier_user):
        old_hash = cashier_user.password_hash
        updated = user_service.update_user(cashier_user.id, username="cashier", first_name="Carla")
        assert updated.first_name == "Carla"
        assert updated.password_hash == old_hash

    def test_update_replaces_password(self, db_session, cashier_user):
        updated = user_service.update_user(cashier_user.id, username="cashier", first_name="Carl", password="new-pass")
        assert auth_service.verify_password("new-pass", updated.password_hash)

    def test_update_rejects_non_string_password(self, db_session, cashier_user):
        old_hash = cashier_user.password_hash
        with pytest.raises(ValidationError):
            user_service.update_user(cashier_user.id, username="cashier", first_name="Carl", password=1234)
        assert user_service.get_user(cashier_user.id).password_hash == old_hash

    def test_update_is_full_replace(self, db_session, cashier_user, store):
        user_service.update_user(
            cashier_user.id, username="cashier", first_name="Carl", phone="555", allowed_store_ids=[store.id],
        )
        updated = user_service.update_user(cashier_user.id, username="cashier", first_name="Carl")
        assert updated.phone == ""
        assert updated.allowed_store_ids == []

    def test_update_may_keep_own_username(self, db_session, cashier_user):
        updated = user_service.update_user(cashier_user.id, username="cashier", first_name="Carl", role_id="admin_role")
        assert updated.role_class == "ADMIN"

    def test_update_missing_user(self, db_session, setup_roles):
        with pytest.raises(NotFoundError):
            user_service.update_user("nope", username="x", first_name="X")

    def test_delete_user(self, db_session, cashier_user):
        user_service.delete_user(cashier_user.id)
        assert user_service.get_user(cashier_user.id) is None

    def test_delete_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            user_service.delete_user("nope")


class TestEligibleCashRegisters:

    def _registers(self):
        return [
            SimpleNamespace(id="r1", store_id="s1"),
            SimpleNamespace(id="r2", store_id="s2"),
            SimpleNamespace(id="r3", store_id="s1"),
        ]

    def test_filters_by_allowed_stores(self):
        user = SimpleNamespace(allowed_store_ids=["s1"])
        result = user_service.eligible_cash_registers(user, self._registers())
        assert [r.id for r in result] == ["r1", "r3"]

    def test_empty_allowed_means_all(self):
        user = SimpleNamespace(allowed_store_ids=[])
        assert len(user_service.eligible_cash_registers(user, self._registers())) == 3

    def test_no_match(self):
        user = SimpleNamespace(allowed_store_ids=["s9"])
        assert user_service.eligible_cash_registers(user, self._registers()) == []

    def test_loads_registers_when_not_given(self, db_session, register, setup_roles):
        user = user_service.create_user(username="anna", first_name="Anna", allowed_store_ids=["s1"])
        assert [r.id for r in user_service.eligible_cash_registers(user)] == ["r1"]


class TestHasPermission:

    def test_role_grants_code(self):
        roles = [Role(id="r", name="R", permissions=["view_pos"])]
        user = SimpleNamespace(role_id="r")
        assert user_service.has_permission(user, roles, "view_pos") is True
        assert user_service.has_permission(user, roles, "view_admin") is False

    def test_missing_role_grants_nothing(self):
        user = SimpleNamespace(role_id="gone")
        assert user_service.has_permission(user, [], "view_pos") is False

    def test_no_user(self):
        assert user_service.has_permission(None, [], "view_pos") is False

    def test_user_has_permission_looks_up_role(self, db_session, admin_user, cashier_user):
        assert user_service.user_has_permission(admin_user, "manage_users") is True
        assert user_service.user_has_permission(cashier_user, "manage_users") is False
        assert user_service.user_has_permission(cashier_user, "view_pos") is True

    def test_role_change_takes_effect(self, db_session, cashier_user):
        permissions = role_service.toggle_permission(role_service.get_role("cashier_role"), "view_hr")
        role_service.update_role("cashier_role", "Cashier", permissions)
        assert user_service.user_has_permission(cashier_user, "view_hr") is True


class TestResolveScope:

    def test_resolves_live_rows(self, db_session, setup_roles, register, store, warehouse):
        user = user_service.create_user(
            username="anna",
            first_name="Anna",
            allowed_store_ids=[store.id],
            allowed_warehouse_ids=[warehouse.id],
            assigned_cash_register_id=register.id,
        )
        scope = user_service.resolve_scope(user)
        assert [loc.id for loc in scope["stores"]] == ["s1"]
        assert [loc.id for loc in scope["warehouses"]] == ["w1"]
        assert scope["cash_register"].id == "r1"

    def test_skips_deleted_references(self, db_session, setup_roles, register, store, warehouse):
        user = user_service.create_user(
            username="anna",
            first_name="Anna",
            allowed_store_ids=[store.id],
            allowed_warehouse_ids=[warehouse.id],
            assigned_cash_register_id=register.id,
        )
        register_service.delete_register(register.id)
        location_service.delete_location(warehouse.id)

        reloaded = user_service.get_user(user.id)
        scope = user_service.resolve_scope(reloaded)

        assert reloaded.allowed_warehouse_ids == ["w1"]
        assert scope["warehouses"] == []
        assert scope["cash_register"] is None
        assert [loc.id for loc in scope["stores"]] == ["s1"]


class TestProfile:

    def test_update_profile_changes_given_fields(self, db_session, cashier_user):
        user = auth_service.update_profile(cashier_user.id, phone="555-0101", last_name="  ")
        assert user.phone == "555-0101"
        assert user.last_name == ""
        assert user.role_id == "cashier_role"

    def test_update_profile_password(self, db_session, cashier_user):
        auth_service.update_profile(cashier_user.id, password="changed!")
        assert auth_service.authenticate("cashier", "changed!") is not None
        assert auth_service.authenticate("cashier", "Password123!") is None

    def test_update_profile_non_string_password(self, db_session, cashier_user):
        with pytest.raises(ValidationError):
            auth_service.update_profile(cashier_user.id, password=1234)
        assert auth_service.authenticate("cashier", "Password123!") is not None

    def test_update_profile_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            auth_service.update_profile("nope", first_name="X")

    def test_authenticate(self, db_session, admin_user):
        assert auth_service.authenticate("admin", "Password123!").id == admin_user.id
        assert auth_service.authenticate("admin", "wrong") is None
        assert auth_service.authenticate("nobody", "Password123!") is None
        assert auth_service.authenticate("admin", "") is None
        assert auth_service.authenticate("admin", 1234) is None

    def test_verify_malformed_hash(self):
        assert auth_service.verify_password("x", "not-a-bcrypt-hash") is False
