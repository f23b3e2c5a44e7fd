# Overview: Service-layer operations for users; CRUD, scope checks and derived access rules.

"""
User Scoping Model

A user holds one role, a set of stores, a set of warehouses and optionally
one cash register.

WRITE-TIME CHECKS (each governed by a configurable policy):
- REFERENCE_POLICY: role_id exists; allowed stores are stores; allowed
  warehouses are warehouses
- USERNAME_POLICY: username is unique
- REGISTER_SCOPE_POLICY: the assigned register exists and belongs to one of
  the allowed stores (when any are set)

READ-TIME RULES:
- References that stopped resolving after a delete are skipped, never raised
- A missing role grants nothing
- An empty allowed-store list means "no store restriction"
"""

from __future__ import annotations

from typing import Iterable

from flask import current_app

from ..extensions import db
from ..models import CashRegister, Location, Role, User
from ..permissions import CASHIER_ROLE_ID
from ..validation import (
    NotFoundError,
    ValidationError,
    apply_policy,
    clean_id_list,
    clean_password,
    clean_text,
    require_text,
)
from . import auth_service, location_service, register_service, role_service
from .persistence import generate_id, remove, save


def get_user(user_id: str | None) -> User | None:
    if not user_id:
        return None
    return db.session.get(User, user_id)


def require_user(user_id: str | None) -> User:
    user = get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(username: str) -> User | None:
    return (
        db.session.query(User)
        .filter_by(username=username)
        .order_by(User.created_at.asc(), User.id.asc())
        .first()
    )


def list_users() -> list[User]:
    return db.session.query(User).order_by(User.username.asc(), User.id.asc()).all()


# =============================================================================
# CREATE / UPDATE / DELETE
# =============================================================================

def _check_user_refs(user_id: str | None, fields: dict) -> None:
    username = fields["username"]
    role_id = fields["role_id"]
    allowed_store_ids = fields["allowed_store_ids"]
    allowed_warehouse_ids = fields["allowed_warehouse_ids"]
    assigned_cash_register_id = fields["assigned_cash_register_id"]

    duplicate = db.session.query(User).filter(User.username == username)
    if user_id is not None:
        duplicate = duplicate.filter(User.id != user_id)
    if duplicate.first() is not None:
        apply_policy("USERNAME_POLICY", f"Username '{username}' is already taken")

    if role_service.get_role(role_id) is None:
        apply_policy("REFERENCE_POLICY", f"Role '{role_id}' does not exist")

    for store_id in allowed_store_ids:
        store = location_service.get_location(store_id)
        if store is None or not store.is_store:
            apply_policy("REFERENCE_POLICY", f"Allowed store '{store_id}' is not an existing store")

    for warehouse_id in allowed_warehouse_ids:
        warehouse = location_service.get_location(warehouse_id)
        if warehouse is None or not warehouse.is_warehouse:
            apply_policy("REFERENCE_POLICY", f"Allowed warehouse '{warehouse_id}' is not an existing warehouse")

    if assigned_cash_register_id is not None:
        register = register_service.get_register(assigned_cash_register_id)
        if register is None:
            apply_policy("REGISTER_SCOPE_POLICY", f"Cash register '{assigned_cash_register_id}' does not exist")
        elif allowed_store_ids and register.store_id not in allowed_store_ids:
            apply_policy(
                "REGISTER_SCOPE_POLICY",
                f"Cash register '{register.id}' belongs to store '{register.store_id}' outside the user's allowed stores",
            )


def _clean_user_fields(
    username,
    first_name,
    role_id,
    last_name,
    phone,
    allowed_store_ids,
    allowed_warehouse_ids,
    assigned_cash_register_id,
) -> dict:
    return {
        "username": require_text(username, "username"),
        "first_name": require_text(first_name, "first_name"),
        "role_id": clean_text(role_id) or current_app.config.get("DEFAULT_ROLE_ID", CASHIER_ROLE_ID),
        "last_name": clean_text(last_name) or "",
        "phone": clean_text(phone) or "",
        "allowed_store_ids": clean_id_list(allowed_store_ids, "allowed_store_ids"),
        "allowed_warehouse_ids": clean_id_list(allowed_warehouse_ids, "allowed_warehouse_ids"),
        "assigned_cash_register_id": clean_text(assigned_cash_register_id),
    }


def create_user(
    *,
    username: str,
    first_name: str,
    password: str | None = None,
    role_id: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
    allowed_store_ids: Iterable[str] | None = None,
    allowed_warehouse_ids: Iterable[str] | None = None,
    assigned_cash_register_id: str | None = None,
    user_id: str | None = None,
) -> User:
    """
    Create a user.

    Defaults: role_id -> DEFAULT_ROLE_ID, password -> DEFAULT_PASSWORD,
    scope lists -> empty, last_name/phone -> "".

    Raises:
        ValidationError: username or first_name empty, or a policy in
            "reject" mode refused one of the references
    """
    fields = _clean_user_fields(
        username, first_name, role_id, last_name, phone,
        allowed_store_ids, allowed_warehouse_ids, assigned_cash_register_id,
    )
    password = clean_password(password)

    user_id = clean_text(user_id)
    if user_id is not None and get_user(user_id):
        raise ValidationError(f"User '{user_id}' already exists")

    _check_user_refs(user_id, fields)

    password = password or current_app.config.get("DEFAULT_PASSWORD", "1234")
    user = User(
        id=user_id or generate_id("u"),
        password_hash=auth_service.hash_password(password),
        **fields,
    )
    return save(user, "create user")


def update_user(
    user_id: str,
    *,
    username: str,
    first_name: str,
    password: str | None = None,
    role_id: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
    allowed_store_ids: Iterable[str] | None = None,
    allowed_warehouse_ids: Iterable[str] | None = None,
    assigned_cash_register_id: str | None = None,
) -> User:
    """
    Full replace of a user's fields.

    An unset password keeps the stored hash; every other omitted field is
    reset to its default.
    """
    user = require_user(user_id)

    fields = _clean_user_fields(
        username, first_name, role_id, last_name, phone,
        allowed_store_ids, allowed_warehouse_ids, assigned_cash_register_id,
    )
    password = clean_password(password)
    _check_user_refs(user.id, fields)

    for key, value in fields.items():
        setattr(user, key, value)
    if password:
        user.password_hash = auth_service.hash_password(password)

    return save(user, "update user")


def delete_user(user_id: str) -> None:
    user = require_user(user_id)
    remove(user, "delete user")


# =============================================================================
# DERIVED ACCESS RULES
# =============================================================================

def eligible_cash_registers(user: User, registers: Iterable[CashRegister] | None = None) -> list[CashRegister]:
    """
    Registers the user may be assigned to.

    Registers in the user's allowed stores; every register when the user has
    no store restriction.
    """
    if registers is None:
        registers = register_service.list_registers()

    allowed = user.allowed_store_ids or []
    if not allowed:
        return list(registers)
    return [register for register in registers if register.store_id in allowed]


def has_permission(user: User | None, roles: Iterable[Role], permission_code: str) -> bool:
    """
    True when the user's role exists in roles and grants permission_code.

    A role that was deleted grants nothing.
    """
    if user is None:
        return False
    role = next((r for r in roles if r.id == user.role_id), None)
    if role is None:
        return False
    return permission_code in role.permission_set


def user_has_permission(user: User | None, permission_code: str) -> bool:
    if user is None:
        return False
    role = role_service.get_role(user.role_id)
    return has_permission(user, [role] if role else [], permission_code)


def resolve_scope(
    user: User,
    locations: Iterable[Location] | None = None,
    registers: Iterable[CashRegister] | None = None,
) -> dict:
    """
    Resolve the user's scope references to live rows.

    Ids that no longer point at a location of the right type, or at an
    existing register, are left out.
    """
    if locations is None:
        locations = location_service.list_locations()
    if registers is None:
        registers = register_service.list_registers()

    by_id = {loc.id: loc for loc in locations}
    stores = [by_id[sid] for sid in user.allowed_store_ids or [] if sid in by_id and by_id[sid].is_store]
    warehouses = [
        by_id[wid] for wid in user.allowed_warehouse_ids or []
        if wid in by_id and by_id[wid].is_warehouse
    ]
    cash_register = next((r for r in registers if r.id == user.assigned_cash_register_id), None)

    return {
        "stores": stores,
        "warehouses": warehouses,
        "cash_register": cash_register,
    }
