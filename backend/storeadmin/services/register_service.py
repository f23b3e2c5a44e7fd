# Overview: Service-layer operations for cash registers and the device brand catalog.

"""
Device Registry

WHY: Every POS terminal is a fiscal device bound to one store. Users can be
assigned a register, and the POS resolves the device address from it.

DESIGN PRINCIPLES:
- store_id must point at an existing store (REFERENCE_POLICY)
- brand is expected to be a catalog name (BRAND_POLICY, soft by default)
- Deleting a register never touches users assigned to it
- The brand catalog is owned here; readers get copies, never shared lists
"""

from __future__ import annotations

from typing import Iterable

from flask import current_app

from ..extensions import db
from ..models import CashRegister, DeviceBrand, Location, User
from ..validation import NotFoundError, ValidationError, apply_policy, clean_text, require_text
from .location_service import get_location
from .persistence import generate_id, remove, save


# =============================================================================
# REGISTER MANAGEMENT
# =============================================================================

def _check_register_refs(store_id: str, brand: str | None) -> None:
    store = get_location(store_id)
    if store is None or not store.is_store:
        apply_policy("REFERENCE_POLICY", f"Store '{store_id}' is not an existing store")

    if brand is not None and get_brand(brand) is None:
        apply_policy("BRAND_POLICY", f"Brand '{brand}' is not in the device brand catalog")


def get_register(register_id: str | None) -> CashRegister | None:
    if not register_id:
        return None
    return db.session.get(CashRegister, register_id)


def require_register(register_id: str | None) -> CashRegister:
    register = get_register(register_id)
    if not register:
        raise NotFoundError("Cash register not found")
    return register


def list_registers(store_id: str | None = None) -> list[CashRegister]:
    query = db.session.query(CashRegister)
    if store_id:
        query = query.filter_by(store_id=store_id)
    return query.order_by(CashRegister.name.asc(), CashRegister.id.asc()).all()


def create_register(
    name: str,
    store_id: str,
    brand: str | None = None,
    ip_address: str | None = None,
    register_id: str | None = None,
) -> CashRegister:
    """
    Create a cash register.

    Args:
        name: Display name (e.g., "Kassa 1")
        store_id: Store this register belongs to
        brand: Device brand, expected to be in the brand catalog
        ip_address: Network address of the fiscal device
        register_id: Explicit id; generated when omitted
    """
    name = require_text(name, "Cash register name")
    store_id = require_text(store_id, "store_id")
    brand = clean_text(brand)
    ip_address = clean_text(ip_address)

    register_id = clean_text(register_id)
    if register_id is not None and get_register(register_id):
        raise ValidationError(f"Cash register '{register_id}' already exists")

    _check_register_refs(store_id, brand)

    register = CashRegister(
        id=register_id or generate_id("cr"),
        name=name,
        store_id=store_id,
        brand=brand,
        ip_address=ip_address,
    )
    return save(register, "create cash register")


def update_register(
    register_id: str,
    name: str,
    store_id: str,
    brand: str | None = None,
    ip_address: str | None = None,
) -> CashRegister:
    register = require_register(register_id)

    name = require_text(name, "Cash register name")
    store_id = require_text(store_id, "store_id")
    brand = clean_text(brand)
    ip_address = clean_text(ip_address)

    _check_register_refs(store_id, brand)

    register.name = name
    register.store_id = store_id
    register.brand = brand
    register.ip_address = ip_address
    return save(register, "update cash register")


def delete_register(register_id: str) -> None:
    register = require_register(register_id)
    remove(register, "delete cash register")


def describe_register(register: CashRegister, locations: Iterable[Location] | None = None) -> str:
    """
    Display label, e.g. "Kassa 1 - Epson (10.0.0.5) - Main Store".

    The store part is omitted when the store no longer exists.
    """
    label = register.name
    if register.brand:
        label += f" - {register.brand}"
    if register.ip_address:
        label += f" ({register.ip_address})"

    if locations is None:
        store = get_location(register.store_id)
    else:
        store = next((loc for loc in locations if loc.id == register.store_id), None)
    if store is not None:
        label += f" - {store.name}"
    return label


def resolve_device_address(
    user: User | None,
    registers: Iterable[CashRegister] | None = None,
    fallback_ip: str | None = None,
) -> str | None:
    """
    IP address of the fiscal device a user's sales go to.

    A user bound to a register uses that register's address, else the
    configured fallback. Only a user with no assigned register falls back
    further to the first register that has an address.
    """
    if registers is None:
        registers = list_registers()
    registers = list(registers)
    if fallback_ip is None:
        fallback_ip = current_app.config.get("DEFAULT_DEVICE_IP")

    if user is not None and user.assigned_cash_register_id:
        assigned = next((r for r in registers if r.id == user.assigned_cash_register_id), None)
        if assigned is not None and assigned.ip_address:
            return assigned.ip_address
        return fallback_ip or None

    if fallback_ip:
        return fallback_ip

    first_with_ip = next((r for r in registers if r.ip_address), None)
    return first_with_ip.ip_address if first_with_ip else None


# =============================================================================
# BRAND CATALOG
# =============================================================================

def get_brand(name: str | None) -> DeviceBrand | None:
    if not name:
        return None
    return db.session.query(DeviceBrand).filter_by(name=name).first()


def list_brands() -> list[str]:
    rows = db.session.query(DeviceBrand).order_by(DeviceBrand.id.asc()).all()
    return [row.name for row in rows]


def add_brand(name: str) -> DeviceBrand:
    name = require_text(name, "Brand name")
    if get_brand(name):
        raise ValidationError(f"Brand '{name}' already exists")
    return save(DeviceBrand(name=name), "add device brand")


def rename_brand(old_name: str, new_name: str) -> DeviceBrand:
    """
    Rename a catalog entry.

    Registers keep the brand text they were saved with.
    """
    brand = get_brand(clean_text(old_name))
    if not brand:
        raise NotFoundError("Brand not found")

    new_name = require_text(new_name, "Brand name")
    if new_name == brand.name:
        return brand
    if get_brand(new_name):
        raise ValidationError(f"Brand '{new_name}' already exists")

    brand.name = new_name
    return save(brand, "rename device brand")


def remove_brand(name: str) -> None:
    brand = get_brand(clean_text(name))
    if not brand:
        raise NotFoundError("Brand not found")
    remove(brand, "remove device brand")


def ensure_default_brands(names: Iterable[str] | None = None) -> int:
    """Seed the brand catalog; existing names are skipped."""
    if names is None:
        names = current_app.config.get("DEFAULT_DEVICE_BRANDS", ())

    created = 0
    for name in names:
        if get_brand(name):
            continue
        add_brand(name)
        created += 1
    return created
