# Overview: Service-layer operations for locations; encapsulates business logic and database work.

"""
Location Hierarchy

Two tiers: warehouses (stock sources) and stores (points of sale). A store
may link to the warehouses that supply it.

DESIGN PRINCIPLES:
- linked_warehouse_ids only exists on stores; it is dropped for warehouses
  even when supplied (normalization, not an error)
- Deleting a location never cascades. Stale ids left behind in store links,
  user scopes and register store_ids are skipped by every reader.
"""

from __future__ import annotations

from typing import Iterable

from ..extensions import db
from ..models import CashRegister, Location, LOCATION_STORE, LOCATION_TYPES, LOCATION_WAREHOUSE
from ..validation import NotFoundError, ValidationError, apply_policy, clean_id_list, clean_text, require_text
from .persistence import generate_id, remove, save


def normalize_location_type(location_type: str | None) -> str:
    value = (clean_text(location_type) or "").upper()
    if value not in LOCATION_TYPES:
        raise ValidationError(f"Location type must be one of {', '.join(LOCATION_TYPES)}")
    return value


def _normalize_links(
    location_type: str,
    linked_warehouse_ids: Iterable[str] | None,
    location_id: str | None = None,
) -> list[str] | None:
    if location_type == LOCATION_WAREHOUSE:
        return None

    links = clean_id_list(linked_warehouse_ids, "linked_warehouse_ids")
    for warehouse_id in links:
        if warehouse_id == location_id:
            raise ValidationError("A store cannot link to itself")
        warehouse = get_location(warehouse_id)
        if warehouse is None or not warehouse.is_warehouse:
            apply_policy("REFERENCE_POLICY", f"Linked location '{warehouse_id}' is not an existing warehouse")
    return links


def get_location(location_id: str | None) -> Location | None:
    if not location_id:
        return None
    return db.session.get(Location, location_id)


def require_location(location_id: str | None) -> Location:
    location = get_location(location_id)
    if not location:
        raise NotFoundError("Location not found")
    return location


def list_locations(location_type: str | None = None) -> list[Location]:
    query = db.session.query(Location)
    if location_type is not None:
        query = query.filter_by(type=normalize_location_type(location_type))
    return query.order_by(Location.name.asc(), Location.id.asc()).all()


def list_stores() -> list[Location]:
    return list_locations(LOCATION_STORE)


def list_warehouses() -> list[Location]:
    return list_locations(LOCATION_WAREHOUSE)


def create_location(
    name: str,
    location_type: str,
    linked_warehouse_ids: Iterable[str] | None = None,
    location_id: str | None = None,
) -> Location:
    name = require_text(name, "Location name")
    location_type = normalize_location_type(location_type)

    location_id = clean_text(location_id)
    if location_id is not None and get_location(location_id):
        raise ValidationError(f"Location '{location_id}' already exists")

    links = _normalize_links(location_type, linked_warehouse_ids, location_id)

    location = Location(
        id=location_id or generate_id("loc"),
        name=name,
        type=location_type,
        linked_warehouse_ids=links,
    )
    return save(location, "create location")


def update_location(
    location_id: str,
    name: str,
    location_type: str,
    linked_warehouse_ids: Iterable[str] | None = None,
) -> Location:
    location = require_location(location_id)

    name = require_text(name, "Location name")
    location_type = normalize_location_type(location_type)
    links = _normalize_links(location_type, linked_warehouse_ids, location.id)

    location.name = name
    location.type = location_type
    location.linked_warehouse_ids = links
    return save(location, "update location")


def delete_location(location_id: str) -> None:
    location = require_location(location_id)
    remove(location, "delete location")


# =============================================================================
# DERIVED VIEWS
# =============================================================================

def resolve_linked_warehouse_names(store: Location, locations: Iterable[Location] | None = None) -> list[str]:
    """
    Names of the warehouses a store links to, in link order.

    Ids that no longer resolve to an existing warehouse are skipped.
    """
    if not store.linked_warehouse_ids:
        return []

    if locations is None:
        locations = list_locations()
    warehouses = {loc.id: loc for loc in locations if loc.is_warehouse}

    return [warehouses[wid].name for wid in store.linked_warehouse_ids if wid in warehouses]


def registers_for_store(store: Location, registers: Iterable[CashRegister] | None = None) -> list[CashRegister]:
    """Cash registers whose store_id points at this store."""
    if registers is None:
        return (
            db.session.query(CashRegister)
            .filter_by(store_id=store.id)
            .order_by(CashRegister.name.asc())
            .all()
        )
    return [register for register in registers if register.store_id == store.id]
