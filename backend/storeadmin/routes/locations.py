# Overview: Flask API routes for locations; parses input and returns JSON responses.

from flask import Blueprint, jsonify, request

from ..decorators import require_auth, require_permission
from ..services import location_service
from ..validation import NotFoundError, ValidationError


locations_bp = Blueprint("locations", __name__, url_prefix="/api/locations")


@locations_bp.get("")
@require_auth
@require_permission("view_admin")
def list_locations():
    """
    List locations.

    Query params:
    - type: WAREHOUSE | STORE
    """
    try:
        locations = location_service.list_locations(request.args.get("type"))
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"locations": [loc.to_dict() for loc in locations], "count": len(locations)}), 200


@locations_bp.post("")
@require_auth
@require_permission("manage_users")
def create_location():
    """
    Create a warehouse or store.

    Request body:
    - name: str (required)
    - type: WAREHOUSE | STORE (required)
    - linked_warehouse_ids: list[str] (stores only; ignored for warehouses)
    - id: str (optional)
    """
    data = request.get_json(silent=True) or {}
    try:
        location = location_service.create_location(
            name=data.get("name"),
            location_type=data.get("type"),
            linked_warehouse_ids=data.get("linked_warehouse_ids"),
            location_id=data.get("id"),
        )
        return jsonify({"location": location.to_dict()}), 201
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@locations_bp.get("/<location_id>")
@require_auth
@require_permission("view_admin")
def get_location(location_id: str):
    location = location_service.get_location(location_id)
    if not location:
        return jsonify({"error": "Location not found"}), 404
    return jsonify({"location": location.to_dict()}), 200


@locations_bp.put("/<location_id>")
@require_auth
@require_permission("manage_users")
def update_location(location_id: str):
    data = request.get_json(silent=True) or {}
    try:
        location = location_service.update_location(
            location_id,
            name=data.get("name"),
            location_type=data.get("type"),
            linked_warehouse_ids=data.get("linked_warehouse_ids"),
        )
        return jsonify({"location": location.to_dict()}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@locations_bp.delete("/<location_id>")
@require_auth
@require_permission("manage_users")
def delete_location(location_id: str):
    try:
        location_service.delete_location(location_id)
        return jsonify({"deleted": location_id}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404


@locations_bp.get("/<location_id>/warehouses")
@require_auth
@require_permission("view_admin")
def linked_warehouses(location_id: str):
    """Names of the warehouses supplying a store; deleted ones are left out."""
    location = location_service.get_location(location_id)
    if not location:
        return jsonify({"error": "Location not found"}), 404
    names = location_service.resolve_linked_warehouse_names(location)
    return jsonify({"location_id": location.id, "warehouses": names}), 200


@locations_bp.get("/<location_id>/registers")
@require_auth
@require_permission("view_admin")
def store_registers(location_id: str):
    location = location_service.get_location(location_id)
    if not location:
        return jsonify({"error": "Location not found"}), 404
    registers = location_service.registers_for_store(location)
    return jsonify({"location_id": location.id, "registers": [r.to_dict() for r in registers]}), 200
