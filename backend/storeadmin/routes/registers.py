# Overview: Flask API routes for cash registers and device brands; parses input and returns JSON responses.

"""
Cash Register API Routes

DESIGN:
- Register CRUD (view_admin to read, manage_users to write)
- Device brand catalog: add, rename, remove
"""

from flask import Blueprint, jsonify, request

from ..decorators import require_auth, require_permission
from ..services import register_service
from ..validation import NotFoundError, ValidationError


registers_bp = Blueprint("registers", __name__, url_prefix="/api/registers")


# =============================================================================
# REGISTER MANAGEMENT
# =============================================================================

@registers_bp.get("")
@require_auth
@require_permission("view_admin")
def list_registers_route():
    """
    List cash registers.

    Query params:
    - store_id: str - only registers of this store
    """
    registers = register_service.list_registers(request.args.get("store_id"))
    return jsonify({"registers": [r.to_dict() for r in registers], "count": len(registers)}), 200


@registers_bp.post("")
@require_auth
@require_permission("manage_users")
def create_register_route():
    """
    Create a cash register.

    Request body:
    {
        "name": "Kassa 1",
        "store_id": "loc-...",
        "brand": "Epson",          (optional)
        "ip_address": "10.0.0.5"   (optional)
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        register = register_service.create_register(
            name=data.get("name"),
            store_id=data.get("store_id"),
            brand=data.get("brand"),
            ip_address=data.get("ip_address"),
            register_id=data.get("id"),
        )
        return jsonify({"register": register.to_dict()}), 201
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@registers_bp.get("/<register_id>")
@require_auth
@require_permission("view_admin")
def get_register_route(register_id: str):
    register = register_service.get_register(register_id)
    if not register:
        return jsonify({"error": "Cash register not found"}), 404
    return jsonify({"register": register.to_dict()}), 200


@registers_bp.put("/<register_id>")
@require_auth
@require_permission("manage_users")
def update_register_route(register_id: str):
    data = request.get_json(silent=True) or {}
    try:
        register = register_service.update_register(
            register_id,
            name=data.get("name"),
            store_id=data.get("store_id"),
            brand=data.get("brand"),
            ip_address=data.get("ip_address"),
        )
        return jsonify({"register": register.to_dict()}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@registers_bp.delete("/<register_id>")
@require_auth
@require_permission("manage_users")
def delete_register_route(register_id: str):
    try:
        register_service.delete_register(register_id)
        return jsonify({"deleted": register_id}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404


# =============================================================================
# BRAND CATALOG
# =============================================================================

@registers_bp.get("/brands")
@require_auth
@require_permission("view_admin")
def list_brands_route():
    return jsonify({"brands": register_service.list_brands()}), 200


@registers_bp.post("/brands")
@require_auth
@require_permission("manage_users")
def add_brand_route():
    data = request.get_json(silent=True) or {}
    try:
        brand = register_service.add_brand(data.get("name"))
        return jsonify({"brand": brand.to_dict()}), 201
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@registers_bp.put("/brands/<name>")
@require_auth
@require_permission("manage_users")
def rename_brand_route(name: str):
    data = request.get_json(silent=True) or {}
    try:
        brand = register_service.rename_brand(name, data.get("name"))
        return jsonify({"brand": brand.to_dict()}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@registers_bp.delete("/brands/<name>")
@require_auth
@require_permission("manage_users")
def remove_brand_route(name: str):
    try:
        register_service.remove_brand(name)
        return jsonify({"deleted": name}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
