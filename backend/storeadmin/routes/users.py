# Overview: Flask API routes for users and their access scope; parses input and returns JSON responses.

"""
User management routes.

Provides endpoints for:
- User CRUD (view_admin to read, manage_users to write)
- Derived views: eligible cash registers, resolved scope, permission check,
  fiscal device address
"""

from flask import Blueprint, jsonify, request

from ..decorators import require_auth, require_permission
from ..services import location_service, register_service, role_service, user_service
from ..validation import NotFoundError, ValidationError


users_bp = Blueprint("users", __name__, url_prefix="/api/users")

USER_FIELDS = (
    "username",
    "first_name",
    "password",
    "role_id",
    "last_name",
    "phone",
    "allowed_store_ids",
    "allowed_warehouse_ids",
    "assigned_cash_register_id",
)


def _user_fields(data: dict) -> dict:
    return {field: data.get(field) for field in USER_FIELDS}


@users_bp.get("")
@require_auth
@require_permission("view_admin")
def list_users():
    users = user_service.list_users()
    roles = {role.id: role.name for role in role_service.list_roles()}

    result = []
    for user in users:
        user_dict = user.to_dict()
        # Role name, or None when the role was deleted
        user_dict["role_name"] = roles.get(user.role_id)
        result.append(user_dict)

    return jsonify({"users": result, "count": len(result)}), 200


@users_bp.post("")
@require_auth
@require_permission("manage_users")
def create_user():
    """
    Create a user.

    Request body:
    - username: str (required)
    - first_name: str (required)
    - password, role_id, last_name, phone: str (optional)
    - allowed_store_ids, allowed_warehouse_ids: list[str] (optional)
    - assigned_cash_register_id: str (optional)
    """
    data = request.get_json(silent=True) or {}
    try:
        user = user_service.create_user(user_id=data.get("id"), **_user_fields(data))
        return jsonify({"user": user.to_dict()}), 201
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@users_bp.get("/<user_id>")
@require_auth
@require_permission("view_admin")
def get_user(user_id: str):
    user = user_service.get_user(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify({"user": user.to_dict()}), 200


@users_bp.put("/<user_id>")
@require_auth
@require_permission("manage_users")
def update_user(user_id: str):
    """Replace a user's fields. Omitting password keeps the current one."""
    data = request.get_json(silent=True) or {}
    try:
        user = user_service.update_user(user_id, **_user_fields(data))
        return jsonify({"user": user.to_dict()}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@users_bp.delete("/<user_id>")
@require_auth
@require_permission("manage_users")
def delete_user(user_id: str):
    try:
        user_service.delete_user(user_id)
        return jsonify({"deleted": user_id}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404


@users_bp.get("/<user_id>/eligible-registers")
@require_auth
@require_permission("view_admin")
def eligible_registers(user_id: str):
    """Registers this user may be assigned, with display labels."""
    user = user_service.get_user(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404

    locations = location_service.list_locations()
    registers = user_service.eligible_cash_registers(user)

    result = []
    for register in registers:
        register_dict = register.to_dict()
        register_dict["label"] = register_service.describe_register(register, locations)
        result.append(register_dict)

    return jsonify({"user_id": user.id, "registers": result, "count": len(result)}), 200


@users_bp.get("/<user_id>/scope")
@require_auth
@require_permission("view_admin")
def user_scope(user_id: str):
    user = user_service.get_user(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404

    scope = user_service.resolve_scope(user)
    cash_register = scope["cash_register"]
    return jsonify({
        "user_id": user.id,
        "stores": [loc.to_dict() for loc in scope["stores"]],
        "warehouses": [loc.to_dict() for loc in scope["warehouses"]],
        "cash_register": cash_register.to_dict() if cash_register else None,
    }), 200


@users_bp.get("/<user_id>/permissions/<permission_code>")
@require_auth
@require_permission("view_admin")
def check_permission(user_id: str, permission_code: str):
    user = user_service.get_user(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404
    allowed = user_service.user_has_permission(user, permission_code)
    return jsonify({"user_id": user.id, "permission": permission_code, "has_permission": allowed}), 200


@users_bp.get("/<user_id>/device-address")
@require_auth
@require_permission("view_admin")
def device_address(user_id: str):
    """Fiscal device IP this user's sales are sent to (null when none is known)."""
    user = user_service.get_user(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify({"user_id": user.id, "ip_address": register_service.resolve_device_address(user)}), 200
