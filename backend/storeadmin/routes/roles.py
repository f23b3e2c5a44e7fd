# Overview: Flask API routes for roles and the permission catalog; parses input and returns JSON responses.

from flask import Blueprint, jsonify, request

from ..decorators import require_auth, require_permission
from ..permissions import PERMISSION_DEFINITIONS, get_permission_definition, get_permissions_by_category
from ..services import role_service
from ..validation import NotFoundError, ValidationError


roles_bp = Blueprint("roles", __name__, url_prefix="/api")


@roles_bp.get("/permissions")
@require_auth
@require_permission("view_admin")
def list_permissions():
    """
    List the permission catalog.

    Query params:
    - category: str - only permissions in this category
    """
    category = request.args.get("category")
    definitions = get_permissions_by_category(category) if category else PERMISSION_DEFINITIONS
    permissions = [get_permission_definition(perm[0]) for perm in definitions]
    return jsonify({"permissions": permissions, "count": len(permissions)}), 200


@roles_bp.get("/roles")
@require_auth
@require_permission("view_admin")
def list_roles():
    roles = role_service.list_roles()
    return jsonify({"roles": [role.to_dict() for role in roles], "count": len(roles)}), 200


@roles_bp.post("/roles")
@require_auth
@require_permission("manage_users")
def create_role():
    """
    Create a role.

    Request body:
    - name: str (required)
    - permissions: list[str] (optional, defaults to none)
    - id: str (optional)
    """
    data = request.get_json(silent=True) or {}
    try:
        role = role_service.create_role(
            name=data.get("name"),
            permissions=data.get("permissions"),
            role_id=data.get("id"),
        )
        return jsonify({"role": role.to_dict()}), 201
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@roles_bp.get("/roles/<role_id>")
@require_auth
@require_permission("view_admin")
def get_role(role_id: str):
    role = role_service.get_role(role_id)
    if not role:
        return jsonify({"error": "Role not found"}), 404
    return jsonify({"role": role.to_dict()}), 200


@roles_bp.put("/roles/<role_id>")
@require_auth
@require_permission("manage_users")
def update_role(role_id: str):
    """Replace a role's name and permission set."""
    data = request.get_json(silent=True) or {}
    try:
        role = role_service.update_role(
            role_id,
            name=data.get("name"),
            permissions=data.get("permissions"),
        )
        return jsonify({"role": role.to_dict()}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@roles_bp.post("/roles/<role_id>/toggle")
@require_auth
@require_permission("manage_users")
def toggle_role_permission(role_id: str):
    """
    Flip one permission on a role and save the result.

    Request body:
    - permission: str (required)
    """
    data = request.get_json(silent=True) or {}
    try:
        role = role_service.require_role(role_id)
        permissions = role_service.toggle_permission(role, data.get("permission"))
        role = role_service.update_role(role_id, name=role.name, permissions=permissions)
        return jsonify({"role": role.to_dict()}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400


@roles_bp.delete("/roles/<role_id>")
@require_auth
@require_permission("manage_users")
def delete_role(role_id: str):
    try:
        role_service.delete_role(role_id)
        return jsonify({"deleted": role_id}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
