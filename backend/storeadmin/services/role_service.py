# Overview: Service-layer operations for roles; encapsulates business logic and database work.

"""
Role Model

A role names a set of permission codes from the fixed catalog.

DESIGN PRINCIPLES:
- Updates are a full replace of name and permissions (never a merge)
- Deleting a role never checks for users that still reference it
- toggle_permission is pure: it returns a new set and persists nothing
"""

from __future__ import annotations

from typing import Iterable

from ..extensions import db
from ..models import Role
from ..permissions import DEFAULT_ROLES, get_all_permission_codes, validate_permission_code
from ..validation import NotFoundError, ValidationError, clean_text, require_text
from .persistence import generate_id, remove, save


def normalize_permissions(permissions: Iterable[str] | None) -> list[str]:
    """
    Validate permission codes and return them in catalog order.

    Duplicates collapse; an unknown code raises ValidationError.
    """
    if permissions is None:
        return []
    if isinstance(permissions, str):
        raise ValidationError("permissions must be a list of permission codes")

    codes: set[str] = set()
    for code in permissions:
        if not validate_permission_code(code):
            raise ValidationError(f"Unknown permission: {code}")
        codes.add(code)

    return [code for code in get_all_permission_codes() if code in codes]


def toggle_permission(role_or_permissions, permission_code: str) -> frozenset[str]:
    """
    Return a new permission set with permission_code flipped.

    Accepts a Role or any iterable of codes. Applying the same toggle twice
    returns the original set.
    """
    if not validate_permission_code(permission_code):
        raise ValidationError(f"Unknown permission: {permission_code}")

    if isinstance(role_or_permissions, Role):
        current = role_or_permissions.permission_set
    else:
        current = frozenset(role_or_permissions or ())

    if permission_code in current:
        return current - {permission_code}
    return current | {permission_code}


def get_role(role_id: str | None) -> Role | None:
    if not role_id:
        return None
    return db.session.get(Role, role_id)


def require_role(role_id: str | None) -> Role:
    role = get_role(role_id)
    if not role:
        raise NotFoundError("Role not found")
    return role


def list_roles() -> list[Role]:
    return db.session.query(Role).order_by(Role.name.asc(), Role.id.asc()).all()


def create_role(name: str, permissions: Iterable[str] | None = None, role_id: str | None = None) -> Role:
    name = require_text(name, "Role name")
    codes = normalize_permissions(permissions)

    role_id = clean_text(role_id)
    if role_id is None:
        role_id = generate_id("role")
    elif get_role(role_id):
        raise ValidationError(f"Role '{role_id}' already exists")

    role = Role(id=role_id, name=name, permissions=codes)
    return save(role, "create role")


def update_role(role_id: str, name: str, permissions: Iterable[str] | None = None) -> Role:
    role = require_role(role_id)

    name = require_text(name, "Role name")
    codes = normalize_permissions(permissions)

    role.name = name
    role.permissions = codes
    return save(role, "update role")


def delete_role(role_id: str) -> None:
    role = require_role(role_id)
    remove(role, "delete role")


def ensure_default_roles() -> int:
    """
    Create the seeded roles that do not exist yet.

    Existing roles are left untouched so administrator edits survive.
    Returns the number of roles created.
    """
    created = 0
    for role_id, (name, permissions) in DEFAULT_ROLES.items():
        if get_role(role_id):
            continue
        create_role(name, permissions, role_id=role_id)
        created += 1
    return created
