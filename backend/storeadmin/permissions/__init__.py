# Overview: Permission system package.
# Re-exports the catalog, seeded roles and lookup helpers.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    GENERAL_PERMISSIONS,
    SALES_PERMISSIONS,
    INVENTORY_PERMISSIONS,
    FINANCE_PERMISSIONS,
    STAFF_PERMISSIONS,
    ADMINISTRATION_PERMISSIONS,
)
from .roles import (
    ADMIN_ROLE_ID,
    CASHIER_ROLE_ID,
    DEFAULT_ROLES,
    ROLE_CLASS_ADMIN,
    ROLE_CLASS_STAFF,
    get_role_class,
)
from .helpers import (
    get_all_permission_codes,
    get_permissions_by_category,
    get_permission_definition,
    validate_permission_code,
)

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "GENERAL_PERMISSIONS",
    "SALES_PERMISSIONS",
    "INVENTORY_PERMISSIONS",
    "FINANCE_PERMISSIONS",
    "STAFF_PERMISSIONS",
    "ADMINISTRATION_PERMISSIONS",
    "ADMIN_ROLE_ID",
    "CASHIER_ROLE_ID",
    "DEFAULT_ROLES",
    "ROLE_CLASS_ADMIN",
    "ROLE_CLASS_STAFF",
    "get_role_class",
    "get_all_permission_codes",
    "get_permissions_by_category",
    "get_permission_definition",
    "validate_permission_code",
]
