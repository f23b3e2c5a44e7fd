# Overview: All permission definitions organized by category.
# Each permission is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- GENERAL --

GENERAL_PERMISSIONS = [
    (
        "view_dashboard",
        "View Dashboard",
        "Open the dashboard with daily totals",
        PermissionCategory.GENERAL,
    ),
    (
        "view_reports",
        "View Reports",
        "Access sales, stock and finance reports",
        PermissionCategory.GENERAL,
    ),
]


# -- SALES --

SALES_PERMISSIONS = [
    (
        "view_pos",
        "Point of Sale",
        "Ring up sales on a cash register",
        PermissionCategory.SALES,
    ),
    (
        "view_pos_returns",
        "POS Returns",
        "Process customer returns at the register",
        PermissionCategory.SALES,
    ),
    (
        "view_sales",
        "View Sales",
        "Browse sale invoices",
        PermissionCategory.SALES,
    ),
    (
        "view_returns",
        "View Returns",
        "Browse sale and purchase return documents",
        PermissionCategory.SALES,
    ),
    (
        "view_partners",
        "View Partners",
        "Browse customers and suppliers",
        PermissionCategory.SALES,
    ),
]


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    (
        "view_products",
        "View Products",
        "Browse and edit the product catalog",
        PermissionCategory.INVENTORY,
    ),
    (
        "view_purchases",
        "View Purchases",
        "Browse and record purchase invoices",
        PermissionCategory.INVENTORY,
    ),
    (
        "view_transfer",
        "Stock Transfers",
        "Move stock between warehouses and stores",
        PermissionCategory.INVENTORY,
    ),
]


# -- FINANCE --

FINANCE_PERMISSIONS = [
    (
        "view_finance",
        "View Finance",
        "Cash and bank transactions",
        PermissionCategory.FINANCE,
    ),
    (
        "view_accounting",
        "View Accounting",
        "Chart of accounts and journal",
        PermissionCategory.FINANCE,
    ),
]


# -- STAFF --

STAFF_PERMISSIONS = [
    (
        "view_hr",
        "View HR",
        "Employees and leave requests",
        PermissionCategory.STAFF,
    ),
]


# -- ADMINISTRATION --

ADMINISTRATION_PERMISSIONS = [
    (
        "view_admin",
        "View Administration",
        "Read users, roles, locations and cash registers",
        PermissionCategory.ADMINISTRATION,
    ),
    (
        "manage_users",
        "Manage Users",
        "Create, edit and delete users, roles, locations and cash registers",
        PermissionCategory.ADMINISTRATION,
    ),
]


# Combined list of all permissions, in display order
PERMISSION_DEFINITIONS = (
    GENERAL_PERMISSIONS
    + SALES_PERMISSIONS
    + INVENTORY_PERMISSIONS
    + FINANCE_PERMISSIONS
    + STAFF_PERMISSIONS
    + ADMINISTRATION_PERMISSIONS
)
