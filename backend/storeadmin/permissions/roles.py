# Overview: Seeded roles and the coarse ADMIN/STAFF role class.

from .helpers import get_all_permission_codes


ADMIN_ROLE_ID = "admin_role"
CASHIER_ROLE_ID = "cashier_role"

ROLE_CLASS_ADMIN = "ADMIN"
ROLE_CLASS_STAFF = "STAFF"

# role_id -> (display name, permission codes)
DEFAULT_ROLES = {
    ADMIN_ROLE_ID: ("Administrator", get_all_permission_codes()),
    CASHIER_ROLE_ID: ("Cashier", ["view_dashboard", "view_pos", "view_pos_returns"]),
}


def get_role_class(role_id, admin_role_id=ADMIN_ROLE_ID):
    """
    Coarse role class derived from a role id.

    Never stored: recomputed from role_id on every read.
    """
    return ROLE_CLASS_ADMIN if role_id == admin_role_id else ROLE_CLASS_STAFF
