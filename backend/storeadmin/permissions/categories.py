# Overview: Permission category constants for grouping related permissions.


class PermissionCategory:
    """Permission categories for organization and UI display."""
    GENERAL = "GENERAL"
    SALES = "SALES"
    INVENTORY = "INVENTORY"
    FINANCE = "FINANCE"
    STAFF = "STAFF"
    ADMINISTRATION = "ADMINISTRATION"

    @classmethod
    def all(cls):
        return [cls.GENERAL, cls.SALES, cls.INVENTORY, cls.FINANCE, cls.STAFF, cls.ADMINISTRATION]
