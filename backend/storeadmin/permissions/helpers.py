# Overview: Lookups over the permission catalog, indexed by code.

from .definitions import PERMISSION_DEFINITIONS


_BY_CODE = {
    code: {"code": code, "name": name, "description": description, "category": category}
    for code, name, description, category in PERMISSION_DEFINITIONS
}


def get_all_permission_codes():
    """Every permission code, in catalog order."""
    return list(_BY_CODE)


def get_permissions_by_category(category):
    return [perm for perm in PERMISSION_DEFINITIONS if perm[3] == category]


def get_permission_definition(code):
    """Definition dict for a code, or None for an unknown code."""
    definition = _BY_CODE.get(code)
    return dict(definition) if definition else None


def validate_permission_code(code):
    return code in _BY_CODE
