from .auth import Role, User
from .locations import Location, LOCATION_STORE, LOCATION_TYPES, LOCATION_WAREHOUSE
from .registers import CashRegister, DeviceBrand

__all__ = [
    'Role', 'User',
    'Location', 'LOCATION_STORE', 'LOCATION_TYPES', 'LOCATION_WAREHOUSE',
    'CashRegister', 'DeviceBrand',
]
