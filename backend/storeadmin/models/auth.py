from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..permissions import ADMIN_ROLE_ID, get_role_class
from ..time_utils import to_utc_z


class Role(db.Model):
    """
    Named set of permission codes.

    DESIGN:
    - Permission codes come from the fixed catalog in storeadmin.permissions
    - Stored as a JSON list in catalog order; order carries no meaning
    - Users reference roles by role_id without a foreign key, so deleting a
      role leaves those users pointing at a missing role. Permission checks
      treat a missing role as "no permissions".
    """
    __tablename__ = "roles"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    permissions = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def __repr__(self) -> str:
        return f"<Role id={self.id!r} name={self.name!r}>"

    @property
    def permission_set(self) -> frozenset[str]:
        return frozenset(self.permissions or ())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "permissions": list(self.permissions or []),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class User(db.Model):
    """
    Staff account with one role and scoped access to locations.

    Scope references (allowed_store_ids, allowed_warehouse_ids,
    assigned_cash_register_id, role_id) are plain string ids. Nothing
    cascades when the referenced rows are deleted; readers skip ids that
    no longer resolve.

    The coarse role class (ADMIN/STAFF) is not a column: it is derived from
    role_id whenever the user is serialized.
    """
    __tablename__ = "users"

    id = db.Column(db.String(64), primary_key=True)
    username = db.Column(db.String(64), nullable=False, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    role_id = db.Column(db.String(64), nullable=False, index=True)

    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False, default="")
    phone = db.Column(db.String(32), nullable=False, default="")

    allowed_store_ids = db.Column(db.JSON, nullable=False, default=list)
    allowed_warehouse_ids = db.Column(db.JSON, nullable=False, default=list)
    assigned_cash_register_id = db.Column(db.String(64), nullable=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def __repr__(self) -> str:
        return f"<User id={self.id!r} username={self.username!r}>"

    @property
    def role_class(self) -> str:
        admin_role_id = current_app.config.get("ADMIN_ROLE_ID", ADMIN_ROLE_ID)
        return get_role_class(self.role_id, admin_role_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role_class,
            "role_id": self.role_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "allowed_store_ids": list(self.allowed_store_ids or []),
            "allowed_warehouse_ids": list(self.allowed_warehouse_ids or []),
            "assigned_cash_register_id": self.assigned_cash_register_id,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
