from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class CashRegister(db.Model):
    """
    Point-of-sale device bound to one store.

    WHY: Each register is a fiscal device reachable on the store network.
    Users may be assigned one register; POS resolves the device address
    through that assignment.

    store_id is a plain id (no foreign key). brand is expected to be one of
    the DeviceBrand names but is stored as free text.
    """
    __tablename__ = "cash_registers"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    store_id = db.Column(db.String(64), nullable=False, index=True)

    brand = db.Column(db.String(64), nullable=True)
    ip_address = db.Column(db.String(45), nullable=True)  # IPv6 max length

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def __repr__(self) -> str:
        return f"<CashRegister id={self.id!r} name={self.name!r} store_id={self.store_id!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "store_id": self.store_id,
            "brand": self.brand,
            "ip_address": self.ip_address,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class DeviceBrand(db.Model):
    """Administrator-managed catalog of cash register brand names."""
    __tablename__ = "device_brands"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False, unique=True)
    version_id = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    __mapper_args__ = {"version_id_col": version_id}

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "version_id": self.version_id,
            "created_at": to_utc_z(self.created_at),
        }
