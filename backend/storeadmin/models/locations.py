from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


LOCATION_WAREHOUSE = "WAREHOUSE"
LOCATION_STORE = "STORE"
LOCATION_TYPES = (LOCATION_WAREHOUSE, LOCATION_STORE)


class Location(db.Model):
    """
    Physical site: a WAREHOUSE (stock source) or a STORE (point of sale).

    linked_warehouse_ids lists the warehouses that supply a store. It is
    NULL for warehouses. Links are not foreign keys: deleting a warehouse
    leaves its id in every store that linked it.
    """
    __tablename__ = "locations"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    type = db.Column(db.String(16), nullable=False, index=True)
    linked_warehouse_ids = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def __repr__(self) -> str:
        return f"<Location id={self.id!r} name={self.name!r} type={self.type}>"

    @property
    def is_store(self) -> bool:
        return self.type == LOCATION_STORE

    @property
    def is_warehouse(self) -> bool:
        return self.type == LOCATION_WAREHOUSE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "linked_warehouse_ids": list(self.linked_warehouse_ids) if self.linked_warehouse_ids is not None else None,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
