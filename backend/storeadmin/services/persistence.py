# Overview: Service-layer persistence boundary; commits single-entity writes and maps database failures.

from __future__ import annotations

import uuid

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..validation import PersistenceError


def generate_id(prefix: str) -> str:
    """Fresh opaque id, e.g. "loc-3f9a1c0b7d2e"."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def commit(action: str) -> None:
    """
    Commit the current session.

    Any database failure is rolled back and re-raised as PersistenceError.
    There is no retry: every operation is a single entity write and the
    caller reports success or failure as a whole.
    """
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Failed to %s", action)
        raise PersistenceError(f"Failed to {action}") from exc


def save(entity, action: str):
    db.session.add(entity)
    commit(action)
    return entity


def remove(entity, action: str) -> None:
    entity_id = entity.id
    db.session.delete(entity)
    commit(action)
    current_app.logger.info("Completed %s (id=%s)", action, entity_id)
