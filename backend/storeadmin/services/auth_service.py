# Overview: Service-layer operations for auth; password hashing, credential checks and self-service profile edits.

"""
Authentication Service

Credentials are checked on every request (HTTP Basic); there are no
session tokens.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor from BCRYPT_ROUNDS, default 12)
- Placeholder passwords are hashed like any other password
- Failed lookups and failed password checks are indistinguishable to callers
"""

from __future__ import annotations

import bcrypt
from flask import current_app

from ..extensions import db
from ..models import User
from ..validation import NotFoundError, clean_password, clean_text
from .persistence import save


def hash_password(password: str) -> str:
    rounds = int(current_app.config.get("BCRYPT_ROUNDS", 12))
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def authenticate(username: str | None, password: str | None) -> User | None:
    """Return the user whose credentials match, or None."""
    username = clean_text(username)
    if username is None or not password or not isinstance(password, str):
        return None

    user = (
        db.session.query(User)
        .filter_by(username=username)
        .order_by(User.created_at.asc(), User.id.asc())
        .first()
    )
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def update_profile(
    user_id: str,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
    password: str | None = None,
) -> User:
    """
    Self-service profile edit.

    Only supplied, non-empty fields change; role and scope are untouched.
    """
    user = db.session.get(User, user_id) if user_id else None
    if not user:
        raise NotFoundError("User not found")

    first_name = clean_text(first_name)
    last_name = clean_text(last_name)
    phone = clean_text(phone)
    password = clean_password(password)

    if first_name:
        user.first_name = first_name
    if last_name:
        user.last_name = last_name
    if phone:
        user.phone = phone
    if password:
        user.password_hash = hash_password(password)

    return save(user, "update profile")
