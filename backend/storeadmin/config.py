# backend/storeadmin/config.py
from __future__ import annotations
import os


def _csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/storeadmin.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///storeadmin.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Role ids with fixed meaning. A user whose role_id equals ADMIN_ROLE_ID
    # is reported with the coarse ADMIN role class; everyone else is STAFF.
    ADMIN_ROLE_ID = os.environ.get("ADMIN_ROLE_ID", "admin_role")
    DEFAULT_ROLE_ID = os.environ.get("DEFAULT_ROLE_ID", "cashier_role")

    # Placeholder password applied when a user is created without one
    DEFAULT_PASSWORD = os.environ.get("DEFAULT_PASSWORD", "1234")
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    # Fiscal device fallback when a user has no assigned register with an IP
    DEFAULT_DEVICE_IP = os.environ.get("DEFAULT_DEVICE_IP", "")
    DEFAULT_DEVICE_BRANDS = _csv(os.environ.get("DEFAULT_DEVICE_BRANDS", "Epson,Sunmi,Star,Generic"))

    # Write-time policies: "ignore", "warn" (log and continue) or "reject"
    REFERENCE_POLICY = os.environ.get("REFERENCE_POLICY", "reject")
    BRAND_POLICY = os.environ.get("BRAND_POLICY", "warn")
    USERNAME_POLICY = os.environ.get("USERNAME_POLICY", "reject")
    REGISTER_SCOPE_POLICY = os.environ.get("REGISTER_SCOPE_POLICY", "warn")

    # Browser origins allowed to call the API (admin UI dev servers)
    CORS_ORIGINS = _csv(os.environ.get(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:4173,http://127.0.0.1:4173",
    ))
