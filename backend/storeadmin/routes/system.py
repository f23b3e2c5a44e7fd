# backend/storeadmin/routes/system.py
"""
System health endpoint.

Public: no credentials needed.
"""

import time
from flask import Blueprint, current_app, jsonify
from ..extensions import db
from ..models import CashRegister, Location, Role, User

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity with one count per entity table.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        details = {
            "roles": db.session.query(Role).count(),
            "locations": db.session.query(Location).count(),
            "cash_registers": db.session.query(CashRegister).count(),
            "users": db.session.query(User).count(),
        }
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


@system_bp.get("/health")
def health():
    database = check_database_health()
    status_code = 200 if database["status"] == "healthy" else 503
    return jsonify({"status": database["status"], "database": database}), status_code
