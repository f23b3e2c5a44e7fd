# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

"""
Authentication routes.

There are no tokens: /login only checks a username/password pair and
returns the user. Other endpoints authenticate every request with HTTP
Basic credentials.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth
from ..services import auth_service, role_service
from ..validation import NotFoundError, ValidationError

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _user_payload(user) -> dict:
    role = role_service.get_role(user.role_id)
    payload = user.to_dict()
    payload["permissions"] = list(role.permissions) if role else []
    return payload


@auth_bp.post("/login")
def login_route():
    """
    Check credentials.

    Request body:
    {
        "username": "admin",
        "password": "..."
    }
    """
    try:
        data = request.get_json(silent=True) or {}
        user = auth_service.authenticate(data.get("username"), data.get("password"))
        if user is None:
            return jsonify({"error": "Invalid credentials"}), 401

        return jsonify({"user": _user_payload(user), "message": "Login successful"}), 200

    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.get("/me")
@require_auth
def me_route():
    return jsonify({"user": _user_payload(g.current_user)}), 200


@auth_bp.patch("/profile")
@require_auth
def update_profile_route():
    """
    Edit the caller's own name, phone or password.

    Request body (all optional): first_name, last_name, phone, password
    """
    data = request.get_json(silent=True) or {}
    try:
        user = auth_service.update_profile(
            g.current_user.id,
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            phone=data.get("phone"),
            password=data.get("password"),
        )
        return jsonify({"user": _user_payload(user)}), 200
    except NotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400
