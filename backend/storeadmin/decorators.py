# Overview: Request and permission decorators for API routes.

from functools import wraps
from flask import request, jsonify, g

from .services import auth_service, user_service


def _is_authenticated() -> bool:
    return hasattr(g, 'current_user')


def _unauthorized(message: str):
    response = jsonify({"error": message})
    response.status_code = 401
    response.headers["WWW-Authenticate"] = 'Basic realm="storeadmin"'
    return response


def require_auth(f):
    """
    Require HTTP Basic credentials on the request.

    Sets g.current_user to the authenticated User.

    SECURITY: Returns 401 if:
    - No Authorization header, or a non-Basic scheme
    - Unknown username or wrong password
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth = request.authorization

        if auth is None or auth.type != "basic":
            return _unauthorized("Authentication required")

        user = auth_service.authenticate(auth.username, auth.password)
        if user is None:
            return _unauthorized("Invalid username or password")

        g.current_user = user
        return f(*args, **kwargs)

    return decorated_function


def require_permission(permission_code: str):
    """
    Require a specific permission on the current user's role.

    A user whose role was deleted holds no permissions.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_auth was called first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if not user_service.user_has_permission(g.current_user, permission_code):
                return jsonify({
                    "error": "Permission denied",
                    "required_permission": permission_code,
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
