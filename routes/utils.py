import os
from functools import wraps

from flask import jsonify, redirect, request, session, url_for

# ── shared paths ──
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
UPLOAD_DIR = os.path.join(BASE_DIR, "uploads")


def parse_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# ── auth decorator ──
def require_admin(f):
    """Admin session guard.

    GET: redirect to the login page when not signed in.
    Other methods: JSON 401.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not session.get("is_admin"):
            if request.method == "GET":
                return redirect(url_for("auth.login", next=request.path))
            return jsonify({"error": "Unauthorized.", "success": False,
                            "message": "Unauthorized."}), 401
        return f(*args, **kwargs)

    return decorated_function
