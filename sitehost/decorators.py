"""
Custom route decorators.

- json_required: rejects anything but a JSON body with 415. Session-changing
  routes use it so a cross-site HTML form can never reach them.
"""

from functools import wraps

from flask import jsonify, request


def json_required(f):
    """Require a JSON request body (Content-Type: application/json)."""

    @wraps(f)
    def decorated(*args, **kwargs):
        if not request.is_json:
            return jsonify({"error": "Expected a JSON request body."}), 415
        return f(*args, **kwargs)

    return decorated
