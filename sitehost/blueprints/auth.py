"""Auth blueprint — /auth/*

JSON session auth for site owners: register, login, logout, whoami.
Flask-Login holds the principal; site mutations check it, public tenant
serving never does.
"""

import logging

from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from sitehost.blueprints import json_object
from sitehost.decorators import json_required
from sitehost.extensions import db, limiter
from sitehost.models.audit import AuditEvent
from sitehost.models.user import User

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _credentials():
    """(email, password, data) from a JSON body; non-text values count as missing."""
    data = json_object()
    email = data.get("email") if isinstance(data.get("email"), str) else ""
    password = data.get("password") if isinstance(data.get("password"), str) else ""
    return email.lower().strip(), password, data


# ──────────────────────────────────────────────
# POST /auth/register
# ──────────────────────────────────────────────

@auth_bp.route("/register", methods=["POST"])
@limiter.limit("10 per minute")
@json_required
def register():
    """Create an owner account and log it in."""
    email, password, data = _credentials()
    full_name = data.get("full_name")
    full_name = full_name.strip() if isinstance(full_name, str) else ""

    # --- Validation ---
    errors = []
    if not email:
        errors.append("Email is required.")
    if not password:
        errors.append("Password is required.")
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    if errors:
        return jsonify({"error": " ".join(errors)}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"error": "An account with this email already exists."}), 409

    user = User(
        email=email,
        password_hash=generate_password_hash(password),
        full_name=full_name or None,
    )
    db.session.add(user)
    db.session.flush()  # get user.id

    db.session.add(AuditEvent(
        actor_user_id=user.id,
        action="user.registered",
        metadata_={"email": email},
    ))
    db.session.commit()

    login_user(user)
    logger.info(f"User registered: {email}")
    return jsonify({"success": True, "user": user.to_dict()}), 201


# ──────────────────────────────────────────────
# POST /auth/login
# ──────────────────────────────────────────────

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
@json_required
def login():
    email, password, data = _credentials()

    user = User.query.filter_by(email=email).first()
    if user is None or not check_password_hash(user.password_hash, password):
        return jsonify({"error": "Invalid email or password."}), 401
    if not user.is_active:
        return jsonify({"error": "This account has been deactivated."}), 403

    login_user(user, remember=bool(data.get("remember")))
    return jsonify({"success": True, "user": user.to_dict()})


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify({"user": current_user.to_dict()})
