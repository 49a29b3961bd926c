"""Leads blueprint — /api/leads

Contact forms on published tenant sites post here (same host, so the API
namespace bypass keeps the tenant gate out of the way). The subdomain comes
from the form, or from the tenant Host header when the form omits it.

Route Map:
  POST    /api/leads  — public; capture a lead (rate limited)
  OPTIONS /api/leads  — CORS preflight
  GET     /api/leads  — owner's most recent leads
"""

import logging

from flask import Blueprint, current_app, jsonify, make_response, request
from flask_login import current_user, login_required

from sitehost.blueprints import json_object
from sitehost.extensions import limiter
from sitehost.services import lead_service

leads_bp = Blueprint("leads", __name__, url_prefix="/api/leads")

logger = logging.getLogger(__name__)


def _cors_response(response):
    """Add CORS headers so cross-origin JS submissions work."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


def _leads_rate_limit():
    return current_app.config.get("LEADS_RATE_LIMIT", "20 per hour")


@leads_bp.route("", methods=["OPTIONS"])
def submit_preflight():
    """Handle CORS preflight requests."""
    return _cors_response(make_response("", 204))


@leads_bp.route("", methods=["POST"])
@limiter.limit(_leads_rate_limit)
def submit():
    """Accept a lead as JSON or a plain HTML form POST."""
    if request.is_json:
        data = json_object()
    else:
        data = request.form.to_dict()

    if not data:
        return _cors_response(jsonify(success=False, error="Invalid request body.")), 400

    subdomain = data.get("subdomain")
    if not subdomain:
        resolver = current_app.extensions["tenant_resolver"]
        subdomain = resolver.tenant_key(request.host)

    try:
        lead = lead_service.capture_lead(
            subdomain,
            data.get("message"),
            name=data.get("name"),
            email=data.get("email"),
        )
    except ValueError as e:
        return _cors_response(jsonify(success=False, error=str(e))), 400

    return _cors_response(jsonify(
        success=True,
        lead={"id": lead.id, "created_at": lead.created_at.isoformat() if lead.created_at else None},
    )), 200


@leads_bp.route("", methods=["GET"])
@login_required
def list_leads():
    leads = lead_service.recent_leads(current_user.id)
    return jsonify(success=True, leads=[lead.to_dict() for lead in leads])
