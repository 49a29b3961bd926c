"""Sites blueprint — /api/sites/*

Owner-facing management of published sites. Public serving does NOT go
through here; that is the tenant middleware's job.

Route Map:
  GET    /api/sites                      — list my sites
  POST   /api/sites                      — publish (create or republish)
  GET    /api/sites/<id>                 — site content (html, description)
  PUT    /api/sites/<id>/content         — replace html
  PUT    /api/sites/<id>/subdomain       — rename (409 if taken)
  PUT    /api/sites/<id>/favorite        — toggle favorite
  DELETE /api/sites/<id>                 — delete, freeing the subdomain
  GET    /api/sites/preview/<subdomain>  — public scaled-down preview page
"""

import logging

from flask import Blueprint, current_app, jsonify, make_response, render_template
from flask_login import current_user, login_required

from sitehost.blueprints import json_object, non_text_field
from sitehost.services.site_store import (
    InvalidSubdomain,
    SiteConflict,
    SiteNotFound,
    SiteStore,
    StoreUnavailable,
)

sites_bp = Blueprint("sites", __name__, url_prefix="/api/sites")

logger = logging.getLogger(__name__)

store = SiteStore()


def _root_domain():
    return current_app.config["ROOT_DOMAIN"]


def _site_json(site, status=200, include_html=False, **extra):
    body = {"success": True, "site": site.to_dict(_root_domain(), include_html)}
    body.update(extra)
    return jsonify(body), status


@sites_bp.errorhandler(SiteNotFound)
def _not_found(e):
    return jsonify({"error": "Site not found or not authorized."}), 404


@sites_bp.errorhandler(SiteConflict)
def _conflict(e):
    return jsonify({"error": "Subdomain already taken.", "subdomain": e.subdomain}), 409


@sites_bp.errorhandler(InvalidSubdomain)
def _invalid(e):
    return jsonify({"error": str(e)}), 400


@sites_bp.errorhandler(StoreUnavailable)
def _unavailable(e):
    logger.exception("Site store unavailable")
    return jsonify({"error": "Error processing site request."}), 500


@sites_bp.route("", methods=["GET"])
@login_required
def list_sites():
    sites = store.list_for_owner(current_user.id)
    return jsonify({
        "success": True,
        "sites": [s.to_dict(_root_domain()) for s in sites],
    })


@sites_bp.route("", methods=["POST"])
@login_required
def publish_site():
    """Publish a site. 201 when the subdomain is newly claimed, 200 on republish."""
    data = json_object()
    bad = non_text_field(data, "subdomain", "html", "description")
    if bad:
        return jsonify({"error": f"{bad} must be a string."}), 400

    html = data.get("html")
    subdomain = (data.get("subdomain") or "").strip()

    if not html or not subdomain:
        return jsonify({"error": "Missing required fields: subdomain and html."}), 400

    site, created = store.publish(
        current_user.id, subdomain, html, data.get("description")
    )
    return _site_json(site, status=201 if created else 200, url=site.url(_root_domain()))


@sites_bp.route("/<site_id>", methods=["GET"])
@login_required
def get_site(site_id):
    site = store.get_owned(site_id, current_user.id)
    return _site_json(site, include_html=True)


@sites_bp.route("/<site_id>/content", methods=["PUT"])
@login_required
def update_content(site_id):
    data = json_object()
    bad = non_text_field(data, "html", "description")
    if bad:
        return jsonify({"error": f"{bad} must be a string."}), 400
    html = data.get("html")
    if not html:
        return jsonify({"error": "html is required."}), 400

    site = store.update_content(site_id, current_user.id, html, data.get("description"))
    return _site_json(site)


@sites_bp.route("/<site_id>/subdomain", methods=["PUT"])
@login_required
def rename_subdomain(site_id):
    new_subdomain = json_object().get("subdomain")
    if not isinstance(new_subdomain, str) or not new_subdomain.strip():
        return jsonify({"error": "subdomain is required."}), 400

    site = store.rename_subdomain(site_id, current_user.id, new_subdomain.strip())
    return _site_json(site, url=site.url(_root_domain()))


@sites_bp.route("/<site_id>/favorite", methods=["PUT"])
@login_required
def toggle_favorite(site_id):
    favorite = json_object().get("favorite")
    if not isinstance(favorite, bool):
        return jsonify({"error": "favorite must be true or false."}), 400

    site = store.set_favorite(site_id, current_user.id, favorite)
    return _site_json(site)


@sites_bp.route("/<site_id>", methods=["DELETE"])
@login_required
def delete_site(site_id):
    subdomain = store.delete(site_id, current_user.id)
    return jsonify({
        "success": True,
        "message": "Site deleted successfully.",
        "deleted_subdomain": subdomain,
    })


@sites_bp.route("/preview/<subdomain>", methods=["GET"])
def preview(subdomain):
    """Scaled-down rendering of a published site, for dashboard thumbnails."""
    site = store.find_latest_by_subdomain(subdomain.lower())
    if site is None:
        return make_response("Site not found", 404, {"Content-Type": "text/plain"})

    response = make_response(render_template(
        "sites/preview.html",
        subdomain=site.subdomain,
        root_domain=_root_domain(),
        html=site.html,
    ))
    max_age = current_app.config.get("SITE_CACHE_MAX_AGE", 3600)
    response.headers["Cache-Control"] = f"public, max-age={max_age}"
    return response
