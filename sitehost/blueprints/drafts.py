"""Campaign drafts blueprint — /api/campaign-drafts/*

Route Map:
  GET    /api/campaign-drafts              — list my drafts
  POST   /api/campaign-drafts              — save a new draft
  GET    /api/campaign-drafts/<id>         — one draft
  DELETE /api/campaign-drafts/<id>         — delete a draft
  POST   /api/campaign-drafts/<id>/export  — export as csv / json / google-ads-editor
"""

from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from sitehost.blueprints import json_object
from sitehost.services import draft_service
from sitehost.services.draft_service import DraftNotFound

drafts_bp = Blueprint("drafts", __name__, url_prefix="/api/campaign-drafts")


@drafts_bp.errorhandler(DraftNotFound)
def _not_found(e):
    return jsonify(error="Campaign draft not found."), 404


@drafts_bp.route("", methods=["GET"])
@login_required
def list_drafts():
    drafts = draft_service.list_drafts(current_user.id)
    return jsonify(
        success=True,
        drafts=[d.to_dict() for d in drafts],
        count=len(drafts),
    )


@drafts_bp.route("", methods=["POST"])
@login_required
def save_draft():
    data = json_object()
    if not data.get("campaign_data") or not data.get("generated_copy") or not data.get("name"):
        return jsonify(error="Missing required fields."), 400

    try:
        draft = draft_service.save_draft(
            current_user.id,
            data["name"],
            data["campaign_data"],
            data["generated_copy"],
            industry=data.get("industry"),
        )
    except ValueError as e:
        return jsonify(error=str(e)), 400

    return jsonify(
        success=True,
        draft_id=draft.id,
        message="Campaign draft saved successfully",
    ), 201


@drafts_bp.route("/<draft_id>", methods=["GET"])
@login_required
def get_draft(draft_id):
    draft = draft_service.get_draft(draft_id, current_user.id)
    return jsonify(success=True, draft=draft.to_dict())


@drafts_bp.route("/<draft_id>", methods=["DELETE"])
@login_required
def delete_draft(draft_id):
    draft_service.delete_draft(draft_id, current_user.id)
    return jsonify(success=True)


@drafts_bp.route("/<draft_id>/export", methods=["POST"])
@login_required
def export_draft(draft_id):
    fmt = json_object().get("format")
    if not fmt:
        return jsonify(error="Missing format."), 400

    try:
        export = draft_service.export_draft(draft_id, current_user.id, fmt)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    return jsonify(
        success=True,
        data=export["data"],
        filename=export["filename"],
        contentType=export["content_type"],
        message="Campaign exported successfully",
    )
