"""Keyword favorites blueprint — /api/keyword-favorites

  GET    — list my favorites, newest first
  PUT    — save a keyword (insert, or refresh metrics if already saved)
  DELETE — remove a keyword
"""

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from sitehost.blueprints import json_object
from sitehost.services import keyword_service

keywords_bp = Blueprint("keywords", __name__, url_prefix="/api/keyword-favorites")

# camelCase request keys -> model fields
REQUEST_FIELDS = {
    "category": "category",
    "countryCode": "country_code",
    "languageCode": "language_code",
    "searchVolume": "search_volume",
    "competition": "competition",
    "competitionIndex": "competition_index",
    "avgCpcMicros": "avg_cpc_micros",
}


@keywords_bp.route("", methods=["GET"])
@login_required
def list_favorites():
    favorites = keyword_service.list_favorites(current_user.id)
    return jsonify(success=True, favorites=[f.to_dict() for f in favorites])


@keywords_bp.route("", methods=["PUT"])
@login_required
def save_favorite():
    data = json_object()
    metrics = {field: data.get(key) for key, field in REQUEST_FIELDS.items()}
    try:
        favorite, operation = keyword_service.save_favorite(
            current_user.id, data.get("keyword"), **metrics
        )
    except ValueError as e:
        return jsonify(error=str(e)), 400

    return jsonify(
        success=True,
        message=f"{operation} successful",
        operation=operation,
        favorite=favorite.to_dict(),
    )


@keywords_bp.route("", methods=["DELETE"])
@login_required
def remove_favorite():
    data = json_object()
    keyword = data.get("keyword") or request.args.get("keyword")
    try:
        removed = keyword_service.remove_favorite(current_user.id, keyword)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    if not removed:
        return jsonify(error="Favorite not found."), 404
    return jsonify(success=True, message="Favorite removed successfully")
