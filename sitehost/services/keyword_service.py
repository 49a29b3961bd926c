"""Keyword favorites — one saved row per (owner, keyword).

Saving an existing keyword refreshes its metrics snapshot instead of
creating a duplicate.
"""

from datetime import datetime, timezone

from sitehost.extensions import db
from sitehost.models.keyword_favorite import KeywordFavorite

METRIC_FIELDS = (
    "category",
    "country_code",
    "language_code",
    "search_volume",
    "competition",
    "competition_index",
    "avg_cpc_micros",
)


def list_favorites(owner_id):
    return (
        KeywordFavorite.query
        .filter_by(owner_id=owner_id)
        .order_by(KeywordFavorite.created_at.desc())
        .all()
    )


def _clean_keyword(keyword):
    if not isinstance(keyword, str) or not keyword.strip():
        raise ValueError("Keyword is required.")
    return keyword.strip()


def save_favorite(owner_id, keyword, **metrics):
    """Insert or update a favorite. Returns (favorite, operation)."""
    keyword = _clean_keyword(keyword)

    favorite = KeywordFavorite.query.filter_by(
        owner_id=owner_id, keyword=keyword
    ).first()
    operation = "update"
    if favorite is None:
        favorite = KeywordFavorite(owner_id=owner_id, keyword=keyword)
        db.session.add(favorite)
        operation = "insert"
    else:
        favorite.created_at = datetime.now(timezone.utc)

    for name in METRIC_FIELDS:
        setattr(favorite, name, metrics.get(name) or None)

    db.session.commit()
    return favorite, operation


def remove_favorite(owner_id, keyword):
    """Delete a favorite. Returns True if a row was removed."""
    keyword = _clean_keyword(keyword)

    deleted = KeywordFavorite.query.filter_by(
        owner_id=owner_id, keyword=keyword
    ).delete()
    db.session.commit()
    return deleted > 0
