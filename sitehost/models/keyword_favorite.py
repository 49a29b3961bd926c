"""KeywordFavorite model.

A keyword the owner starred from keyword research, with the metrics
snapshot it was saved with. One row per (owner, keyword).
"""

import uuid

from sitehost.extensions import db


class KeywordFavorite(db.Model):
    __tablename__ = "keyword_favorites"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False
    )
    keyword = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=True)
    country_code = db.Column(db.String(10), nullable=True)
    language_code = db.Column(db.String(10), nullable=True)
    search_volume = db.Column(db.Integer, nullable=True)
    competition = db.Column(db.String(20), nullable=True)  # LOW | MEDIUM | HIGH
    competition_index = db.Column(db.Integer, nullable=True)
    avg_cpc_micros = db.Column(db.BigInteger, nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    __table_args__ = (
        db.UniqueConstraint(
            "owner_id", "keyword", name="uq_keyword_favorites_owner_keyword"
        ),
    )

    owner = db.relationship("User", back_populates="keyword_favorites")

    def to_dict(self):
        return {
            "keyword": self.keyword,
            "category": self.category,
            "country_code": self.country_code,
            "language_code": self.language_code,
            "search_volume": self.search_volume,
            "competition": self.competition,
            "competition_index": self.competition_index,
            "avg_cpc_micros": self.avg_cpc_micros,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<KeywordFavorite {self.keyword}>"
