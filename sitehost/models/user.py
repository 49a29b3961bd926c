"""User model.

The authenticated principal that owns published sites.
Flask-Login integration via UserMixin.
"""

import uuid

from flask_login import UserMixin

from sitehost.extensions import db


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    # --- Relationships ---
    sites = db.relationship("Site", back_populates="owner", lazy="dynamic")
    keyword_favorites = db.relationship(
        "KeywordFavorite", back_populates="owner", lazy="dynamic"
    )
    campaign_drafts = db.relationship(
        "CampaignDraft", back_populates="owner", lazy="dynamic"
    )
    audit_events = db.relationship(
        "AuditEvent", back_populates="actor", lazy="dynamic"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
        }

    def __repr__(self):
        return f"<User {self.email}>"
