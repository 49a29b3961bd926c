"""CampaignDraft model.

A saved ad campaign plan: the campaign settings (campaign_data) plus the
generated ad copy (generated_copy), both stored as JSON.
"""

import uuid

from sitehost.extensions import db


class CampaignDraft(db.Model):
    __tablename__ = "campaign_drafts"

    STATUSES = ["draft", "ready", "exported"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    name = db.Column(db.String(255), nullable=False)
    industry = db.Column(db.String(255), nullable=True)
    campaign_data = db.Column(db.JSON, nullable=False, default=dict)
    generated_copy = db.Column(db.JSON, nullable=False, default=dict)
    status = db.Column(
        db.String(20), nullable=False, default="draft"
    )  # draft | ready | exported
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    owner = db.relationship("User", back_populates="campaign_drafts")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "industry": self.industry,
            "campaign_data": self.campaign_data,
            "generated_copy": self.generated_copy,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<CampaignDraft {self.name} ({self.status})>"
