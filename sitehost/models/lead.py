"""SiteLead model.

A contact-form submission captured from a published tenant site.
owner_id / site_id are resolved from the subdomain at capture time and stay
NULL when the subdomain had no site (the lead is kept anyway).
"""

import uuid

from sitehost.extensions import db


class SiteLead(db.Model):
    __tablename__ = "site_leads"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    subdomain = db.Column(db.String(50), nullable=False, index=True)
    site_id = db.Column(
        db.String(36),
        db.ForeignKey("sites.id", ondelete="SET NULL"),
        nullable=True,
    )
    owner_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=True, index=True
    )
    name = db.Column(db.String(200), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    def to_dict(self):
        return {
            "id": self.id,
            "subdomain": self.subdomain,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<SiteLead {self.subdomain} {self.email}>"
