"""Audit event model.

One row per owner action: account registration, and every publish, update,
rename or delete of a site. The site's id and subdomain are copied onto the
row (no foreign key) so a subdomain's history survives the site's deletion.
"""

import uuid

from sitehost.extensions import db


class AuditEvent(db.Model):
    __tablename__ = "audit_events"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    actor_user_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=True
    )
    action = db.Column(db.String(255), nullable=False)  # e.g. "site.renamed"
    site_id = db.Column(db.String(36), nullable=True)
    subdomain = db.Column(db.String(50), nullable=True, index=True)
    metadata_ = db.Column(
        "metadata", db.JSON, default=dict
    )  # named metadata_ to avoid clashing with the declarative attribute
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    actor = db.relationship("User", back_populates="audit_events")

    def __repr__(self):
        return f"<AuditEvent {self.action} {self.subdomain or ''}>"
