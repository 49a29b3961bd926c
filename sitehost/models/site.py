"""Site model.

One published tenant site, reachable at <subdomain>.<ROOT_DOMAIN>.

The subdomain is the tenant key. Its global uniqueness is enforced by the
database (uq_sites_subdomain), not by application checks alone, so two
concurrent claims on the same key cannot both commit.
html is always the complete document; updates replace it wholesale.
"""

import re
import uuid

from sitehost.extensions import db

SUBDOMAIN_RE = re.compile(r"^[a-z0-9-]{3,50}$")


def is_valid_subdomain(value):
    """True if value is a well-formed tenant key."""
    return isinstance(value, str) and bool(SUBDOMAIN_RE.match(value))


class Site(db.Model):
    __tablename__ = "sites"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    subdomain = db.Column(db.String(50), nullable=False)
    html = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)  # prompt the site was built from
    favorite = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    __table_args__ = (
        db.UniqueConstraint("subdomain", name="uq_sites_subdomain"),
    )

    # --- Relationships ---
    owner = db.relationship("User", back_populates="sites")

    def url(self, root_domain):
        return f"https://{self.subdomain}.{root_domain}"

    def to_dict(self, root_domain=None, include_html=False):
        data = {
            "id": self.id,
            "subdomain": self.subdomain,
            "description": self.description,
            "favorite": bool(self.favorite),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if root_domain:
            data["url"] = self.url(root_domain)
        if include_html:
            data["html"] = self.html
        return data

    def __repr__(self):
        return f"<Site {self.subdomain}>"
