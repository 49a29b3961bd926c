"""Lead service — contact-form submissions from published tenant sites.

All visitor input is sanitized with bleach.clean() to strip HTML tags.
The lead is attached to the owner of the site the form was posted from;
leads for unknown subdomains are still kept (owner stays NULL).
"""

import logging

import bleach

from sitehost.extensions import db
from sitehost.models.lead import SiteLead
from sitehost.models.site import Site

logger = logging.getLogger(__name__)

MIN_MESSAGE_LENGTH = 5
MAX_MESSAGE_LENGTH = 5000
MAX_NAME_LENGTH = 200
RECENT_LEADS_LIMIT = 100


def _sanitize(text):
    """Strip all HTML tags from user input."""
    if text is None:
        return text
    return bleach.clean(text, tags=[], strip=True).strip()


def capture_lead(subdomain, message, name=None, email=None):
    """Validate and store one lead.

    Returns:
        The created SiteLead.

    Raises:
        ValueError: On non-text fields, a missing subdomain or an invalid
            message/name.
    """
    for field, value in (("subdomain", subdomain), ("message", message),
                         ("name", name), ("email", email)):
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{field.capitalize()} must be text.")

    subdomain = (subdomain or "").strip().lower()
    message = _sanitize(message) or ""
    name = _sanitize(name) or None
    email = _sanitize(email) or None

    if not subdomain:
        raise ValueError("Missing subdomain.")
    if len(message) < MIN_MESSAGE_LENGTH:
        raise ValueError("Message is too short.")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValueError("Message is too long.")
    if name and len(name) > MAX_NAME_LENGTH:
        raise ValueError("Name is too long.")

    site = Site.query.filter_by(subdomain=subdomain).first()

    lead = SiteLead(
        subdomain=subdomain,
        site_id=site.id if site else None,
        owner_id=site.owner_id if site else None,
        name=name,
        email=email,
        message=message,
    )
    db.session.add(lead)
    db.session.commit()

    logger.info(f"Lead captured for {subdomain} from {email or 'anonymous'}")
    return lead


def recent_leads(owner_id, limit=RECENT_LEADS_LIMIT):
    """Most recent leads across all of an owner's sites."""
    return (
        SiteLead.query
        .filter_by(owner_id=owner_id)
        .order_by(SiteLead.created_at.desc())
        .limit(limit)
        .all()
    )
