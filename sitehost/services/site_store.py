"""Site store — persistence for published sites.

Every method is one unit of work and commits before returning, so a
reader sees either the old or the new html in full, never a mix.

Errors:
    InvalidSubdomain  — key fails the [a-z0-9-]{3,50} pattern (ValueError).
    SiteNotFound      — no such site, or it belongs to someone else.
    SiteConflict      — the subdomain is already held by another site.
    StoreUnavailable  — connection / timeout / other database failure.

Nothing in here builds HTTP responses; callers map these errors to status
codes.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import aliased

from sitehost.extensions import db
from sitehost.models.audit import AuditEvent
from sitehost.models.site import Site, is_valid_subdomain

logger = logging.getLogger(__name__)


class InvalidSubdomain(ValueError):
    """Subdomain does not match [a-z0-9-]{3,50}."""


class SiteNotFound(LookupError):
    """No site matches, or the caller does not own it."""


class SiteConflict(Exception):
    """The requested subdomain is already held by another site."""

    def __init__(self, subdomain):
        super().__init__(f"Subdomain '{subdomain}' is already taken.")
        self.subdomain = subdomain


class StoreUnavailable(Exception):
    """The database could not be reached or timed out."""


SUBDOMAIN_CONSTRAINT = "uq_sites_subdomain"


def _is_subdomain_conflict(error):
    """True if an IntegrityError came from the subdomain unique constraint.

    PostgreSQL reports the constraint name, SQLite the column.
    """
    message = str(getattr(error, "orig", error))
    return SUBDOMAIN_CONSTRAINT in message or "sites.subdomain" in message


def _check_subdomain(subdomain):
    if not is_valid_subdomain(subdomain):
        raise InvalidSubdomain(
            "Subdomain must be 3-50 characters: lowercase letters, digits and hyphens."
        )
    return subdomain


def _audit(actor_user_id, action, site_id=None, subdomain=None, **metadata):
    db.session.add(AuditEvent(
        actor_user_id=actor_user_id,
        action=action,
        site_id=site_id,
        subdomain=subdomain,
        metadata_=metadata,
    ))


class SiteStore:
    """Site persistence backed by the Flask-SQLAlchemy session."""

    def _commit(self, conflict_key=None):
        """Commit, translating database failures into store errors."""
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            if conflict_key is not None and _is_subdomain_conflict(e):
                raise SiteConflict(conflict_key) from e
            raise StoreUnavailable(str(e)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreUnavailable(str(e)) from e

    # ── Reads ──

    def find_latest_by_subdomain(self, subdomain):
        """Public lookup used for serving. Returns the newest row or None."""
        try:
            return (
                Site.query
                .filter_by(subdomain=subdomain)
                .order_by(Site.updated_at.desc(), Site.created_at.desc())
                .first()
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreUnavailable(str(e)) from e

    def list_for_owner(self, owner_id):
        try:
            return (
                Site.query
                .filter_by(owner_id=owner_id)
                .order_by(Site.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreUnavailable(str(e)) from e

    def get_owned(self, site_id, owner_id):
        try:
            site = Site.query.filter_by(id=site_id, owner_id=owner_id).first()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreUnavailable(str(e)) from e
        if site is None:
            raise SiteNotFound(site_id)
        return site

    # ── Writes ──

    def create(self, owner_id, subdomain, html, description=None):
        """Claim a new subdomain. Raises SiteConflict if it is held."""
        _check_subdomain(subdomain)
        if self.find_latest_by_subdomain(subdomain) is not None:
            raise SiteConflict(subdomain)

        site = Site(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            subdomain=subdomain,
            html=html,
            description=description,
        )
        db.session.add(site)
        _audit(owner_id, "site.published", site_id=site.id, subdomain=subdomain)
        # The unique constraint settles a race the check above can't see.
        self._commit(conflict_key=subdomain)

        logger.info(f"Site published: {subdomain} (owner {owner_id})")
        return site

    def publish(self, owner_id, subdomain, html, description=None):
        """Create the site, or republish it if this owner already holds it.

        Returns (site, created).
        """
        _check_subdomain(subdomain)
        existing = self.find_latest_by_subdomain(subdomain)
        if existing is None:
            return self.create(owner_id, subdomain, html, description), True
        if existing.owner_id != owner_id:
            raise SiteConflict(subdomain)
        return self.update_content(existing.id, owner_id, html, description), False

    def update_content(self, site_id, owner_id, html, description=None):
        """Replace the whole document in a single row write."""
        site = self.get_owned(site_id, owner_id)
        site.html = html
        if description is not None:
            site.description = description
        site.updated_at = datetime.now(timezone.utc)
        _audit(owner_id, "site.updated", site_id=site.id, subdomain=site.subdomain)
        self._commit()

        logger.info(f"Site republished: {site.subdomain}")
        return site

    def rename_subdomain(self, site_id, owner_id, new_subdomain):
        """Move a site to a new subdomain if, and only if, nobody holds it.

        Check and set happen in one conditional UPDATE; the unique
        constraint catches anything that slips between statements.
        """
        _check_subdomain(new_subdomain)

        holder = aliased(Site, name="holder")
        held_by_other = (
            select(holder.id)
            .where(holder.subdomain == new_subdomain, holder.id != site_id)
            .exists()
        )
        stmt = (
            update(Site)
            .where(Site.id == site_id, Site.owner_id == owner_id, ~held_by_other)
            .values(subdomain=new_subdomain, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )

        try:
            result = db.session.execute(stmt)
        except IntegrityError as e:
            db.session.rollback()
            if _is_subdomain_conflict(e):
                raise SiteConflict(new_subdomain) from e
            raise StoreUnavailable(str(e)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreUnavailable(str(e)) from e

        if result.rowcount == 0:
            db.session.rollback()
            # Tell "not yours / missing" apart from "taken".
            self.get_owned(site_id, owner_id)
            raise SiteConflict(new_subdomain)

        _audit(owner_id, "site.renamed", site_id=site_id, subdomain=new_subdomain)
        self._commit(conflict_key=new_subdomain)

        site = db.session.get(Site, site_id)
        logger.info(f"Site {site_id} renamed to {new_subdomain}")
        return site

    def set_favorite(self, site_id, owner_id, favorite):
        site = self.get_owned(site_id, owner_id)
        site.favorite = bool(favorite)
        site.updated_at = datetime.now(timezone.utc)
        self._commit()
        return site

    def delete(self, site_id, owner_id):
        """Delete a site and free its subdomain. Returns the subdomain."""
        site = self.get_owned(site_id, owner_id)
        subdomain = site.subdomain
        db.session.delete(site)
        _audit(owner_id, "site.deleted", site_id=site_id, subdomain=subdomain)
        self._commit()

        logger.info(f"Site deleted: {subdomain}")
        return subdomain
