"""Tests for SiteStore.

Covers:
- Lookup by subdomain (latest row wins)
- Create: uniqueness, validation, DB constraint as the final arbiter
- Publish: create vs republish vs conflict
- Content replacement
- Rename: success, conflict, race between two renames, ownership
- Favorite toggle and delete
- Database failures surface as StoreUnavailable
"""

import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError

from sitehost.extensions import db
from sitehost.models.audit import AuditEvent
from sitehost.models.site import Site
from sitehost.services.site_store import (
    InvalidSubdomain,
    SiteConflict,
    SiteNotFound,
    SiteStore,
    StoreUnavailable,
)


@pytest.fixture
def store():
    return SiteStore()


class TestLookup:
    def test_find_existing(self, store, seed_data):
        site = store.find_latest_by_subdomain("acme")
        assert site.id == seed_data["site_id"]
        assert site.html == "<h1>A</h1>"

    def test_find_missing(self, store, seed_data):
        assert store.find_latest_by_subdomain("nope") is None

    def test_list_for_owner(self, store, seed_data):
        sites = store.list_for_owner(seed_data["owner_id"])
        assert [s.subdomain for s in sites] == ["acme"]
        assert store.list_for_owner(seed_data["other_id"]) == []

    def test_get_owned_rejects_other_owner(self, store, seed_data):
        with pytest.raises(SiteNotFound):
            store.get_owned(seed_data["site_id"], seed_data["other_id"])


class TestCreate:
    def test_create(self, store, seed_data):
        site = store.create(seed_data["other_id"], "beta-shop", "<p>b</p>")
        assert site.id
        assert store.find_latest_by_subdomain("beta-shop").html == "<p>b</p>"

    def test_create_writes_audit_event(self, store, seed_data):
        store.create(seed_data["other_id"], "beta-shop", "<p>b</p>")
        event = AuditEvent.query.filter_by(action="site.published").one()
        assert event.actor_user_id == seed_data["other_id"]
        assert event.subdomain == "beta-shop"
        assert event.site_id == store.find_latest_by_subdomain("beta-shop").id

    def test_subdomain_history_survives_delete(self, store, seed_data):
        store.rename_subdomain(seed_data["site_id"], seed_data["owner_id"], "acme-co")
        store.delete(seed_data["site_id"], seed_data["owner_id"])

        events = AuditEvent.query.filter_by(site_id=seed_data["site_id"]).all()
        assert {e.action for e in events} == {"site.renamed", "site.deleted"}
        assert AuditEvent.query.filter_by(subdomain="acme-co").count() == 2

    def test_create_conflict_leaves_existing_unchanged(self, store, seed_data):
        with pytest.raises(SiteConflict):
            store.create(seed_data["other_id"], "acme", "<p>stolen</p>")

        site = store.find_latest_by_subdomain("acme")
        assert site.owner_id == seed_data["owner_id"]
        assert site.html == "<h1>A</h1>"

    def test_unique_constraint_is_final_arbiter(self, store, seed_data, monkeypatch):
        """Even if the pre-check misses a holder, the DB constraint refuses it."""
        monkeypatch.setattr(store, "find_latest_by_subdomain", lambda subdomain: None)

        with pytest.raises(SiteConflict):
            store.create(seed_data["other_id"], "acme", "<p>stolen</p>")

        assert Site.query.filter_by(subdomain="acme").count() == 1
        assert Site.query.filter_by(subdomain="acme").one().html == "<h1>A</h1>"

    @pytest.mark.parametrize("bad", ["ab", "Acme", "ac_me", "a" * 51, "acme.com", ""])
    def test_invalid_subdomain(self, store, seed_data, bad):
        with pytest.raises(InvalidSubdomain):
            store.create(seed_data["owner_id"], bad, "<p>x</p>")

    def test_invalid_subdomain_is_value_error(self):
        assert issubclass(InvalidSubdomain, ValueError)


class TestPublish:
    def test_publish_new(self, store, seed_data):
        site, created = store.publish(seed_data["other_id"], "other-site", "<p>o</p>")
        assert created is True
        assert site.subdomain == "other-site"

    def test_republish_replaces_html(self, store, seed_data):
        site, created = store.publish(seed_data["owner_id"], "acme", "<h1>B</h1>")
        assert created is False
        assert site.id == seed_data["site_id"]
        assert store.find_latest_by_subdomain("acme").html == "<h1>B</h1>"
        assert Site.query.filter_by(subdomain="acme").count() == 1

    def test_publish_over_other_owner_conflicts(self, store, seed_data):
        with pytest.raises(SiteConflict):
            store.publish(seed_data["other_id"], "acme", "<h1>X</h1>")
        assert store.find_latest_by_subdomain("acme").html == "<h1>A</h1>"


class TestUpdateContent:
    def test_replace_wholesale(self, store, seed_data):
        site = store.update_content(
            seed_data["site_id"], seed_data["owner_id"], "<main>new</main>", "v2"
        )
        assert site.html == "<main>new</main>"
        assert site.description == "v2"

    def test_description_kept_when_omitted(self, store, seed_data):
        site = store.update_content(seed_data["site_id"], seed_data["owner_id"], "<p>x</p>")
        assert site.description == "Acme landing page"

    def test_non_owner_cannot_update(self, store, seed_data):
        with pytest.raises(SiteNotFound):
            store.update_content(seed_data["site_id"], seed_data["other_id"], "<p>x</p>")
        assert store.find_latest_by_subdomain("acme").html == "<h1>A</h1>"


class TestRename:
    def test_rename(self, store, seed_data):
        site = store.rename_subdomain(seed_data["site_id"], seed_data["owner_id"], "acme-co")
        assert site.subdomain == "acme-co"
        assert store.find_latest_by_subdomain("acme") is None
        assert store.find_latest_by_subdomain("acme-co").id == seed_data["site_id"]

    def test_rename_to_same_key_is_allowed(self, store, seed_data):
        site = store.rename_subdomain(seed_data["site_id"], seed_data["owner_id"], "acme")
        assert site.subdomain == "acme"

    def test_rename_onto_held_key_conflicts(self, store, seed_data):
        other = store.create(seed_data["other_id"], "beta-shop", "<p>b</p>")
        with pytest.raises(SiteConflict):
            store.rename_subdomain(other.id, seed_data["other_id"], "acme")
        assert store.find_latest_by_subdomain("acme").id == seed_data["site_id"]
        assert store.find_latest_by_subdomain("beta-shop").id == other.id

    def test_two_renames_to_same_key_one_wins(self, store, seed_data):
        beta = store.create(seed_data["other_id"], "beta-shop", "<p>b</p>")
        beta_id = beta.id

        outcomes = []
        for site_id, owner_id in (
            (seed_data["site_id"], seed_data["owner_id"]),
            (beta_id, seed_data["other_id"]),
        ):
            try:
                store.rename_subdomain(site_id, owner_id, "gamma")
                outcomes.append("ok")
            except SiteConflict:
                outcomes.append("conflict")

        assert sorted(outcomes) == ["conflict", "ok"]
        assert Site.query.filter_by(subdomain="gamma").count() == 1

    def test_unique_constraint_catches_rename_past_the_check(
        self, store, seed_data, monkeypatch
    ):
        """A claim that lands after the NOT EXISTS check still loses to the constraint."""
        store.rename_subdomain(seed_data["site_id"], seed_data["owner_id"], "gamma")
        beta_id = store.create(seed_data["other_id"], "beta-shop", "<p>b</p>").id

        real_execute = db.session.execute

        def execute_unchecked(stmt, *args, **kwargs):
            return real_execute(
                update(Site)
                .where(Site.id == beta_id)
                .values(subdomain="gamma")
                .execution_options(synchronize_session=False)
            )

        monkeypatch.setattr(db.session, "execute", execute_unchecked)
        with pytest.raises(SiteConflict):
            store.rename_subdomain(beta_id, seed_data["other_id"], "gamma")
        monkeypatch.undo()

        assert Site.query.filter_by(subdomain="gamma").count() == 1
        assert store.find_latest_by_subdomain("gamma").id == seed_data["site_id"]
        assert store.find_latest_by_subdomain("beta-shop").id == beta_id

    def test_rename_by_non_owner_is_not_found(self, store, seed_data):
        with pytest.raises(SiteNotFound):
            store.rename_subdomain(seed_data["site_id"], seed_data["other_id"], "mine-now")
        assert store.find_latest_by_subdomain("acme") is not None

    def test_rename_missing_site(self, store, seed_data):
        with pytest.raises(SiteNotFound):
            store.rename_subdomain("no-such-id", seed_data["owner_id"], "gamma")

    def test_rename_invalid(self, store, seed_data):
        with pytest.raises(InvalidSubdomain):
            store.rename_subdomain(seed_data["site_id"], seed_data["owner_id"], "X!")


class TestFavoriteAndDelete:
    def test_set_favorite(self, store, seed_data):
        site = store.set_favorite(seed_data["site_id"], seed_data["owner_id"], True)
        assert site.favorite is True
        site = store.set_favorite(seed_data["site_id"], seed_data["owner_id"], False)
        assert site.favorite is False

    def test_delete_frees_subdomain(self, store, seed_data):
        freed = store.delete(seed_data["site_id"], seed_data["owner_id"])
        assert freed == "acme"
        assert store.find_latest_by_subdomain("acme") is None

        site = store.create(seed_data["other_id"], "acme", "<p>new owner</p>")
        assert site.owner_id == seed_data["other_id"]

    def test_delete_by_non_owner(self, store, seed_data):
        with pytest.raises(SiteNotFound):
            store.delete(seed_data["site_id"], seed_data["other_id"])
        assert store.find_latest_by_subdomain("acme") is not None


class TestStoreUnavailable:
    def test_commit_failure(self, store, seed_data, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

        monkeypatch.setattr(db.session, "commit", broken_commit)

        with pytest.raises(StoreUnavailable):
            store.set_favorite(seed_data["site_id"], seed_data["owner_id"], True)

    def test_query_failure(self, store, seed_data, monkeypatch):
        def broken_execute(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("timeout expired"))

        monkeypatch.setattr(db.session, "execute", broken_execute)

        with pytest.raises(StoreUnavailable):
            store.rename_subdomain(seed_data["site_id"], seed_data["owner_id"], "gamma")


class TestIntegrityErrors:
    """Only the subdomain unique constraint means "taken"."""

    def test_not_null_violation_is_not_a_conflict(self, store, seed_data):
        with pytest.raises(StoreUnavailable):
            store.create(seed_data["owner_id"], "fresh-key", None)
        assert store.find_latest_by_subdomain("fresh-key") is None

    @pytest.mark.parametrize("message,expected", [
        ('duplicate key value violates unique constraint "uq_sites_subdomain"', SiteConflict),
        ("UNIQUE constraint failed: sites.subdomain", SiteConflict),
        ('insert or update on table "sites" violates foreign key constraint '
         '"sites_owner_id_fkey"', StoreUnavailable),
    ])
    def test_commit_errors_by_constraint(self, store, seed_data, monkeypatch, message, expected):
        def failing_commit():
            raise IntegrityError("INSERT INTO sites", {}, Exception(message))

        monkeypatch.setattr(db.session, "commit", failing_commit)
        with pytest.raises(expected):
            store.create(seed_data["other_id"], "fresh-key", "<p>x</p>")
