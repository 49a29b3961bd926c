"""Shared test fixtures for the SiteHost test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, CSRF off,
  ROOT_DOMAIN=root.com)
- client: Flask test client on the main host
- on_host: issue a request against an arbitrary Host (e.g. acme.root.com)
- db_session: clean database per test (tables created/dropped)
- seed_data: an owner with the "acme" site, plus a second owner
- login: helper that logs a client in
"""

import pytest
from werkzeug.security import generate_password_hash

from sitehost import create_app
from sitehost.extensions import db as _db
from sitehost.models.site import Site
from sitehost.models.user import User

ROOT_DOMAIN = "root.com"
OWNER_PASSWORD = "ownerpass123"
ACME_HTML = "<h1>A</h1>"


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client on the main host."""
    return app.test_client()


@pytest.fixture
def on_host(client):
    """Return a helper: on_host("acme.root.com", "/about", method="post", ...)."""

    def request(host, path="/", method="get", **kwargs):
        return getattr(client, method)(path, base_url=f"http://{host}", **kwargs)

    return request


@pytest.fixture
def seed_data(app, db_session):
    """Seed an owner with the "acme" site and a second, unrelated owner.

    Returns plain IDs so tests can use them across app contexts.
    """
    with app.app_context():
        owner = User(
            email="owner@acme.test",
            password_hash=generate_password_hash(OWNER_PASSWORD),
            full_name="Acme Owner",
        )
        other = User(
            email="other@example.test",
            password_hash=generate_password_hash(OWNER_PASSWORD),
            full_name="Other Owner",
        )
        _db.session.add_all([owner, other])
        _db.session.flush()

        site = Site(
            owner_id=owner.id,
            subdomain="acme",
            html=ACME_HTML,
            description="Acme landing page",
        )
        _db.session.add(site)
        _db.session.commit()

        return {
            "owner_id": owner.id,
            "owner_email": owner.email,
            "other_id": other.id,
            "other_email": other.email,
            "site_id": site.id,
            "subdomain": site.subdomain,
        }


@pytest.fixture
def login():
    """Return a helper that logs a client in with the seeded password."""

    def do_login(client, email, password=OWNER_PASSWORD):
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200
        return resp

    return do_login
