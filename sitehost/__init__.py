import os
import logging

import click
from flask import Flask, render_template
from werkzeug.security import generate_password_hash

from sitehost.config import config_by_name
from sitehost.extensions import db, migrate, login_manager, csrf, limiter


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init database ---
    db.init_app(app)
    migrate.init_app(app, db)

    # --- Import models so Alembic can discover them ---
    with app.app_context():
        from sitehost import models  # noqa: F401

    # --- Tenant routing gate ---
    # Registered before the other extensions' hooks so tenant traffic is
    # answered before CSRF / login / rate limiting ever look at it.
    from sitehost.middleware.tenant import current_tenant_key, init_tenant_middleware
    init_tenant_middleware(app)

    # --- Init remaining extensions ---
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # --- Register blueprints ---
    from sitehost.blueprints.auth import auth_bp
    from sitehost.blueprints.sites import sites_bp
    from sitehost.blueprints.leads import leads_bp
    from sitehost.blueprints.keywords import keywords_bp
    from sitehost.blueprints.drafts import drafts_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(sites_bp)
    app.register_blueprint(leads_bp)
    app.register_blueprint(keywords_bp)
    app.register_blueprint(drafts_bp)

    # JSON endpoints; none of their callers carry a CSRF token.
    for bp in (auth_bp, sites_bp, leads_bp, keywords_bp, drafts_bp):
        csrf.exempt(bp)

    # --- Root route ---
    @app.route("/")
    def index():
        """Marketing landing page on the main domain."""
        return render_template(
            "landing.html", root_domain=app.config["ROOT_DOMAIN"]
        )

    # --- Error handlers ---
    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def server_error(e):
        return render_template("errors/500.html"), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Control referrer information
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Permissions Policy (restrict browser features)
        response.headers["Permissions-Policy"] = (
            "camera=(), microphone=(), geolocation=()"
        )
        # Tenant documents carry their own inline scripts, styles and
        # third-party assets; the platform CSP and frame lock are for the
        # main app only.
        if current_tenant_key() is None:
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "script-src 'self' 'unsafe-inline'; "
                "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
                "img-src 'self' data: https:; "
                "font-src 'self' https://fonts.gstatic.com; "
                "base-uri 'self'; "
                "form-action 'self'; "
                "frame-ancestors 'self';"
            )
        # Strict Transport Security (only in production)
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("create-user")
    @click.option("--email", required=True, help="Owner email")
    @click.option("--password", required=True, help="Owner password")
    @click.option("--name", default=None, help="Full name")
    def create_user(email, password, name):
        """Create a site owner account.

        Usage:
            flask create-user --email owner@example.com --password s3cret123
        """
        from sitehost.models.user import User

        email = email.lower().strip()
        if User.query.filter_by(email=email).first():
            click.echo(f"User already exists: {email}")
            return

        user = User(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=name,
        )
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created user: {email} (id: {user.id})")

    @app.cli.command("seed-demo")
    @click.option("--email", default="demo@sitehost.local", help="Demo owner email")
    @click.option("--password", default="demo12345", help="Demo owner password")
    @click.option("--subdomain", default="acme", help="Demo site subdomain")
    def seed_demo(email, password, subdomain):
        """Create a demo owner and one published site.

        Usage:
            flask seed-demo
            flask seed-demo --subdomain pizza-palace
        """
        from sitehost.models.user import User
        from sitehost.services.site_store import SiteConflict, SiteStore

        owner = User.query.filter_by(email=email).first()
        if owner:
            click.echo(f"Demo owner already exists: {email}")
        else:
            owner = User(
                email=email,
                password_hash=generate_password_hash(password),
                full_name="Demo Owner",
            )
            db.session.add(owner)
            db.session.commit()
            click.echo(f"Created demo owner: {email}")

        html = render_template("sites/demo.html", subdomain=subdomain)
        try:
            site, created = SiteStore().publish(owner.id, subdomain, html)
        except SiteConflict:
            click.echo(f"Subdomain '{subdomain}' is held by another owner.")
            return

        root = app.config["ROOT_DOMAIN"]
        click.echo("")
        click.echo("=" * 60)
        click.echo("Seed data created successfully!" if created else "Demo site republished.")
        click.echo("=" * 60)
        click.echo(f"  Owner:  {email} / {password}")
        click.echo(f"  Site:   {site.subdomain} (id: {site.id})")
        click.echo(f"  URL:    http://{site.subdomain}.{root}")
        click.echo("=" * 60)
