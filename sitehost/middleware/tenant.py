"""Tenant middleware — the single routing gate for subdomain sites.

Runs before every request, on every host:

    1. Paths under a bypass prefix (/static/, /api/) or on the reserved
       path list go straight to normal routing.
    2. Otherwise the Host header is classified by TenantResolver.
    3. TENANT  -> the ContentServer response is returned directly, which
                  short-circuits Flask routing.
       MAIN / RESERVED -> fall through to the normal app (and its auth).

Both markers live in the WSGI environ, which belongs to exactly one
request. The app context (and g) can outlive a request, e.g. in a CLI
command or a test holding app.app_context() open.

    sitehost.tenant_routed  the gate already ran for this request
    sitehost.tenant_key     set only for tenant traffic

Tenant responses are public and cacheable, so the session is never
saved on them: no Set-Cookie, and no "Vary: Cookie" splitting shared
cache entries per visitor.
"""

import logging

from flask import request
from flask.sessions import SecureCookieSessionInterface

from sitehost.services.content_server import ContentServer
from sitehost.services.site_store import SiteStore
from sitehost.services.tenant_resolver import RoutingConfig, TenantResolver

logger = logging.getLogger(__name__)

ROUTED_ENV_KEY = "sitehost.tenant_routed"
TENANT_ENV_KEY = "sitehost.tenant_key"


def current_tenant_key():
    """Tenant key of the request being handled, or None off the tenant path."""
    return request.environ.get(TENANT_ENV_KEY)


class TenantSessionInterface(SecureCookieSessionInterface):
    """Cookie sessions for the main app; untouched on tenant responses."""

    def save_session(self, app, session, response):
        if current_tenant_key() is not None:
            return
        super().save_session(app, session, response)


class RoutingGate:
    def __init__(self, config: RoutingConfig, resolver: TenantResolver, server: ContentServer):
        self.config = config
        self.resolver = resolver
        self.server = server

    def is_bypassed(self, path):
        """True for static assets, the API namespace and reserved paths."""
        if path.startswith(self.config.bypass_prefixes):
            return True
        for reserved in self.config.reserved_paths:
            if path == reserved or path.startswith(reserved.rstrip("/") + "/"):
                return True
        return False

    def route(self, host, path):
        """Return a tenant Response, or None to continue normal routing."""
        if self.is_bypassed(path):
            return None

        resolution = self.resolver.resolve(host)
        if not resolution.is_tenant:
            return None

        request.environ[TENANT_ENV_KEY] = resolution.key
        return self.server.serve(resolution.key)

    def before_request(self):
        """Before-request hook. Re-entry within one request is a no-op."""
        if request.environ.get(ROUTED_ENV_KEY):
            return None
        request.environ[ROUTED_ENV_KEY] = True
        return self.route(request.host, request.path)


def init_tenant_middleware(app):
    """Build the gate from app config and register it as a before_request hook."""
    config = RoutingConfig.from_app_config(app.config)
    resolver = TenantResolver(config)
    server = ContentServer(SiteStore(), cache_max_age=config.cache_max_age)
    gate = RoutingGate(config, resolver, server)

    app.extensions["tenant_resolver"] = resolver
    app.extensions["routing_gate"] = gate
    app.session_interface = TenantSessionInterface()
    app.before_request(gate.before_request)

    logger.debug(f"Tenant routing enabled for *.{config.root_domain}")
    return gate
