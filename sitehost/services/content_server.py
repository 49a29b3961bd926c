"""Content server — turns a tenant key into the HTTP response for its site.

This is the only place where store errors become status codes on the
public serving path:

    site found          -> 200, stored html verbatim, public cache for
                           cache_max_age seconds, Vary: Host
    no site / bad key   -> 404 "Site not found" (expected, not an error)
    StoreUnavailable    -> 500 "Error serving site" (details logged only)

Every path under a tenant host gets the same document; sites are single
pages.
"""

import logging

from flask import Response

from sitehost.models.site import is_valid_subdomain
from sitehost.services.site_store import StoreUnavailable

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "Site not found"
ERROR_BODY = "Error serving site"


def _text_response(body, status):
    return Response(body, status=status, mimetype="text/plain")


class ContentServer:
    def __init__(self, store, cache_max_age=3600):
        self.store = store
        self.cache_max_age = cache_max_age

    def serve(self, tenant_key):
        # Keys that can never be stored are answered without touching the DB.
        if not is_valid_subdomain(tenant_key):
            logger.debug(f"Rejected malformed tenant key: {tenant_key!r}")
            return _text_response(NOT_FOUND_BODY, 404)

        try:
            site = self.store.find_latest_by_subdomain(tenant_key)
        except StoreUnavailable:
            logger.exception(f"Site store unavailable while serving '{tenant_key}'")
            return _text_response(ERROR_BODY, 500)

        if site is None:
            logger.debug(f"No site for tenant '{tenant_key}'")
            return _text_response(NOT_FOUND_BODY, 404)

        response = Response(site.html, status=200, mimetype="text/html")
        response.headers["Cache-Control"] = f"public, max-age={self.cache_max_age}"
        response.headers["Vary"] = "Host"
        return response
