"""Tenant resolver — classifies an inbound Host header.

    resolve("acme.root.com")   -> Resolution(kind="tenant", key="acme")
    resolve("www.root.com")    -> Resolution(kind="main")
    resolve("admin.root.com")  -> Resolution(kind="reserved")
    resolve("example.org")     -> Resolution(kind="main")

Pure and total: no I/O, never raises. Anything it cannot parse is MAIN, so
a bad Host header falls through to the main app and never reaches tenant
content serving.

All knobs come in through RoutingConfig; nothing here reads os.environ.
"""

import re
from dataclasses import dataclass, field

MAIN = "main"
RESERVED = "reserved"
TENANT = "tenant"

# One DNS label: letters, digits, hyphens; no leading/trailing hyphen.
LABEL_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


@dataclass(frozen=True)
class Resolution:
    kind: str
    key: str | None = None

    @property
    def is_tenant(self) -> bool:
        return self.kind == TENANT


@dataclass(frozen=True)
class RoutingConfig:
    """Explicit routing configuration shared by the resolver and the gate."""

    root_domain: str
    reserved_labels: frozenset = field(default_factory=frozenset)
    bypass_prefixes: tuple = ("/static/", "/api/")
    reserved_paths: tuple = ()
    cache_max_age: int = 3600

    @classmethod
    def from_app_config(cls, config) -> "RoutingConfig":
        return cls(
            root_domain=config["ROOT_DOMAIN"].strip().lower().rstrip("."),
            reserved_labels=frozenset(config.get("TENANT_RESERVED_LABELS", ())),
            bypass_prefixes=tuple(config.get("TENANT_BYPASS_PREFIXES", ())),
            reserved_paths=tuple(config.get("TENANT_RESERVED_PATHS", ())),
            cache_max_age=int(config.get("SITE_CACHE_MAX_AGE", 3600)),
        )

    @property
    def root_label(self) -> str:
        return self.root_domain.split(".", 1)[0]


def _normalize_host(host_header):
    """Lowercase, trim and strip the port. Returns None if malformed."""
    if not isinstance(host_header, str):
        return None
    host = host_header.strip().lower()
    if not host or host.startswith("["):  # empty or IPv6 literal
        return None

    if ":" in host:
        host, _, port = host.rpartition(":")
        if not port.isdigit() or ":" in host:
            return None

    host = host.rstrip(".")
    if not host:
        return None
    labels = host.split(".")
    if not all(LABEL_RE.match(label) for label in labels):
        return None
    return host


class TenantResolver:
    """Map a Host header to MAIN / RESERVED / TENANT."""

    def __init__(self, config: RoutingConfig):
        self.config = config

    def resolve(self, host_header) -> Resolution:
        host = _normalize_host(host_header)
        if host is None:
            return Resolution(MAIN)

        root = self.config.root_domain
        if host == root or not host.endswith("." + root):
            return Resolution(MAIN)

        leading = host[: -len(root) - 1].split(".", 1)[0]
        if leading in ("www", self.config.root_label):
            return Resolution(MAIN)
        if leading in self.config.reserved_labels:
            return Resolution(RESERVED)
        return Resolution(TENANT, leading)

    def tenant_key(self, host_header):
        """Shortcut: the tenant key for a host, or None."""
        resolution = self.resolve(host_header)
        return resolution.key if resolution.is_tenant else None
