import os


def _csv_env(name, default):
    """Read a comma-separated env var into a tuple of trimmed, lowercase items."""
    raw = os.environ.get(name)
    if raw is None:
        return tuple(default)
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Handle DATABASE_URL: some PaaS providers (Railway, Heroku) use
    # "postgres://" which SQLAlchemy 1.4+ doesn't accept.
    _db_url = os.environ.get("DATABASE_URL", "")
    if _db_url.startswith("postgres://"):
        _db_url = _db_url.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = _db_url or None

    APP_BASE_URL = os.environ.get("APP_BASE_URL", "http://localhost:5000")

    # --- Tenant hosting ---
    # Published sites live at <subdomain>.<ROOT_DOMAIN>.
    ROOT_DOMAIN = os.environ.get("ROOT_DOMAIN", "localhost").strip().lower()
    # Leading labels that belong to the platform, never to a tenant.
    TENANT_RESERVED_LABELS = _csv_env(
        "TENANT_RESERVED_LABELS", ("api", "admin", "app", "dashboard", "mail")
    )
    # Paths that skip tenant resolution entirely, on any host.
    TENANT_BYPASS_PREFIXES = _csv_env(
        "TENANT_BYPASS_PREFIXES", ("/static/", "/api/")
    )
    TENANT_RESERVED_PATHS = _csv_env(
        "TENANT_RESERVED_PATHS", ("/favicon.ico", "/robots.txt", "/auth")
    )
    SITE_CACHE_MAX_AGE = int(os.environ.get("SITE_CACHE_MAX_AGE", 3600))

    # --- Lead capture ---
    LEADS_RATE_LIMIT = os.environ.get("LEADS_RATE_LIMIT", "20 per hour")

    # --- SQLAlchemy ---
    # Pooler URL for runtime, direct URL for migrations (DDL).
    DATABASE_DIRECT_URL = os.environ.get("DATABASE_DIRECT_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    # --- Session / cookies ---
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = "Lax"

    # --- WTF / CSRF ---
    WTF_CSRF_ENABLED = True

    @staticmethod
    def validate():
        """Fail fast if required env vars are missing."""
        required = [
            "SECRET_KEY",
            "DATABASE_URL",
            "ROOT_DOMAIN",
        ]
        missing = [v for v in required if not os.environ.get(v)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


class DevConfig(Config):
    """Local development."""

    DEBUG = True
    SQLALCHEMY_DATABASE_URI = Config.SQLALCHEMY_DATABASE_URI or "sqlite:///sitehost.db"
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False


class TestConfig(Config):
    """Testing — in-memory SQLite, CSRF disabled."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    # No pooling knobs for in-memory SQLite; every connection must share one DB.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    APP_BASE_URL = "http://localhost:5000"
    ROOT_DOMAIN = "root.com"
    TENANT_RESERVED_LABELS = ("api", "admin", "app", "dashboard", "mail")
    TENANT_BYPASS_PREFIXES = ("/static/", "/api/")
    TENANT_RESERVED_PATHS = ("/favicon.ico", "/robots.txt", "/auth")
    SITE_CACHE_MAX_AGE = 3600
    WTF_CSRF_ENABLED = False  # disable CSRF for test forms
    RATELIMIT_ENABLED = False  # disable rate limiting in tests
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False

    @staticmethod
    def validate():
        """Skip validation in test mode — everything is hardcoded."""
        pass


class ProdConfig(Config):
    """Production."""

    DEBUG = False
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}
