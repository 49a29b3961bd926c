# Models package — import all models here so Alembic can discover them.

from sitehost.models.user import User  # noqa: F401
from sitehost.models.site import Site  # noqa: F401
from sitehost.models.lead import SiteLead  # noqa: F401
from sitehost.models.keyword_favorite import KeywordFavorite  # noqa: F401
from sitehost.models.campaign_draft import CampaignDraft  # noqa: F401
from sitehost.models.audit import AuditEvent  # noqa: F401
