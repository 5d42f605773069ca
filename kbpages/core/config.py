# kbpages/core/config.py
"""Environment driven settings for the knowledge-base pages service."""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# ===== SHAREPOINT SITE =====

SHAREPOINT_SITE_URL = os.getenv("SHAREPOINT_SITE_URL", "https://contoso.sharepoint.com/sites/kb").rstrip("/")
SHAREPOINT_ACCESS_TOKEN = os.getenv("SHAREPOINT_ACCESS_TOKEN", "")
PAGES_LIST_TITLE = os.getenv("PAGES_LIST_TITLE", "Site Pages")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# ===== QUERY DEFAULTS =====

CATEGORY_FIELD = os.getenv("CATEGORY_FIELD", "KnowledgeBaseLabel")
ARTICLE_ID_FIELD = os.getenv("ARTICLE_ID_FIELD", "Article_x0020_ID")
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))

# Lists larger than this use the server-side filter data endpoint for distinct values
DISTINCT_REMOTE_THRESHOLD = int(os.getenv("DISTINCT_REMOTE_THRESHOLD", "500"))

# When off, unknown column type tags behave like Text
STRICT_COLUMN_TYPES = _env_bool("STRICT_COLUMN_TYPES")

# ===== REQUEST LOGGING =====

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./kbpages_logs.db")
APPLICATION_ID = os.getenv("APPLICATION_ID", "kbpages")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
