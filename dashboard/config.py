"""
Centralized configuration for the Admin Dashboard API.
All settings come from environment variables for 12-factor deployment.
"""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# MongoDB
# ---------------------------------------------------------------------------
# Required. Bootstrap fails fast when this is empty.
MONGO_URL = os.environ.get("MONGO_URL", "").strip()
# Empty = use the database named in MONGO_URL, else DEFAULT_DATABASE_NAME.
DATABASE_NAME = os.environ.get("DATABASE_NAME", "").strip()
DEFAULT_DATABASE_NAME = "admin_dashboard"
MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", "5000"))

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "9000"))

# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------
# Reseed all six collections once during bootstrap, before serving.
SEED_ON_START = _env_bool("SEED_ON_START", False)
# auto | transaction | swap
SEED_STRATEGY = os.environ.get("SEED_STRATEGY", "auto").strip().lower()
# Empty = packaged dashboard/data/fixtures.json
SEED_FIXTURES_PATH = os.environ.get("SEED_FIXTURES_PATH", "").strip()

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
CORS_ORIGINS = [
    s.strip()
    for s in os.environ.get("CORS_ORIGINS", "*").split(",")
    if s.strip()
] or ["*"]

# ---------------------------------------------------------------------------
# Query limits
# ---------------------------------------------------------------------------
TRANSACTIONS_PAGE_SIZE_DEFAULT = int(os.environ.get("TRANSACTIONS_PAGE_SIZE_DEFAULT", "20"))
TRANSACTIONS_PAGE_SIZE_MAX = int(os.environ.get("TRANSACTIONS_PAGE_SIZE_MAX", "100"))
DASHBOARD_RECENT_TRANSACTIONS = int(os.environ.get("DASHBOARD_RECENT_TRANSACTIONS", "50"))
