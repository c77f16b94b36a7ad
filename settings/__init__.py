"""Application settings."""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _split(value: str | None) -> list[str]:
    """Split a comma-separated env value, keeping positions of blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",")]


def _positive_int(name: str, default: int) -> int:
    """Read a positive integer env value, falling back to ``default`` when unusable."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("{}={!r} is not an integer, using {}", name, raw, default)
        return default
    if value <= 0:
        logger.warning("{}={} must be positive, using {}", name, value, default)
        return default
    return value


# RPC endpoints
MAIN_RPC_URL = os.getenv("MAIN_RPC_URL")
BACKUP_RPC_URLS = _split(os.getenv("BACKUP_RPC_URLS"))
BACKUP_RPC_NAMES = _split(os.getenv("BACKUP_RPC_NAMES"))
FALLBACK_RPC_URL = os.getenv("FALLBACK_RPC_URL")

# RPC client
RPC_TIMEOUT = _positive_int("RPC_TIMEOUT", 30)
HEALTH_CHECK_INTERVAL_MS = 5 * 60 * 1000

# Detection
MAX_DETECT_ATTEMPTS = 3
SIGNATURE_PAGE_LIMIT = 1000
MAX_SIGNATURE_PAGES = 50

# Cache, anchored to the install location so every working directory shares it
CACHE_DIR = PROJECT_ROOT / ".cache"
CACHE_FILE = "program-deployments.json"
CACHE_TTL_MS = 24 * 60 * 60 * 1000

# Logging
LOG_DIR = PROJECT_ROOT / "logs"
