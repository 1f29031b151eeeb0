"""
Configuration constants and environment setup.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# ZENDUTY CONNECTION
# =============================================================================

ZENDUTY_BASE_URL = os.environ.get("ZENDUTY_BASE_URL", "https://www.zenduty.com")
ZENDUTY_USERNAME = os.environ.get("ZENDUTY_USERNAME", "")
ZENDUTY_PASSWORD = os.environ.get("ZENDUTY_PASSWORD", "")
ZENDUTY_TIMEOUT_SECONDS = float(os.environ.get("ZENDUTY_TIMEOUT_SECONDS", "5"))

# =============================================================================
# SCHEDULE CONFIGURATION
# =============================================================================

SCHEDULE_MONTHS = int(os.environ.get("SCHEDULE_MONTHS", "12"))
FETCH_CONCURRENCY = int(os.environ.get("FETCH_CONCURRENCY", "4"))
CACHE_MAX_AGE_SECONDS = int(os.environ.get("CACHE_MAX_AGE_SECONDS", "300"))

# PRODID name of the combined calendar
COMBINED_CALENDAR_NAME = "zenduty-oncall"

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("PORT", "3000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
LOGIN_ON_STARTUP = os.environ.get("LOGIN_ON_STARTUP", "true").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"


def credentials_configured() -> bool:
    """Check whether both Zenduty credentials are set."""
    return bool(ZENDUTY_USERNAME and ZENDUTY_PASSWORD)

