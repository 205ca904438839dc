"""
Configuration management for the String Authority Catalog.

Settings come from the process environment, then a ``.env`` file in the
project root (never overriding the environment), then ``db_config.json``
for local database credentials.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import is_currency
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent

# Load .env file if it exists (won't override existing environment variables)
load_dotenv(PROJECT_ROOT / '.env', override=False)

DEFAULT_LOCALE = 'en_US'
DEFAULT_CURRENCY = 'USD'

REQUIRED_DB_VARS = ('DB_HOST', 'DB_NAME', 'DB_USER', 'DB_PASSWORD')


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer; using {default}")
        return default
    if value < minimum:
        logger.warning(f"{name}={value} is below {minimum}; using {default}")
        return default
    return value


def get_database_config() -> Optional[Dict[str, str]]:
    """
    Load database connection parameters.

    Priority order:
    1. Environment variables (DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD)
    2. .env file (loaded into the environment at import)
    3. db_config.json (for local development)

    Returns:
        Dict of psycopg2 connection parameters, or None if no source is complete
    """
    if all(os.environ.get(key) for key in REQUIRED_DB_VARS):
        return {
            'host': os.environ['DB_HOST'],
            'port': os.environ.get('DB_PORT', '5432'),
            'database': os.environ['DB_NAME'],
            'user': os.environ['DB_USER'],
            'password': os.environ['DB_PASSWORD']
        }

    config_path = PROJECT_ROOT / 'db_config.json'
    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable {config_path}: {e}")

    return None


def get_pool_config() -> Dict[str, int]:
    """Connection pool bounds (DB_POOL_MIN, DB_POOL_MAX)."""
    minconn = _env_int('DB_POOL_MIN', 1)
    maxconn = _env_int('DB_POOL_MAX', 10)
    return {'minconn': minconn, 'maxconn': max(minconn, maxconn)}


def get_pagination_config() -> Dict[str, int]:
    """
    Page size limits for the list endpoints.

    The default page size is capped at the maximum.

    Returns:
        Dict with 'max_page_size' and 'default_page_size'
    """
    max_page_size = _env_int('MAX_PAGE_SIZE', 50)
    default_page_size = _env_int('DEFAULT_PAGE_SIZE', 20)
    return {
        'max_page_size': max_page_size,
        'default_page_size': min(default_page_size, max_page_size)
    }


def get_display_config() -> Dict[str, str]:
    """
    Locale, currency and preference storage settings for rendering.

    An unknown CATALOG_LOCALE or DEFAULT_CURRENCY is logged and replaced by
    the built-in default so rendering never fails on configuration.

    Returns:
        Dict with 'locale', 'currency' and 'preferences_path'
    """
    locale = os.environ.get('CATALOG_LOCALE', DEFAULT_LOCALE)
    try:
        Locale.parse(locale)
    except (UnknownLocaleError, ValueError):
        logger.warning(f"Unknown CATALOG_LOCALE {locale!r}; using {DEFAULT_LOCALE}")
        locale = DEFAULT_LOCALE

    currency = os.environ.get('DEFAULT_CURRENCY', DEFAULT_CURRENCY).strip().upper()
    if not is_currency(currency):
        logger.warning(f"Unknown DEFAULT_CURRENCY {currency!r}; using {DEFAULT_CURRENCY}")
        currency = DEFAULT_CURRENCY

    default_prefs = PROJECT_ROOT / 'view_preferences.json'
    return {
        'locale': locale,
        'currency': currency,
        'preferences_path': os.environ.get('VIEW_PREFERENCES_PATH', str(default_prefs))
    }
