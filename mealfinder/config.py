"""
Configuration management for Meal Finder.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early by the Streamlit entry point
(streamlit_app/app.py) so .env is loaded before anything reads the environment.

Every setting is optional; the defaults reproduce the stock TheMealDB browsing
behaviour. When deployed without a .env file, load_dotenv() is a no-op and the
platform environment is used.

Environment Variables:
- MEALDB_BASE_URL: Optional, defaults to "https://www.themealdb.com/api/json/v1/1/"
- MEALDB_TIMEOUT_SECONDS: Optional, HTTP timeout per request (default: 10)
- MEALFINDER_PAGE_SIZE: Optional, result cards per page (default: 9)
- MEALFINDER_DEFAULT_QUERY: Optional, landing query when nothing is selected (default: "chicken")
- MEALFINDER_SEARCH_DEBOUNCE_SECONDS: Optional, idle gap before a typed term is searched (default: 0.5)
- MEALFINDER_PAGE_THROTTLE_SECONDS: Optional, pagination click window (default: 0.6)
- MEALFINDER_LOG_LEVEL: Optional, logging level name (default: "INFO")
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_PAGE_SIZE = 9
DEFAULT_QUERY = "chicken"
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.5
DEFAULT_PAGE_THROTTLE_SECONDS = 0.6


def load_env_file() -> None:
    """
    Load environment variables from the .env file at the project root.

    The project root is found by going up from this file's location
    (mealfinder/config.py -> project root). Safe to call multiple times;
    existing environment variables take precedence over .env values.
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid value %r for %s, using default %s", raw, name, default)
        return default
    if value < 0:
        logger.warning("Negative value %r for %s, using default %s", raw, name, default)
        return default
    return value


def _get_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid value %r for %s, using default %d", raw, name, default)
        return default
    if value <= 0:
        logger.warning("Non-positive value %r for %s, using default %d", raw, name, default)
        return default
    return value


class CatalogConfig:
    """Configuration for the TheMealDB catalog connector."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get the catalog API base URL.

        Returns:
            Base URL string, always ending with a single trailing slash so that
            endpoint names can be appended directly.
        """
        url = os.getenv("MEALDB_BASE_URL") or DEFAULT_BASE_URL
        return url.rstrip("/") + "/"

    @staticmethod
    def get_timeout() -> float:
        """
        Get the per-request HTTP timeout.

        Returns:
            Timeout in seconds (default: 10)
        """
        return _get_float("MEALDB_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)


class BrowseConfig:
    """Configuration for the query orchestrator and the browsing UI."""

    @staticmethod
    def get_page_size() -> int:
        """Get the number of result cards per page (default: 9)."""
        return _get_positive_int("MEALFINDER_PAGE_SIZE", DEFAULT_PAGE_SIZE)

    @staticmethod
    def get_default_query() -> str:
        """
        Get the landing query used when neither a search term nor a category is set.

        Returns:
            Non-empty search term (default: "chicken")
        """
        query = (os.getenv("MEALFINDER_DEFAULT_QUERY") or "").strip()
        return query or DEFAULT_QUERY

    @staticmethod
    def get_search_debounce() -> float:
        """Get the search input debounce window in seconds (default: 0.5)."""
        return _get_float("MEALFINDER_SEARCH_DEBOUNCE_SECONDS", DEFAULT_SEARCH_DEBOUNCE_SECONDS)

    @staticmethod
    def get_page_throttle() -> float:
        """Get the pagination click throttle window in seconds (default: 0.6)."""
        return _get_float("MEALFINDER_PAGE_THROTTLE_SECONDS", DEFAULT_PAGE_THROTTLE_SECONDS)

    @staticmethod
    def get_log_level() -> str:
        """Get the logging level name (default: "INFO")."""
        return (os.getenv("MEALFINDER_LOG_LEVEL") or "INFO").upper()
