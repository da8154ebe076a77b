"""
TheMealDB connector using the public v1 JSON API.

This connector wraps the four read-only endpoints the browser needs and
normalizes their payloads into MealRecord objects:

- list.php?c=list   -> list_categories()
- search.php?s=...  -> search_by_term()
- filter.php?c=...  -> filter_by_category()
- lookup.php?i=...  -> lookup_by_id()

TheMealDB reports "no match" as {"meals": null}; the connector turns that into
an empty list (or None for lookups). Network failures, HTTP errors and
undecodable bodies are raised as TransportError. No retries are performed here.

The base URL and timeout come from mealfinder.config (MEALDB_BASE_URL and
MEALDB_TIMEOUT_SECONDS) unless passed explicitly.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from mealfinder.config import CatalogConfig
from mealfinder.models import MealRecord

from .base import BaseConnector, TransportError

logger = logging.getLogger(__name__)


class MealDBConnector(BaseConnector):
    """
    Connector for the TheMealDB recipe catalog.

    A single requests.Session is reused for all calls so connections are kept
    alive across the many small lookups a browsing session makes.
    """
    source = "themealdb"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the connector.

        Args:
            base_url: API base URL (optional, reads MEALDB_BASE_URL or uses the public v1 URL)
            timeout: Per-request timeout in seconds (optional, reads MEALDB_TIMEOUT_SECONDS)
            session: requests.Session to use (optional, a new one is created)
        """
        self.base_url = (base_url.rstrip("/") + "/") if base_url else CatalogConfig.get_base_url()
        self.timeout = timeout if timeout is not None else CatalogConfig.get_timeout()
        self.session = session or requests.Session()

    def _get(self, endpoint: str, params: Dict[str, str]) -> Dict[str, Any]:
        """
        Issue a GET request and return the decoded JSON object.

        Raises:
            TransportError: On any network, HTTP status or decoding failure
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("GET %s params=%r", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request to {endpoint} timed out after {self.timeout}s", endpoint) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise TransportError(f"{endpoint} returned HTTP {status}", endpoint) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {endpoint} failed: {e}", endpoint) from e
        except ValueError as e:
            # requests raises a ValueError subclass for undecodable JSON bodies
            raise TransportError(f"{endpoint} returned a body that is not valid JSON", endpoint) from e

        if not isinstance(data, dict):
            raise TransportError(f"{endpoint} returned unexpected payload type {type(data).__name__}", endpoint)
        return data

    def _meals(self, data: Dict[str, Any], endpoint: str) -> List[Dict[str, Any]]:
        """Extract the raw meals array; null means no matches."""
        meals = data.get("meals")
        if meals is None:
            return []
        if not isinstance(meals, list):
            raise TransportError(f"{endpoint} returned 'meals' of type {type(meals).__name__}", endpoint)
        return meals

    def _normalize(self, items: List[Dict[str, Any]], category: Optional[str] = None) -> List[MealRecord]:
        normalized: List[MealRecord] = []
        skipped = 0
        for item in items:
            if not isinstance(item, dict):
                skipped += 1
                continue
            try:
                normalized.append(MealRecord.from_api(item, category=category))
            except ValidationError as e:
                logger.warning("Skipping meal without usable id: %s (%s)", str(item)[:100], e.error_count())
                skipped += 1
        if skipped:
            logger.warning("%s: skipped %d of %d raw meals", self.source, skipped, len(items))
        return normalized

    def list_categories(self) -> List[str]:
        """
        List all category names.

        Returns:
            Category names in catalog order (e.g., ["Beef", "Chicken", "Dessert", ...]).
            Entries without a name are dropped.

        Raises:
            TransportError: On network or parse failure
        """
        endpoint = "list.php"
        data = self._get(endpoint, {"c": "list"})
        # The list endpoint returns its rows under "meals"; "categories" is accepted too
        key = "categories" if data.get("categories") is not None else "meals"
        rows = data.get(key)
        if rows is None:
            rows = []
        if not isinstance(rows, list):
            raise TransportError(f"{endpoint} returned '{key}' of type {type(rows).__name__}", endpoint)
        categories: List[str] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            name = (row.get("strCategory") or "").strip()
            if name:
                categories.append(name)
        logger.info("Catalog returned %d categories", len(categories))
        return categories

    def search_by_term(self, term: str) -> List[MealRecord]:
        """
        Search meals by name substring.

        Args:
            term: Non-empty search term (e.g., "arrabiata")

        Returns:
            Matching MealRecords with full detail fields, or [] when nothing matches.

        Raises:
            ValueError: If term is empty
            TransportError: On network or parse failure
        """
        if not term or not term.strip():
            raise ValueError("search term must be a non-empty string")
        endpoint = "search.php"
        meals = self._normalize(self._meals(self._get(endpoint, {"s": term}), endpoint))
        logger.info("Search %r returned %d meals", term, len(meals))
        return meals

    def filter_by_category(self, category: str) -> List[MealRecord]:
        """
        List meals in a category.

        The filter endpoint only returns idMeal, strMeal and strMealThumb, so
        every record's category is backfilled with the requested value.

        Args:
            category: Non-empty category name (e.g., "Seafood")

        Returns:
            MealRecords with category set, or [] when the category is empty/unknown.

        Raises:
            ValueError: If category is empty
            TransportError: On network or parse failure
        """
        if not category or not category.strip():
            raise ValueError("category must be a non-empty string")
        endpoint = "filter.php"
        raw = self._meals(self._get(endpoint, {"c": category}), endpoint)
        meals = [
            meal.model_copy(update={"category": category})
            for meal in self._normalize(raw, category=category)
        ]
        logger.info("Category %r returned %d meals", category, len(meals))
        return meals

    def lookup_by_id(self, meal_id: str) -> Optional[MealRecord]:
        """
        Fetch one meal by id.

        Args:
            meal_id: Non-empty catalog id (e.g., "52771")

        Returns:
            The MealRecord, or None when the id is unknown.

        Raises:
            ValueError: If meal_id is empty
            TransportError: On network or parse failure
        """
        if not meal_id or not str(meal_id).strip():
            raise ValueError("meal id must be a non-empty string")
        endpoint = "lookup.php"
        meals = self._normalize(self._meals(self._get(endpoint, {"i": str(meal_id)}), endpoint))
        if not meals:
            logger.info("Lookup %r found no meal", meal_id)
            return None
        return meals[0]
