"""
Base connector abstract class for recipe catalog integrations.

This module defines the abstract base class that catalog connectors must implement.
It keeps the query orchestrator independent of any one catalog API's field names
and URL scheme.

All connectors must:
- Normalize every record into MealRecord
- Return empty results (never raise) when the catalog simply has no match
- Raise TransportError for network and parse failures, without retrying
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from mealfinder.models import MealRecord


class TransportError(RuntimeError):
    """
    Raised when a catalog request fails at the network or payload level.

    Covers connection errors, timeouts, non-2xx responses and bodies that are
    not the JSON the endpoint promises. "No data" outcomes are never reported
    through this exception.

    Attributes:
        endpoint: Catalog endpoint that failed (e.g., "search.php")
    """

    def __init__(self, message: str, endpoint: Optional[str] = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class BaseConnector(ABC):
    """
    Abstract base class for catalog connectors.

    Attributes:
        source: String identifier for the catalog (e.g., "themealdb")
    """
    source: str

    @abstractmethod
    def list_categories(self) -> List[str]:
        """
        List all category names known to the catalog.

        Returns:
            Category names in catalog order. An empty list means no categories
            are available and is not an error.
        """
        pass

    @abstractmethod
    def search_by_term(self, term: str) -> List[MealRecord]:
        """
        Search meals whose name contains the given term.

        Args:
            term: Non-empty search term

        Returns:
            Matching records in catalog order, or an empty list when nothing matches.
        """
        pass

    @abstractmethod
    def filter_by_category(self, category: str) -> List[MealRecord]:
        """
        List meals belonging to the given category.

        Args:
            category: Non-empty category name

        Returns:
            Records with category always populated with the requested value.
        """
        pass

    @abstractmethod
    def lookup_by_id(self, meal_id: str) -> Optional[MealRecord]:
        """
        Fetch a single meal by its identifier.

        Args:
            meal_id: Non-empty catalog identifier

        Returns:
            The matching record, or None when no record has that id.
        """
        pass
