"""
Query state for one browsing session.

QueryState is the single source of truth for what is currently displayed:
the active search term and category, the sort order, the current page and the
full (unpaginated) result set. It is owned by a QueryOrchestrator and mutated
only through the orchestrator's transition operations; the presentation layer
reads the derived PageView instead of these fields.

# NOTE: results and total are only ever changed together through
    replace_results(), which also re-clamps the page. That keeps
    total == len(results) and 1 <= page <= total_pages true after
    every transition.
"""

from dataclasses import dataclass, field
from typing import List

from mealfinder.config import DEFAULT_PAGE_SIZE
from mealfinder.models import MealRecord, SortOrder
from mealfinder.pagination import clamp_page, total_pages


@dataclass
class QueryState:
    """
    Mutable browsing state.

    Attributes:
        search_term: Free text; empty means no text filter
        category: Selected category; empty means no category filter
        sort_order: Client-side ordering of results
        page: Current 1-based page
        page_size: Records per page, fixed for the session
        results: Full result set for the current query, in display order
        total: Always len(results)
        load_failed: True when the last reload or lookup failed
    """
    search_term: str = ""
    category: str = ""
    sort_order: SortOrder = SortOrder.NAME_ASC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    results: List[MealRecord] = field(default_factory=list)
    total: int = 0
    load_failed: bool = False

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        self.total = len(self.results)
        self.page = clamp_page(self.page, self.total, self.page_size)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    def replace_results(self, results: List[MealRecord], page: int = 1) -> None:
        """Swap in a new result set and re-clamp the page."""
        self.results = list(results)
        self.total = len(self.results)
        self.page = clamp_page(page, self.total, self.page_size)

    def set_page(self, page: int) -> int:
        """Move to a page, clamped into range. Returns the page actually set."""
        self.page = clamp_page(page, self.total, self.page_size)
        return self.page

    def active_filters(self) -> List[str]:
        """Filter labels for the results header, e.g. ['search: "pie"', 'category: Dessert']."""
        active: List[str] = []
        if self.search_term:
            active.append(f'search: "{self.search_term}"')
        if self.category:
            active.append(f"category: {self.category}")
        return active
