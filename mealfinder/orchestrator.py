"""
Query orchestration for the meal browser.

This module owns the browsing state and is the only place that changes it. It:
- Decides which catalog lookup to issue for the current search term and category
- Narrows search results by category client-side when both are set
- Sorts and paginates the full result set client-side
- Runs the lighter suggestion lookup for the search box
- Converts catalog failures into a visible "load failed" state

Query shape precedence (hard rule):
    search term set          -> search_by_term(term), filtered by category if one is selected
    else category set        -> filter_by_category(category)
    else                     -> search_by_term(default query, "chicken")

Flow: Streamlit widget -> QueryOrchestrator transition -> connector lookup -> MealRecord list
      -> sort_meals -> QueryState -> current_view() -> PageView -> Streamlit rendering

Overlapping reloads: each reload takes a generation number when it is issued,
and its response is applied only if no newer reload (or suggestion selection)
has been issued since. A slower, older response can therefore never overwrite
a newer one. The lock is held only while reading or writing state, never
across a network call.
"""

import logging
import threading
from typing import Callable, List, Optional, Union

from mealfinder.comparison import parse_sort_order, sort_meals
from mealfinder.config import BrowseConfig
from mealfinder.connectors.base import BaseConnector, TransportError
from mealfinder.connectors.mealdb_connector import MealDBConnector
from mealfinder.models import LoadStatus, MealRecord, PageView, ResultSummary, SortOrder, Suggestion
from mealfinder.pagination import page_slice, pagination_info
from mealfinder.state import QueryState
from mealfinder.utils.ratelimit import Debounced

logger = logging.getLogger(__name__)

# Maximum number of entries in the search box dropdown
MAX_SUGGESTIONS = 8


class QueryOrchestrator:
    """
    Owns one QueryState and exposes the transitions allowed on it.

    The presentation layer calls set_search_term / set_category / set_sort_order /
    go_to_page / select_suggestion in response to user actions and reads
    current_view() to render. It never touches QueryState directly.

    Attributes:
        connector: Catalog connector used for every remote lookup
        state: The owned QueryState
        default_query: Landing search term used when nothing is selected
    """

    def __init__(
        self,
        connector: Optional[BaseConnector] = None,
        page_size: Optional[int] = None,
        default_query: Optional[str] = None,
    ) -> None:
        """
        Initialize the orchestrator with a fresh default state.

        Args:
            connector: Catalog connector (optional, a MealDBConnector is created)
            page_size: Records per page (optional, reads MEALFINDER_PAGE_SIZE, default 9)
            default_query: Landing query (optional, reads MEALFINDER_DEFAULT_QUERY, default "chicken")
        """
        self.connector = connector or MealDBConnector()
        self.state = QueryState(page_size=page_size or BrowseConfig.get_page_size())
        self.default_query = default_query or BrowseConfig.get_default_query()

        self._lock = threading.Lock()
        # Records of the last applied load in arrival order; SortOrder.NONE restores this
        self._arrival: List[MealRecord] = []
        self._reload_generation = 0
        self._suggest_generation = 0
        self._in_flight = 0
        self._suggestions: List[Suggestion] = []
        self._categories: List[str] = []

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        """True while at least one reload or suggestion selection is in flight."""
        with self._lock:
            return self._in_flight > 0

    @property
    def suggestions(self) -> List[Suggestion]:
        with self._lock:
            return list(self._suggestions)

    @property
    def categories(self) -> List[str]:
        with self._lock:
            return list(self._categories)

    # ------------------------------------------------------------------
    # Start-up
    # ------------------------------------------------------------------

    def load_categories(self, loader: Optional[Callable[[], List[str]]] = None) -> List[str]:
        """
        Fetch the category list for the category selector.

        A failure is logged and leaves the list empty; browsing still works
        without categories.

        Args:
            loader: Category source (optional, defaults to the connector's
                    list_categories). The Streamlit page passes a cached loader
                    so the list is fetched once per process, not per session.

        Returns:
            The loaded category names (possibly empty)
        """
        loader = loader or self.connector.list_categories
        try:
            categories = loader()
        except TransportError as e:
            logger.error("Failed to load categories: %s", e, exc_info=True)
            categories = []
        with self._lock:
            self._categories = list(categories)
        return categories

    def start(self, category_loader: Optional[Callable[[], List[str]]] = None) -> PageView:
        """Load categories, then run the initial reload with the default state."""
        self.load_categories(category_loader)
        self.reload()
        return self.current_view()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_search_term(self, term: str) -> bool:
        """
        Set the search term and reload.

        Args:
            term: Free text; surrounding whitespace is ignored and "" clears the filter

        Returns:
            True if this reload's result was applied (see reload())
        """
        with self._lock:
            self.state.search_term = (term or "").strip()
            self.state.page = 1
        return self.reload()

    def set_category(self, category: str) -> bool:
        """
        Set the category filter and reload.

        Args:
            category: Category name, or "" to clear the filter

        Returns:
            True if this reload's result was applied (see reload())
        """
        with self._lock:
            self.state.category = (category or "").strip()
            self.state.page = 1
        return self.reload()

    def set_sort_order(self, order: Union[SortOrder, str, None]) -> SortOrder:
        """
        Change the sort order without refetching.

        The current result set is re-sorted from its arrival order, so switching
        back to SortOrder.NONE restores the catalog's order. The view returns to
        page 1.

        Raises:
            ValueError: If order names no known sort order
        """
        sort_order = parse_sort_order(order)
        with self._lock:
            self.state.sort_order = sort_order
            self.state.replace_results(sort_meals(self._arrival, sort_order), page=1)
        logger.debug("Sort order set to %s", sort_order.value)
        return sort_order

    def go_to_page(self, page: int) -> int:
        """
        Move to a page, clamped into [1, total_pages].

        Only the page number changes; results and total are untouched.

        Returns:
            The page actually set
        """
        with self._lock:
            return self.state.set_page(page)

    def select_suggestion(self, meal_id: str) -> Optional[MealRecord]:
        """
        Show exactly the chosen suggestion.

        Looks the meal up by id and replaces the results with it (or with nothing
        when the id is unknown). The suggestion list is cleared. Any reload still
        in flight is superseded.

        Args:
            meal_id: Catalog id of the chosen suggestion

        Returns:
            The looked-up record, or None if it was not found or the lookup failed
        """
        self.clear_suggestions()
        with self._lock:
            self._reload_generation += 1
            generation = self._reload_generation
            self._in_flight += 1
        try:
            try:
                meal = self.connector.lookup_by_id(meal_id)
            except TransportError as e:
                logger.error("Lookup of meal %r failed: %s", meal_id, e, exc_info=True)
                with self._lock:
                    if generation == self._reload_generation:
                        self._apply_failure()
                return None

            with self._lock:
                if generation != self._reload_generation:
                    logger.debug("Discarding stale lookup result for meal %r", meal_id)
                    return meal
                self._apply([meal] if meal is not None else [])
            logger.info("Selected suggestion %r: %s", meal_id, "found" if meal else "not found")
            return meal
        finally:
            with self._lock:
                self._in_flight -= 1

    # ------------------------------------------------------------------
    # Reload protocol
    # ------------------------------------------------------------------

    def reload(self) -> bool:
        """
        Requery the catalog for the current term/category and replace the results.

        The result set is replaced as a whole (results, total, page=1), or, on a
        TransportError, set to the failed state. Responses that were overtaken by
        a newer reload are discarded.

        Returns:
            True if the fetched results were applied, False if the load failed
            or the response was stale
        """
        with self._lock:
            self._reload_generation += 1
            generation = self._reload_generation
            term = self.state.search_term
            category = self.state.category
            self._in_flight += 1

        try:
            try:
                meals = self._fetch(term, category)
            except TransportError as e:
                logger.error(
                    "Reload failed for term=%r category=%r: %s", term, category, e, exc_info=True
                )
                with self._lock:
                    if generation == self._reload_generation:
                        self._apply_failure()
                return False

            with self._lock:
                if generation != self._reload_generation:
                    logger.debug(
                        "Discarding stale reload (generation %d, latest %d) for term=%r category=%r",
                        generation, self._reload_generation, term, category,
                    )
                    return False
                self._apply(meals)
            logger.info(
                "Reload applied: term=%r category=%r -> %d meals", term, category, len(meals)
            )
            return True
        finally:
            with self._lock:
                self._in_flight -= 1

    def _fetch(self, term: str, category: str) -> List[MealRecord]:
        """Issue the lookup(s) for the active query shape. Called without the lock."""
        if term:
            logger.debug("Query shape: search term=%r category=%r", term, category)
            meals = self.connector.search_by_term(term)
            if category:
                # Search results already carry their category; the filter endpoint is not used
                before = len(meals)
                meals = [meal for meal in meals if meal.category == category]
                logger.debug("Category %r narrowed search results: %d -> %d", category, before, len(meals))
            return meals
        if category:
            logger.debug("Query shape: category=%r", category)
            return self.connector.filter_by_category(category)
        logger.debug("Query shape: default query=%r", self.default_query)
        return self.connector.search_by_term(self.default_query)

    def _apply(self, meals: List[MealRecord]) -> None:
        """Replace the result set. Caller holds the lock."""
        self._arrival = list(meals)
        self.state.replace_results(sort_meals(self._arrival, self.state.sort_order), page=1)
        self.state.load_failed = False

    def _apply_failure(self) -> None:
        """Switch to the failed state. Caller holds the lock."""
        self._arrival = []
        self.state.replace_results([], page=1)
        self.state.load_failed = True

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def suggest(self, term: str) -> List[Suggestion]:
        """
        Look up dropdown suggestions for a partial search term.

        Never touches results or total. Failures are logged and leave the list
        empty. An empty term clears the list without a request.

        Returns:
            Up to MAX_SUGGESTIONS suggestions in catalog order
        """
        term = (term or "").strip()
        if not term:
            self.clear_suggestions()
            return []

        with self._lock:
            self._suggest_generation += 1
            generation = self._suggest_generation

        try:
            meals = self.connector.search_by_term(term)
        except TransportError as e:
            logger.warning("Suggestion lookup for %r failed: %s", term, e)
            meals = []

        suggestions = [Suggestion(id=meal.id, name=meal.name) for meal in meals[:MAX_SUGGESTIONS]]
        with self._lock:
            if generation != self._suggest_generation:
                logger.debug("Discarding stale suggestions for %r", term)
                return suggestions
            self._suggestions = suggestions
        return suggestions

    def clear_suggestions(self) -> None:
        """Empty the dropdown, e.g. when focus leaves the search box."""
        with self._lock:
            # Bumping the generation also drops any lookup still in flight
            self._suggest_generation += 1
            self._suggestions = []

    def handle_search_input(self, term: str) -> bool:
        """
        Handle one (debounced) change of the search box.

        Runs the suggestion lookup and then the reload for the new term. A failed
        suggestion lookup never prevents the reload.

        Returns:
            The reload's result (see reload())
        """
        term = (term or "").strip()
        if term:
            self.suggest(term)
        else:
            self.clear_suggestions()
        return self.set_search_term(term)

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    def current_view(self) -> PageView:
        """
        Derive what the presentation layer should render right now.

        Recomputed on every call from the current state; nothing is cached.
        """
        with self._lock:
            state = self.state
            summary = ResultSummary(count=state.total, active_filters=state.active_filters())
            if state.load_failed:
                status = LoadStatus.FAILED
                pagination = None
            else:
                status = LoadStatus.OK if state.total else LoadStatus.EMPTY
                pagination = pagination_info(state.page, state.total, state.page_size)
            return PageView(
                meals=page_slice(state.results, state.page, state.page_size),
                pagination=pagination,
                summary=summary,
                status=status,
                is_loading=self._in_flight > 0,
                suggestions=list(self._suggestions),
                categories=list(self._categories),
            )


def make_search_input_handler(orchestrator: QueryOrchestrator, wait: Optional[float] = None) -> Debounced:
    """
    Wrap handle_search_input in the shared debounce gate.

    Rapid keystrokes produce at most one suggestion lookup plus reload per
    idle gap of `wait` seconds (default MEALFINDER_SEARCH_DEBOUNCE_SECONDS, 0.5).
    """
    if wait is None:
        wait = BrowseConfig.get_search_debounce()
    return Debounced(orchestrator.handle_search_input, wait)
