"""
Meal Finder - Streamlit Frontend Main Entry Point.

Search-and-browse page over the TheMealDB catalog. The page is a pure consumer
of QueryOrchestrator: widget callbacks call the orchestrator's transitions and
the body renders whatever current_view() returns on each rerun.

Run with:
    streamlit run streamlit_app/app.py

Note: Streamlit commits a text_input value on Enter or blur rather than on every
keystroke, so a search callback fires at most once per editing pause and the
suggestion lookup and reload run together from that one callback.
"""

import logging
import sys
from html import escape
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path so `ui` and `utils` import
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so `mealfinder` imports from a plain checkout
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
from mealfinder.config import BrowseConfig

import streamlit as st

from mealfinder.models import LoadStatus, SortOrder
from ui.feedback import LOAD_FAILED_MESSAGE, NO_RESULTS_MESSAGE, show_empty_state, show_error, working_spinner
from ui.layout import meal_card, page_header, pagination_strip
from ui.styles import load_global_styles
from utils.session import get_orchestrator, get_page_throttle

logging.basicConfig(
    level=BrowseConfig.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

SEARCH_KEY = "search_input"
CATEGORY_KEY = "category_select"
SORT_KEY = "sort_select"

ALL_CATEGORIES = "All categories"
SORT_LABELS = {
    SortOrder.NAME_ASC: "Name (A → Z)",
    SortOrder.NAME_DESC: "Name (Z → A)",
    SortOrder.NONE: "Catalog order",
}
GRID_COLUMNS = 3

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Meal Finder",
    page_icon="🍲",
    layout="wide",
)

load_global_styles()

with working_spinner():
    orchestrator = get_orchestrator()


def _on_search_change() -> None:
    with working_spinner():
        orchestrator.handle_search_input(st.session_state.get(SEARCH_KEY, ""))


def _on_suggestion(meal_id: str) -> None:
    with working_spinner("Loading meal…"):
        meal = orchestrator.select_suggestion(meal_id)
    if meal is not None:
        st.session_state[SEARCH_KEY] = meal.name


def _on_category_change() -> None:
    orchestrator.clear_suggestions()
    selected = st.session_state.get(CATEGORY_KEY, ALL_CATEGORIES)
    with working_spinner():
        orchestrator.set_category("" if selected == ALL_CATEGORIES else selected)


def _on_sort_change() -> None:
    orchestrator.clear_suggestions()
    orchestrator.set_sort_order(st.session_state.get(SORT_KEY, SortOrder.NAME_ASC))


def _on_page(page: int) -> None:
    orchestrator.clear_suggestions()
    get_page_throttle()(page)


page_header("🍲 Meal Finder", "Search TheMealDB by name or browse by category.")

# --- Controls ---
search_col, category_col, sort_col = st.columns([3, 2, 2])
with search_col:
    st.text_input(
        "Search meals",
        key=SEARCH_KEY,
        placeholder="e.g. arrabiata, pie, curry",
        on_change=_on_search_change,
    )
with category_col:
    st.selectbox(
        "Category",
        options=[ALL_CATEGORIES] + orchestrator.categories,
        key=CATEGORY_KEY,
        on_change=_on_category_change,
    )
with sort_col:
    st.selectbox(
        "Sort",
        options=list(SORT_LABELS.keys()),
        format_func=lambda order: SORT_LABELS[order],
        key=SORT_KEY,
        on_change=_on_sort_change,
    )

view = orchestrator.current_view()

# --- Suggestions dropdown ---
if view.suggestions:
    with st.container(border=True):
        header_col, close_col = st.columns([6, 1])
        with header_col:
            st.caption("Suggestions")
        with close_col:
            st.button("✕", key="suggestions_close", on_click=orchestrator.clear_suggestions)
        for suggestion in view.suggestions:
            st.button(
                suggestion.name,
                key=f"suggestion_{suggestion.id}",
                on_click=_on_suggestion,
                args=(suggestion.id,),
            )

# --- Results header ---
count_col, filters_col = st.columns([1, 4])
with count_col:
    st.markdown(f"**{view.summary.count_label}**")
with filters_col:
    if view.summary.active_filters:
        st.markdown(f'<span class="mf-filters">{escape(view.summary.filters_label)}</span>', unsafe_allow_html=True)

# --- Results grid ---
if view.status == LoadStatus.FAILED:
    show_error(LOAD_FAILED_MESSAGE, "Check your connection; the catalog may be temporarily unavailable.")
elif view.status == LoadStatus.EMPTY:
    show_empty_state(NO_RESULTS_MESSAGE)
else:
    for row_start in range(0, len(view.meals), GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for col, meal in zip(cols, view.meals[row_start:row_start + GRID_COLUMNS]):
            with col:
                meal_card(meal)

# --- Pagination (hidden after a failed load) ---
if view.pagination is not None:
    pagination_strip(view.pagination, _on_page)
