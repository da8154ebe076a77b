"""
Session management utilities for the Streamlit page.

Each browser session gets its own QueryOrchestrator, kept in st.session_state
so the query state survives Streamlit's script reruns. Nothing is shared
between sessions except the cached category list.
"""

from typing import List

import streamlit as st

from mealfinder.config import BrowseConfig
from mealfinder.connectors.mealdb_connector import MealDBConnector
from mealfinder.orchestrator import QueryOrchestrator
from mealfinder.utils.ratelimit import Throttled

ORCHESTRATOR_KEY = "meal_orchestrator"
PAGE_THROTTLE_KEY = "meal_page_throttle"


@st.cache_data(ttl=3600)  # Category list rarely changes; fetch once per hour at most
def get_categories() -> List[str]:
    """
    Fetch the catalog's category names, shared by all sessions.

    A TransportError propagates and is not cached, so the next session retries.
    """
    return MealDBConnector().list_categories()


def get_orchestrator() -> QueryOrchestrator:
    """
    Get or create the QueryOrchestrator for this browser session.

    On first use the orchestrator is started: categories are taken from the
    shared cache and the default landing query is run.

    Returns:
        The session's QueryOrchestrator
    """
    if ORCHESTRATOR_KEY not in st.session_state:
        orchestrator = QueryOrchestrator()
        orchestrator.start(category_loader=get_categories)
        st.session_state[ORCHESTRATOR_KEY] = orchestrator
    return st.session_state[ORCHESTRATOR_KEY]


def get_page_throttle() -> Throttled:
    """
    Get the session's throttled go_to_page handler.

    Rapid repeated pagination clicks collapse into one page change per
    MEALFINDER_PAGE_THROTTLE_SECONDS window.
    """
    if PAGE_THROTTLE_KEY not in st.session_state:
        orchestrator = get_orchestrator()
        st.session_state[PAGE_THROTTLE_KEY] = Throttled(orchestrator.go_to_page, BrowseConfig.get_page_throttle())
    return st.session_state[PAGE_THROTTLE_KEY]
