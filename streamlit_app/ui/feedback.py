"""
Standardized feedback utilities for error, empty, and loading states.

The meal grid distinguishes a failed load from a legitimately empty result;
both get their own message here so the page renders them consistently.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st

LOAD_FAILED_MESSAGE = "Failed to load meals. Please try again."
NO_RESULTS_MESSAGE = "No meals found. Try a different search or category."


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a standardized error message with optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_empty_state(title: str, subtitle: Optional[str] = None) -> None:
    """
    Display a standardized empty state.

    Args:
        title: Main empty state title
        subtitle: Optional subtitle/description text
    """
    st.info(f"🍽️ **{title}**")
    if subtitle:
        st.caption(subtitle)


@contextmanager
def working_spinner(label: str = "Loading meals…"):
    """
    Context manager wrapper for standardized loading spinners.

    Usage:
        with working_spinner():
            orchestrator.start()
    """
    with st.spinner(label):
        yield
