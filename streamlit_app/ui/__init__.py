"""
UI Styling and Components Module.

This module provides global CSS styling and reusable UI components
for the Meal Finder Streamlit app.
"""

from ui.feedback import show_empty_state, show_error, working_spinner
from ui.layout import meal_card, page_header, pagination_strip
from ui.styles import load_global_styles

__all__ = [
    "load_global_styles",
    "meal_card",
    "page_header",
    "pagination_strip",
    "show_empty_state",
    "show_error",
    "working_spinner",
]
