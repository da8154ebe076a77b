"""
Global CSS Styling for Meal Finder.

This module provides load_global_styles() to inject consistent styling for the
result card grid, the category badge and the suggestion dropdown.
"""

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Meal Finder page.

    This function:
    - Imports Google Fonts (Nunito) for friendly typography
    - Styles result cards with rounded corners and subtle borders
    - Styles the category badge overlaid on card thumbnails
    - Makes suggestion buttons render as a compact list
    """
    css = """
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap');

        html, body, [class*="css"] {
            font-family: 'Nunito', 'sans serif' !important;
        }

        h1, h2, h3, h4, h5, h6 {
            font-weight: 600 !important;
            letter-spacing: 0.02em !important;
        }

        .main .block-container {
            max-width: 1200px !important;
            padding-top: 1.5rem !important;
            padding-bottom: 2.5rem !important;
        }

        .stButton > button {
            border-radius: 50px !important;
            font-weight: 600 !important;
        }

        /* Result card */
        .mf-card {
            border-radius: 12px !important;
            padding: 0.75rem 1rem !important;
            background-color: #ffffff !important;
            border: 1px solid rgba(230, 126, 34, 0.15) !important;
            margin-bottom: 1rem !important;
        }

        .mf-card-title {
            font-size: 1.05rem !important;
            font-weight: 700 !important;
            margin: 0.5rem 0 0.25rem 0 !important;
        }

        .mf-card-sub {
            color: #666 !important;
            font-size: 0.9rem !important;
            margin: 0 !important;
        }

        /* Category badge */
        .mf-badge {
            display: inline-block;
            padding: 0.2rem 0.7rem;
            border-radius: 50px;
            background: #FDEBD0;
            color: #A04000;
            font-size: 0.75rem;
            font-weight: 700;
        }

        /* Active filter chip and count */
        .mf-filters {
            display: inline-block;
            padding: 0.25rem 0.75rem;
            border-radius: 50px;
            background: #F4F6F6;
            color: #34495E;
            font-size: 0.85rem;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
