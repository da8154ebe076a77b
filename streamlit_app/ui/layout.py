"""
Layout primitives for the meal browser page.

Provides the page header, the result card and the pagination strip.
"""

from html import escape
from typing import Callable, Optional

import streamlit as st

from mealfinder.models import MealRecord, PaginationInfo
from mealfinder.pagination import page_window


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render a consistent page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
    """
    st.markdown(f"# {title}")
    if subtitle:
        st.caption(subtitle)


def meal_card(meal: MealRecord) -> None:
    """
    Render one result card: thumbnail, category badge, name and area.

    Meals that carry detail fields (search and lookup results) get a
    collapsed "Recipe" expander with ingredients and instructions.
    """
    st.markdown('<div class="mf-card">', unsafe_allow_html=True)
    if meal.thumbnail_url:
        st.image(meal.thumbnail_url, use_container_width=True)
    if meal.category:
        st.markdown(f'<span class="mf-badge">{escape(meal.category)}</span>', unsafe_allow_html=True)
    st.markdown(f'<p class="mf-card-title">{escape(meal.name)}</p>', unsafe_allow_html=True)
    if meal.area:
        st.markdown(f'<p class="mf-card-sub">{escape(meal.area)}</p>', unsafe_allow_html=True)

    if meal.instructions or meal.ingredients:
        with st.expander("Recipe", expanded=False):
            if meal.ingredients:
                st.markdown(
                    "\n".join(
                        f"- {ingredient.measure + ' ' if ingredient.measure else ''}{ingredient.name}"
                        for ingredient in meal.ingredients
                    )
                )
            if meal.instructions:
                st.write(meal.instructions)
            if meal.tags:
                st.caption(" · ".join(meal.tags))
            if meal.youtube_url:
                st.markdown(f"[Watch on YouTube]({meal.youtube_url})")
            if meal.source_url:
                st.markdown(f"[Original recipe]({meal.source_url})")
    st.markdown('</div>', unsafe_allow_html=True)


def pagination_strip(pagination: PaginationInfo, on_page: Callable[[int], None]) -> None:
    """
    Render Prev / numbered / Next buttons and a "Page X / Y" label.

    Args:
        pagination: Metadata from the current PageView
        on_page: Callback invoked with the requested page number
    """
    pages = page_window(pagination.current_page, pagination.total_pages)
    cols = st.columns(len(pages) + 3)

    with cols[0]:
        st.button(
            "⟨ Prev",
            key="page_prev",
            disabled=not pagination.has_prev,
            on_click=on_page,
            args=(pagination.current_page - 1,),
        )
    for col, page in zip(cols[1:], pages):
        with col:
            st.button(
                str(page),
                key=f"page_{page}",
                type="primary" if page == pagination.current_page else "secondary",
                on_click=on_page,
                args=(page,),
            )
    with cols[len(pages) + 1]:
        st.button(
            "Next ⟩",
            key="page_next",
            disabled=not pagination.has_next,
            on_click=on_page,
            args=(pagination.current_page + 1,),
        )
    with cols[len(pages) + 2]:
        st.caption(f"Page {pagination.current_page} / {pagination.total_pages}")
