"""Common UI components shared across pages.

Pure rendering functions for reusable Streamlit widgets.
"""

import streamlit as st

from src.app.logic.overview import StatCardValue


def render_stat_cards(cards: list[StatCardValue], per_row: int = 4) -> None:
    """Render statistics as metric cards, `per_row` to a row.

    Args:
        cards: Label/value pairs, values already defaulted to 0
        per_row: Number of columns in each row of the grid
    """
    for start in range(0, len(cards), per_row):
        cols = st.columns(per_row)
        for col, card in zip(cols, cards[start : start + per_row]):
            with col:
                with st.container(border=True):
                    st.metric(label=card.label, value=f"{card.value:,}")


def render_page_header(title: str, description: str | None = None) -> None:
    """Render the page title with an optional caption underneath."""
    st.title(title)
    if description:
        st.caption(description)


def render_sidebar_header(title: str, description: str | None = None) -> None:
    """Render consistent sidebar header with optional description.

    Args:
        title: Main sidebar title
        description: Optional description text below title
    """
    st.sidebar.title(title)
    if description:
        st.sidebar.caption(description)
    st.sidebar.divider()


def render_empty_state(message: str, icon: str = "📊") -> None:
    """Render empty state placeholder when no data is available.

    Args:
        message: Message to display
        icon: Emoji icon to show
    """
    st.info(f"{icon} {message}")


def render_section_error(message: str | None) -> None:
    if message:
        st.error(f"⚠️ {message}")


GLOBAL_MARGINS = dict(t=30, l=5, r=5, b=0)
GLOBAL_FONT = dict(
    family="Arial",
    size=14,
)
