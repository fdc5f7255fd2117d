"""View components for the admin analytics page.

Renders the registration trend chart and the user query list.
"""

import plotly.express as px
import plotly.graph_objects as go
import polars as pl
import streamlit as st

from src.app.logic.overview import escape_markdown, format_timestamp
from src.app.views.colors import CLEARED_COLOR, TREND_LINE_COLOR, Colors
from src.app.views.common import GLOBAL_FONT, GLOBAL_MARGINS
from src.core.domain_models import UserQuery

QUERY_LIST_HEIGHT = 520


def make_trend_chart(df_trend: pl.DataFrame) -> go.Figure:
    """Line chart of daily registrations.

    Points are joined by straight segments; days absent from the data are
    not filled in.

    Args:
        df_trend: Frame with columns [day, total], sorted by day
    """
    if df_trend.is_empty():
        fig = go.Figure(go.Scatter(x=[], y=[], mode="lines+markers"))
    else:
        fig = px.line(
            df_trend,
            x="day",
            y="total",
            markers=True,
            line_shape="linear",
            labels={"day": "Day", "total": "Registrations"},
        )

    fig.update_traces(
        line=dict(width=2, color=TREND_LINE_COLOR, shape="linear"),
        marker=dict(size=4, color=TREND_LINE_COLOR),
    )
    fig.update_layout(
        height=320,
        margin=GLOBAL_MARGINS,
        font=GLOBAL_FONT,
        template="plotly_dark",
        hovermode="x unified",
        paper_bgcolor=Colors.surface,
        plot_bgcolor=Colors.surface,
        showlegend=False,
    )
    fig.update_xaxes(gridcolor=Colors.grid, color=Colors.axis, title_text="Day")
    fig.update_yaxes(gridcolor=Colors.grid, color=Colors.axis, title_text="Registrations")
    return fig


def render_trend_chart(df_trend: pl.DataFrame, key: str = "trend_chart") -> None:
    fig = make_trend_chart(df_trend)
    st.plotly_chart(fig, use_container_width=True, key=key)
    if df_trend.is_empty():
        st.caption("No registrations recorded yet.")


def render_queries_header() -> bool:
    """Render the section title and the refresh control.

    Returns:
        True if "Refresh" was clicked on this run
    """
    col_title, col_refresh = st.columns([5, 1], vertical_alignment="bottom")
    with col_title:
        st.subheader("User Queries")
    with col_refresh:
        return st.button("🔄 Refresh", key="refresh_queries")


def render_query_card(query: UserQuery) -> bool:
    """Render one query. Returns True if its "Mark Cleared" was clicked."""
    clicked = False
    with st.container(border=True):
        col_body, col_action = st.columns([5, 1])
        with col_body:
            st.caption(escape_markdown(query.email))
            st.markdown(f"**{escape_markdown(query.subject)}**")
            st.text(query.message)
            st.caption(format_timestamp(query.createdat))
        with col_action:
            if query.iscleared:
                st.markdown(
                    f"<span style='color:{CLEARED_COLOR};font-weight:600'>Cleared</span>",
                    unsafe_allow_html=True,
                )
            else:
                clicked = st.button(
                    "Mark Cleared",
                    key=f"clear_{query.id}",
                    type="primary",
                )
    return clicked


def render_query_list(queries: list[UserQuery], loading: bool) -> str | None:
    """Render the scrollable list of query cards.

    Args:
        queries: Queries to show, newest first
        loading: Whether a fetch is still in flight; suppresses the empty message

    Returns:
        Id of the query whose "Mark Cleared" button was clicked, if any
    """
    selected: str | None = None
    with st.container(height=QUERY_LIST_HEIGHT):
        if not queries and not loading:
            st.caption("No queries found.")
        for query in queries:
            if render_query_card(query):
                selected = query.id
    return selected
