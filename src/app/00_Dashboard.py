"""Admin Analytics - Main Entry Point.

Wiring layer connecting the dashboard controller and views.
Shows program statistics, the registration trend and user queries.
"""

import streamlit as st
from loguru import logger
from pydantic import ValidationError

from src.app.logic.data_loader import get_controller
from src.app.logic.overview import (
    ADMIN_STAT_CARDS,
    get_queries_caption,
    get_stat_card_values,
    get_trend_frame,
)
from src.app.views.common import (
    render_empty_state,
    render_page_header,
    render_section_error,
    render_sidebar_header,
    render_stat_cards,
)
from src.app.views.overview import (
    render_queries_header,
    render_query_list,
    render_trend_chart,
)
from src.core.domain_models import Section

st.set_page_config(
    page_title="Admin Analytics",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

render_sidebar_header("Admin Analytics", "Mentorship program overview")

try:
    controller = get_controller()
except ValidationError as e:
    st.error("Store credentials missing. Set SUPABASE_URL and SUPABASE_ANON_KEY.")
    logger.error(f"Configuration error: {e}")
    st.stop()

if st.sidebar.button("🔄 Reload all"):
    controller.loaded = False

if not controller.loaded:
    placeholder = st.empty()
    placeholder.info("Loading analytics…")
    controller.load_all()
    placeholder.empty()

# Header
render_page_header("📊 Admin Analytics")

# ------------------------------------------------------------------
# Top Metrics
# ------------------------------------------------------------------

if controller.stats is None:
    stats_error = controller.error_for(Section.STATS)
    if stats_error:
        render_section_error(stats_error)
    else:
        render_empty_state("Loading analytics…", icon="⏳")
else:
    render_stat_cards(get_stat_card_values(controller.stats, ADMIN_STAT_CARDS))

st.divider()

# ------------------------------------------------------------------
# Trend Section
# ------------------------------------------------------------------

with st.container(border=True):
    st.subheader("Daily Mentee Registration Trend")
    render_section_error(controller.error_for(Section.TREND))
    render_trend_chart(get_trend_frame(controller.trend))

# ------------------------------------------------------------------
# Queries Section
# ------------------------------------------------------------------

with st.container(border=True):
    if render_queries_header():
        with st.spinner("Loading queries…"):
            controller.load_queries()

    render_section_error(controller.error_for(Section.QUERIES))
    if controller.queries:
        st.caption(
            get_queries_caption(
                controller.uncleared_count, len(controller.queries), controller.stats
            )
        )

    selected_query = render_query_list(controller.queries, controller.loading_queries)
    if selected_query is not None:
        controller.mark_cleared(selected_query)
        st.rerun()
