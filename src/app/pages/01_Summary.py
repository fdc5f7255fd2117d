"""Program Summary Page.

Compact view: four headline statistics and the registration trend,
refreshed every time the page is shown.
"""

import streamlit as st
from loguru import logger
from pydantic import ValidationError

from src.app.logic.data_loader import get_controller
from src.app.logic.overview import SUMMARY_STAT_CARDS, get_stat_card_values, get_trend_frame
from src.app.views.common import (
    render_page_header,
    render_section_error,
    render_sidebar_header,
    render_stat_cards,
)
from src.app.views.overview import render_trend_chart
from src.core.domain_models import Section

# Page config
st.set_page_config(
    page_title="Program Summary",
    page_icon="📈",
    layout="wide",
)

render_sidebar_header("Program Summary")

try:
    controller = get_controller()
except ValidationError as e:
    st.error("Store credentials missing. Set SUPABASE_URL and SUPABASE_ANON_KEY.")
    logger.error(f"Configuration error: {e}")
    st.stop()

with st.spinner("Loading summary..."):
    controller.load_stats()
    controller.load_trend()

render_page_header("📈 Program Summary", "Headline figures and daily registrations")

render_section_error(controller.error_for(Section.STATS))
render_stat_cards(get_stat_card_values(controller.stats, SUMMARY_STAT_CARDS))

with st.container(border=True):
    st.subheader("Daily Mentee Registrations")
    render_section_error(controller.error_for(Section.TREND))
    render_trend_chart(get_trend_frame(controller.trend), key="summary_trend_chart")
