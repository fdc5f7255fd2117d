"""Builds the store, repository and per-session controller for the pages.

The HTTP client is a process-wide resource; dashboard data is never cached
across sessions, each browser session owns its own controller.
"""

import streamlit as st
from loguru import logger

from src.app.logic.dashboard import DashboardController
from src.core.config import configure_logging, get_settings
from src.core.repository import DashboardRepository
from src.core.store import SupabaseStore

CONTROLLER_KEY = "dashboard_controller"


@st.cache_resource  # type: ignore[misc]
def get_repository() -> DashboardRepository:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} {settings.app_version}")
    store = SupabaseStore.from_settings(settings)
    return DashboardRepository(store, queries_limit=settings.queries_limit)


def get_controller() -> DashboardController:
    """Return this session's controller, creating it on first use.

    Raises:
        pydantic.ValidationError: If the store credentials are not configured
    """
    controller = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        repository = get_repository()
        controller = DashboardController(repository, queries_limit=repository.queries_limit)
        st.session_state[CONTROLLER_KEY] = controller
    return controller
