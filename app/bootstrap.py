"""Application bootstrap and initialization."""

import asyncio
from typing import Any

import streamlit as st

from slidefolio import Config, SlideLibrary

from app.constants import (
    CONFIG_DIR,
    SessionKeys,
    DEFAULT_PAGE_TITLE,
    DEFAULT_PAGE_LAYOUT,
)
from app.config_loader import load_base_config
from app.state import set_state_value, has_state_key


def init_session_state() -> None:
    """Initialize session state: configuration and the loaded slide library."""
    if not has_state_key(SessionKeys.BASE_CONFIG):
        set_state_value(SessionKeys.BASE_CONFIG, load_base_config())

    if not has_state_key(SessionKeys.LIBRARY):
        config = Config.from_dict(st.session_state[SessionKeys.BASE_CONFIG], CONFIG_DIR)
        library = SlideLibrary.from_config(config)
        asyncio.run(library.store.load())
        set_state_value(SessionKeys.LIBRARY, library)

    if not has_state_key(SessionKeys.EDITING_FOLDER):
        set_state_value(SessionKeys.EDITING_FOLDER, None)


def configure_page(base_config: dict[str, Any]) -> None:
    """Configure Streamlit page settings."""
    page_config = base_config.get('ui', {}).get('page', {})

    st.set_page_config(
        page_title=page_config.get('title', DEFAULT_PAGE_TITLE),
        layout=page_config.get('layout', DEFAULT_PAGE_LAYOUT)
    )


def render_header() -> None:
    """Render the application header."""
    st.title("🗂️ Slide Folders")
    st.markdown("Upload a spreadsheet and its images to build a folder of slides.")
    st.divider()


def bootstrap_app() -> dict[str, Any]:
    """Bootstrap the application.

    Returns:
        The base configuration dictionary
    """
    init_session_state()

    base_config = st.session_state[SessionKeys.BASE_CONFIG]
    configure_page(base_config)
    render_header()

    return base_config
