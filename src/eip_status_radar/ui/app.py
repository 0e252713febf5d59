"""Main Streamlit application shell."""

from __future__ import annotations

import streamlit as st
from streamlit import config as st_config

from eip_status_radar.config import Settings, ensure_env, load_settings
from eip_status_radar.logging_config import get_logger, setup_logging
from eip_status_radar.ui.dashboard.status_area import render_status_area
from eip_status_radar.ui.style import inject_css, render_hero

DARK_MODE_KEY = "workspace_dark_mode"

log = get_logger(__name__)


def _theme_pref_to_dark_mode(theme_pref: str, *, fallback: bool = False) -> bool:
    pref = str(theme_pref or "").strip().lower()
    if pref == "dark":
        return True
    if pref == "light":
        return False
    return fallback


def _resolve_dark_mode(settings: Settings) -> bool:
    if DARK_MODE_KEY not in st.session_state:
        streamlit_dark_fallback = (
            str(st_config.get_option("theme.base") or "").strip().lower() == "dark"
        )
        st.session_state[DARK_MODE_KEY] = _theme_pref_to_dark_mode(
            settings.THEME, fallback=streamlit_dark_fallback
        )
    return bool(st.session_state.get(DARK_MODE_KEY, False))


def main() -> None:
    """Boot settings and logging, then render the status area panel."""
    ensure_env()
    settings = load_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)

    title = str(settings.APP_TITLE or "").strip() or "EIP Status Radar"
    st.set_page_config(page_title=title, page_icon="📈", layout="wide")

    dark_mode = _resolve_dark_mode(settings)
    inject_css(dark_mode=dark_mode)
    render_hero(title)
    log.debug("rendering dashboard (theme=%s)", "dark" if dark_mode else "light")
    render_status_area(settings, dark_mode=dark_mode)
