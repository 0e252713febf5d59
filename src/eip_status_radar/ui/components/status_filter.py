"""Single-status select box driving the area chart."""

from __future__ import annotations

from typing import Callable, Optional

import streamlit as st

from eip_status_radar.config import STATUS_OPTIONS, normalize_status
from eip_status_radar.ui.state import (
    SELECTED_STATUS_UI_KEY,
    get_selected_status,
    set_selected_status,
)


def _on_status_ui_change(on_change: Optional[Callable[[str], None]]) -> None:
    picked = normalize_status(
        st.session_state.get(SELECTED_STATUS_UI_KEY), fallback=get_selected_status()
    )
    set_selected_status(picked)
    if on_change is not None:
        on_change(picked)


def render_status_filter(
    *,
    on_change: Optional[Callable[[str], None]] = None,
    label: str = "Status",
) -> str:
    """Render the select box and return the (canonical) selected status."""
    current = get_selected_status()
    if st.session_state.get(SELECTED_STATUS_UI_KEY) not in STATUS_OPTIONS:
        st.session_state[SELECTED_STATUS_UI_KEY] = current

    st.selectbox(
        label,
        options=list(STATUS_OPTIONS),
        key=SELECTED_STATUS_UI_KEY,
        on_change=_on_status_ui_change,
        args=(on_change,),
        label_visibility="collapsed",
    )
    return get_selected_status()
