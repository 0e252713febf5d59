"""Session state keys and helpers for the dashboard UI."""

from __future__ import annotations

from typing import Optional

import streamlit as st

from eip_status_radar.config import Settings, normalize_status
from eip_status_radar.readiness import RenderReadinessController
from eip_status_radar.schema import GraphsDocument

# Canonical keys shared across dashboard modules/components.
SELECTED_STATUS_KEY = "selected_status"
SELECTED_STATUS_UI_KEY = "selected_status_ui"
STATUS_BOOTSTRAPPED_KEY = "__status_bootstrapped_from_env"
READINESS_KEY = "__render_readiness"
GRAPHS_DOC_KEY = "__graphs_document"
FETCH_MESSAGE_KEY = "__graphs_fetch_message"


def bootstrap_status_from_env(settings: Settings) -> None:
    """Seed the selected status from the configured default once per session."""
    if bool(st.session_state.get(STATUS_BOOTSTRAPPED_KEY, False)):
        return
    if SELECTED_STATUS_KEY not in st.session_state:
        st.session_state[SELECTED_STATUS_KEY] = normalize_status(settings.DEFAULT_STATUS)
    else:
        st.session_state[SELECTED_STATUS_KEY] = normalize_status(
            st.session_state.get(SELECTED_STATUS_KEY)
        )
    st.session_state[STATUS_BOOTSTRAPPED_KEY] = True


def get_selected_status() -> str:
    return normalize_status(st.session_state.get(SELECTED_STATUS_KEY))


def set_selected_status(status: str) -> str:
    value = normalize_status(status)
    st.session_state[SELECTED_STATUS_KEY] = value
    return value


def get_controller(settings: Settings) -> RenderReadinessController:
    """Return the session's readiness controller, creating it on first use."""
    ctrl = st.session_state.get(READINESS_KEY)
    if isinstance(ctrl, RenderReadinessController):
        return ctrl
    ctrl = RenderReadinessController(
        selected_status=get_selected_status(),
        loading_delay=float(settings.LOADING_DELAY_SECONDS),
        remount_delay=float(settings.REMOUNT_DELAY_SECONDS),
    )
    st.session_state[READINESS_KEY] = ctrl
    return ctrl


def get_graphs_doc() -> Optional[GraphsDocument]:
    doc = st.session_state.get(GRAPHS_DOC_KEY)
    return doc if isinstance(doc, GraphsDocument) else None


def store_graphs_doc(doc: Optional[GraphsDocument], message: str = "") -> None:
    """Replace the fetched document wholesale (never merged)."""
    st.session_state[GRAPHS_DOC_KEY] = doc
    st.session_state[FETCH_MESSAGE_KEY] = str(message or "")


def clear_graphs_doc() -> None:
    st.session_state.pop(GRAPHS_DOC_KEY, None)
    st.session_state.pop(FETCH_MESSAGE_KEY, None)
