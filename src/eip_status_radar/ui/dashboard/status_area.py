"""Status-filtered area chart panel: fetch, filter, readiness gating and exports."""

from __future__ import annotations

import html
import time
from typing import Any, List, Optional

import pandas as pd
import streamlit as st

from eip_status_radar.config import Settings
from eip_status_radar.ingest.graphs_source import fetch_graphs
from eip_status_radar.logging_config import get_logger
from eip_status_radar.readiness import ReadinessPhase, RenderReadinessController
from eip_status_radar.schema import GraphsDocument, SeriesPoint
from eip_status_radar.series import build_series, series_frame, status_category_totals
from eip_status_radar.ui.area_chart import area_figure, build_area_config, render_area_chart
from eip_status_radar.ui.cache import cached_by_signature, clear_cache, document_signature
from eip_status_radar.ui.components.status_filter import render_status_filter
from eip_status_radar.ui.dashboard.downloads import render_export_actions
from eip_status_radar.ui.state import (
    FETCH_MESSAGE_KEY,
    GRAPHS_DOC_KEY,
    bootstrap_status_from_env,
    clear_graphs_doc,
    get_controller,
    get_graphs_doc,
    store_graphs_doc,
)

log = get_logger(__name__)

PANEL_KEY = "status_area_panel"
# Upper bound for a single sleep before rerunning; keeps the session responsive.
MAX_POLL_SECONDS = 1.0
SERIES_CACHE_NAMESPACE = "status_series"


def load_graphs(settings: Settings, ctrl: RenderReadinessController) -> Optional[GraphsDocument]:
    """Fetch once and store the full, unfiltered result set in the session."""
    ok, msg, doc = fetch_graphs(settings)
    store_graphs_doc(doc if ok else None, msg)
    if ok:
        ctrl.clear_error()
    else:
        ctrl.fail(msg)
    return doc if ok else None


def series_for(doc: Optional[GraphsDocument], status: str) -> List[SeriesPoint]:
    if doc is None:
        return []
    points, _ = cached_by_signature(
        SERIES_CACHE_NAMESPACE,
        document_signature(doc, salt=status),
        lambda: build_series(doc.groups, status),
    )
    return points


def _on_status_change(settings: Settings, status: str) -> None:
    ctrl = get_controller(settings)
    if ctrl.select_status(status):
        log.info("status filter changed to %s (chart generation %d)", status, ctrl.generation)


def _on_retry(settings: Settings) -> None:
    clear_graphs_doc()
    clear_cache(SERIES_CACHE_NAMESPACE)
    get_controller(settings).retry()


def _render_loader(slot: Any) -> None:
    slot.markdown(
        '<div class="eip-loader">Loading chart…</div>',
        unsafe_allow_html=True,
    )


def _render_quarantine_notice(doc: Optional[GraphsDocument]) -> None:
    if doc is None or not doc.rejected:
        return
    st.warning(f"{len(doc.rejected)} malformed record(s) were skipped from the data source.")
    with st.expander("Skipped records", expanded=False):
        st.code("\n".join(doc.rejected), language="text")


def render_status_area(settings: Settings, *, dark_mode: bool = False) -> None:
    bootstrap_status_from_env(settings)
    ctrl = get_controller(settings)
    ctrl.mount()

    with st.container(key=PANEL_KEY):
        st.markdown(
            f'<div class="eip-status-title">Status: {html.escape(ctrl.selected_status)}</div>',
            unsafe_allow_html=True,
        )
        render_status_filter(on_change=lambda s: _on_status_change(settings, s))

        if GRAPHS_DOC_KEY not in st.session_state:
            with st.spinner("Fetching EIP activity…"):
                load_graphs(settings, ctrl)

        ctrl.tick()
        doc = get_graphs_doc()
        if doc is None and not ctrl.error:
            # The chart is only drawn over a fetched document.
            ctrl.fail(str(st.session_state.get(FETCH_MESSAGE_KEY) or ""))
        snap = ctrl.snapshot()
        points = series_for(doc, snap.selected_status)
        slot = st.empty()

        if snap.phase is ReadinessPhase.ERROR:
            with slot.container():
                st.error(f"Could not load EIP activity. {snap.error}")
                st.button(
                    "Retry",
                    key=f"{PANEL_KEY}::retry",
                    on_click=_on_retry,
                    args=(settings,),
                )
        elif snap.phase is ReadinessPhase.LOADING:
            _render_loader(slot)
        elif snap.phase is ReadinessPhase.CHART_TEARING_DOWN:
            slot.empty()
        else:
            config = build_area_config(points, settings)
            fig = area_figure(config, dark_mode=dark_mode)
            with slot.container():
                render_area_chart(fig, key=snap.chart_key)
                totals = status_category_totals(doc.groups) if doc is not None else pd.DataFrame()
                render_export_actions(
                    key_prefix=PANEL_KEY,
                    status=snap.selected_status,
                    series_df=series_frame(points),
                    totals_df=totals,
                    figure=fig,
                )
                if not totals.empty:
                    with st.expander("Totals by status and category", expanded=False):
                        st.dataframe(totals, use_container_width=True)

        _render_quarantine_notice(doc)

    wait = ctrl.seconds_until_next()
    if wait is not None:
        # Deadlines are evaluated on rerun; sleep until the next one is due.
        time.sleep(min(wait, MAX_POLL_SECONDS))
        st.rerun()
