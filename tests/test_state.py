from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from eip_status_radar.config import Settings
from eip_status_radar.readiness import RenderReadinessController
from eip_status_radar.schema import GraphsDocument
from eip_status_radar.ui import state as ui_state


def _fake_session(monkeypatch: Any, initial: dict[str, Any] | None = None) -> dict[str, Any]:
    fake_state: dict[str, Any] = dict(initial or {})
    monkeypatch.setattr(ui_state, "st", SimpleNamespace(session_state=fake_state))
    return fake_state


def test_bootstrap_status_from_env_hydrates_selected_status(monkeypatch: Any) -> None:
    fake_state = _fake_session(monkeypatch)

    ui_state.bootstrap_status_from_env(Settings(DEFAULT_STATUS="Final"))

    assert fake_state[ui_state.SELECTED_STATUS_KEY] == "Final"
    assert fake_state[ui_state.STATUS_BOOTSTRAPPED_KEY] is True


def test_bootstrap_status_from_env_keeps_existing_session_value(monkeypatch: Any) -> None:
    fake_state = _fake_session(monkeypatch, {ui_state.SELECTED_STATUS_KEY: "review"})

    ui_state.bootstrap_status_from_env(Settings(DEFAULT_STATUS="Final"))

    assert fake_state[ui_state.SELECTED_STATUS_KEY] == "Review"


def test_bootstrap_runs_once_per_session(monkeypatch: Any) -> None:
    fake_state = _fake_session(monkeypatch)
    ui_state.bootstrap_status_from_env(Settings(DEFAULT_STATUS="Final"))
    ui_state.set_selected_status("Living")

    ui_state.bootstrap_status_from_env(Settings(DEFAULT_STATUS="Final"))

    assert fake_state[ui_state.SELECTED_STATUS_KEY] == "Living"


def test_get_controller_is_reused_within_a_session(monkeypatch: Any) -> None:
    _fake_session(monkeypatch, {ui_state.SELECTED_STATUS_KEY: "Final"})
    settings = Settings(LOADING_DELAY_SECONDS=0.5, REMOUNT_DELAY_SECONDS=0.2)

    first = ui_state.get_controller(settings)
    second = ui_state.get_controller(settings)

    assert isinstance(first, RenderReadinessController)
    assert first is second
    assert first.selected_status == "Final"
    assert first.loading_delay == 0.5
    assert first.remount_delay == 0.2


def test_store_and_clear_graphs_doc(monkeypatch: Any) -> None:
    fake_state = _fake_session(monkeypatch)
    assert ui_state.get_graphs_doc() is None

    doc = GraphsDocument()
    ui_state.store_graphs_doc(doc, "Loaded 0 status groups (0 records).")
    assert ui_state.get_graphs_doc() is doc
    assert fake_state[ui_state.FETCH_MESSAGE_KEY].startswith("Loaded 0")

    ui_state.store_graphs_doc(None, "boom")
    assert ui_state.GRAPHS_DOC_KEY in fake_state
    assert ui_state.get_graphs_doc() is None

    ui_state.clear_graphs_doc()
    assert ui_state.GRAPHS_DOC_KEY not in fake_state
    assert ui_state.FETCH_MESSAGE_KEY not in fake_state
