from __future__ import annotations

from typing import Any, List, Optional

import pytest
import requests

from eip_status_radar.config import Settings
from eip_status_radar.ingest import graphs_source as graphs_mod


class _FakeResponse:
    def __init__(
        self,
        status_code: int,
        *,
        payload: Any = None,
        text: str = "",
        bad_json: bool = False,
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self._bad_json = bad_json

    def json(self) -> Any:
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class _FakeSession:
    def __init__(self, responses: List[Any]) -> None:
        self.headers: dict[str, str] = {}
        self.calls: List[str] = []
        self._responses = list(responses)

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append(url)
        nxt = self._responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    def close(self) -> None:
        pass


def _settings(url: str = "http://localhost:3000/api/graphs") -> Settings:
    return Settings(GRAPHS_API_URL=url)


def _payload() -> List[dict[str, Any]]:
    return [
        {
            "status": "Draft",
            "eips": [
                {"category": "Core", "month": 3, "year": 2022, "count": 5, "date": "ignored"},
                {"category": "ERC", "month": 4, "year": 2022, "count": 2},
            ],
        },
        {"status": "Final", "eips": []},
    ]


def _no_wait(monkeypatch: Any) -> None:
    monkeypatch.setattr(graphs_mod._request.retry, "sleep", lambda _seconds: None)


def test_parse_graphs_payload_keeps_valid_records() -> None:
    groups, rejected = graphs_mod.parse_graphs_payload(_payload())
    assert rejected == []
    assert [g.status for g in groups] == ["Draft", "Final"]
    assert groups[0].proposals[0].category == "Core"
    assert groups[0].proposals[0].month == 3


def test_parse_graphs_payload_quarantines_malformed_records() -> None:
    payload: List[Any] = [
        {
            "status": "Draft",
            "eips": [
                {"category": "Core", "month": 13, "year": 2022, "count": 1},
                {"category": "Core", "month": 1, "year": 2022, "count": -4},
                {"category": "Core", "month": 2, "year": 2022},
                {"category": "Meta", "month": 2, "year": 2022, "count": 3},
                "garbage",
            ],
        },
        "not a group",
        {"eips": []},
        {"status": "Review", "eips": {"category": "Core"}},
        {"status": "Withdrawn", "eips": [{"category": "ERC", "month": 1, "year": 2020, "count": 1}]},
    ]
    groups, rejected = graphs_mod.parse_graphs_payload(payload)

    assert [g.status for g in groups] == ["Draft", "Withdrawn"]
    assert [e.category for e in groups[0].proposals] == ["Meta"]
    assert len(rejected) == 7
    assert any("month" in line for line in rejected)
    assert any("group #1" in line for line in rejected)


def test_parse_graphs_payload_rejects_non_list_body() -> None:
    with pytest.raises(graphs_mod.GraphsPayloadError):
        graphs_mod.parse_graphs_payload({"status": "Draft"})


def test_fetch_graphs_returns_document(monkeypatch: Any) -> None:
    session = _FakeSession([_FakeResponse(200, payload=_payload())])

    ok, msg, doc = graphs_mod.fetch_graphs(_settings(), session=session)  # type: ignore[arg-type]

    assert ok is True
    assert doc is not None
    assert doc.source_url == "http://localhost:3000/api/graphs"
    assert doc.fetched_at
    assert [g.status for g in doc.groups] == ["Draft", "Final"]
    assert "2 records" in msg
    assert session.headers["Accept"] == "application/json"


def test_fetch_graphs_reports_http_errors(monkeypatch: Any) -> None:
    session = _FakeSession([_FakeResponse(500, text="boom token=abc123")])

    ok, msg, doc = graphs_mod.fetch_graphs(_settings(), session=session)  # type: ignore[arg-type]

    assert ok is False
    assert doc is None
    assert "500" in msg
    assert "abc123" not in msg


def test_fetch_graphs_reports_non_json_body() -> None:
    session = _FakeSession([_FakeResponse(200, bad_json=True)])
    ok, msg, doc = graphs_mod.fetch_graphs(_settings(), session=session)  # type: ignore[arg-type]
    assert ok is False
    assert doc is None
    assert "non-JSON" in msg


def test_fetch_graphs_reports_unexpected_shape() -> None:
    session = _FakeSession([_FakeResponse(200, payload={"groups": []})])
    ok, msg, _ = graphs_mod.fetch_graphs(_settings(), session=session)  # type: ignore[arg-type]
    assert ok is False
    assert "Unexpected graphs payload" in msg


def test_fetch_graphs_retries_transient_statuses(monkeypatch: Any) -> None:
    _no_wait(monkeypatch)
    session = _FakeSession(
        [
            _FakeResponse(503),
            requests.ConnectionError("reset"),
            _FakeResponse(200, payload=_payload()),
        ]
    )

    ok, _, doc = graphs_mod.fetch_graphs(_settings(), session=session)  # type: ignore[arg-type]

    assert ok is True
    assert doc is not None
    assert len(session.calls) == 3


def test_fetch_graphs_gives_up_after_three_attempts(monkeypatch: Any) -> None:
    _no_wait(monkeypatch)
    session = _FakeSession([requests.ConnectionError("down")] * 3)

    ok, msg, doc = graphs_mod.fetch_graphs(_settings(), session=session)  # type: ignore[arg-type]

    assert ok is False
    assert doc is None
    assert "Could not reach" in msg
    assert len(session.calls) == 3


@pytest.mark.parametrize(
    "url",
    ["", "ftp://example.com/api/graphs", "http://example.com/api/graphs", "https://u:p@x.org/g"],
)
def test_fetch_graphs_rejects_invalid_endpoint(url: str) -> None:
    session = _FakeSession([])
    ok, _, doc = graphs_mod.fetch_graphs(_settings(url), session=session)  # type: ignore[arg-type]
    assert ok is False
    assert doc is None
    assert session.calls == []


def test_fetch_graphs_does_not_retry_plain_http_errors(monkeypatch: Any) -> None:
    calls: List[Optional[str]] = []

    def fake_request(session: Any, url: str, **kwargs: Any) -> _FakeResponse:
        calls.append(url)
        return _FakeResponse(404, text="not found")

    monkeypatch.setattr(graphs_mod, "_request", fake_request)
    ok, msg, _ = graphs_mod.fetch_graphs(_settings(), session=_FakeSession([]))  # type: ignore[arg-type]

    assert ok is False
    assert "404" in msg
    assert calls == ["http://localhost:3000/api/graphs"]


def test_parse_graphs_payload_labels_blank_categories() -> None:
    payload = [
        {
            "status": "Draft",
            "eips": [
                {"category": "  ", "month": 1, "year": 2022, "count": 2},
                {"category": " Core ", "month": 1, "year": 2022, "count": 1},
            ],
        }
    ]
    groups, rejected = graphs_mod.parse_graphs_payload(payload)

    assert rejected == []
    assert [e.category for e in groups[0].proposals] == [graphs_mod.UNKNOWN_CATEGORY, "Core"]
