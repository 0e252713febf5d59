"""Fetch and validate the per-status proposal activity groups."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import requests
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from eip_status_radar.config import STATUS_OPTIONS, Settings
from eip_status_radar.logging_config import get_logger
from eip_status_radar.schema import GraphsDocument, ProposalEvent, ProposalStatusGroup
from eip_status_radar.security import safe_log_text, validate_source_url
from eip_status_radar.utils import now_iso

log = get_logger(__name__)

RETRY_STATUS_CODES = (429, 502, 503, 504)
UNKNOWN_CATEGORY = "Unknown"


class TransientSourceError(RuntimeError):
    """Retryable upstream condition (rate limit, gateway hiccup)."""


class GraphsPayloadError(ValueError):
    """The response body is not the expected list of status groups."""


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type(
        (TransientSourceError, requests.ConnectionError, requests.Timeout)
    ),
    reraise=True,
)
def _request(session: requests.Session, url: str, **kwargs: Any) -> requests.Response:
    r = session.get(url, **kwargs)
    if r.status_code in RETRY_STATUS_CODES:
        raise TransientSourceError(f"upstream returned {r.status_code}")
    return r


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "value"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_graphs_payload(payload: Any) -> Tuple[List[ProposalStatusGroup], List[str]]:
    """Validate a decoded payload, quarantining malformed records.

    Returns the valid groups (events that failed validation are dropped from
    their group) and a human-readable description per rejected record.
    """
    if not isinstance(payload, list):
        raise GraphsPayloadError(
            f"expected a JSON array of status groups, got {type(payload).__name__}"
        )

    groups: List[ProposalStatusGroup] = []
    rejected: List[str] = []
    for idx, row in enumerate(payload):
        if not isinstance(row, dict):
            rejected.append(f"group #{idx}: not an object")
            continue
        status = row.get("status")
        if not isinstance(status, str) or not status.strip():
            rejected.append(f"group #{idx}: missing status")
            continue
        raw_events = row.get("eips")
        if raw_events is None:
            raw_events = []
        if not isinstance(raw_events, list):
            rejected.append(f"group #{idx} ({status}): 'eips' is not a list")
            continue
        if status not in STATUS_OPTIONS:
            log.debug("status %r is outside the selectable set; kept but never shown", status)

        events: List[ProposalEvent] = []
        for eidx, raw in enumerate(raw_events):
            if isinstance(raw, dict) and isinstance(raw.get("category"), str):
                raw = {**raw, "category": raw["category"].strip() or UNKNOWN_CATEGORY}
            try:
                events.append(ProposalEvent.model_validate(raw))
            except ValidationError as e:
                rejected.append(f"group #{idx} ({status}) event #{eidx}: {_describe_errors(e)}")
        groups.append(ProposalStatusGroup(status=status, proposals=events))

    if rejected:
        log.warning("quarantined %d malformed record(s) from graphs payload", len(rejected))
        for line in rejected:
            log.debug("rejected: %s", line)
    return groups, rejected


def fetch_graphs(
    settings: Settings,
    session: Optional[requests.Session] = None,
) -> Tuple[bool, str, Optional[GraphsDocument]]:
    """Fetch every status group from the graphs endpoint (no server-side filtering)."""
    try:
        url = validate_source_url(settings.GRAPHS_API_URL, service_name="Graphs API")
    except ValueError as e:
        log.warning("invalid graphs endpoint: %s", e)
        return False, str(e), None

    own_session = session is None
    http = session or requests.Session()
    http.headers.update({"Accept": "application/json"})
    timeout = (float(settings.GRAPHS_CONNECT_TIMEOUT), float(settings.GRAPHS_READ_TIMEOUT))

    try:
        try:
            r = _request(http, url, timeout=timeout)
        except (TransientSourceError, requests.RequestException) as e:
            log.warning("graphs fetch failed for %s: %s", url, e)
            return False, f"Could not reach {url}: {e}", None

        if r.status_code != 200:
            snippet = safe_log_text(r.text[:200])
            log.warning("graphs fetch returned %s: %s", r.status_code, snippet)
            return False, f"Graphs API error ({r.status_code}): {snippet}", None

        try:
            payload = r.json()
        except ValueError as e:
            log.warning("graphs response is not JSON: %s", e)
            return False, "Graphs API returned a non-JSON body.", None

        try:
            groups, rejected = parse_graphs_payload(payload)
        except GraphsPayloadError as e:
            log.warning("graphs payload rejected: %s", e)
            return False, f"Unexpected graphs payload: {e}", None
    finally:
        if own_session:
            http.close()

    doc = GraphsDocument(
        schema_version="1.0",
        fetched_at=now_iso(),
        source_url=url,
        groups=groups,
        rejected=rejected,
    )
    n_events = sum(len(g.proposals) for g in groups)
    log.info(
        "fetched %d status group(s), %d event(s), %d rejected", len(groups), n_events, len(rejected)
    )
    msg = f"Loaded {len(groups)} status groups ({n_events} records)"
    if rejected:
        msg += f", {len(rejected)} malformed record(s) skipped"
    return True, msg + ".", doc
