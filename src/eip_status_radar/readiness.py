"""Render-readiness state machine for the status-filtered area chart.

The Plotly widget redraws unreliably when the swapped data set implies a
different set of series keys, so every status change forces a full remount:
the chart is torn down, then re-created under a new widget key after a short
delay, while a loading indicator is shown for a (longer) fixed delay.

Both delays are deadlines evaluated against an injectable clock. Each new
status change replaces the pending deadlines of the previous one, so a
superseded timer can never fire out of order.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from eip_status_radar.config import DEFAULT_STATUS
from eip_status_radar.logging_config import get_logger

log = get_logger(__name__)


class ReadinessPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    CHART_TEARING_DOWN = "chart_tearing_down"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ReadinessSnapshot:
    phase: ReadinessPhase
    selected_status: str
    is_loading: bool
    is_chart_ready: bool
    chart_key: str
    error: str = ""


@dataclass
class RenderReadinessController:
    selected_status: str = DEFAULT_STATUS
    loading_delay: float = 1.0
    remount_delay: float = 0.1
    clock: Callable[[], float] = time.monotonic
    key_prefix: str = "status_area"

    is_loading: bool = field(default=False, init=False)
    is_chart_ready: bool = field(default=False, init=False)
    mounted: bool = field(default=False, init=False)
    generation: int = field(default=0, init=False)
    error: str = field(default="", init=False)
    _loading_due: Optional[float] = field(default=None, init=False, repr=False)
    _remount_due: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.loading_delay < 0 or self.remount_delay < 0:
            raise ValueError("readiness delays must be >= 0")

    def _now(self, now: Optional[float]) -> float:
        return float(self.clock() if now is None else now)

    # -------------------------
    # Transitions
    # -------------------------
    def mount(self, now: Optional[float] = None) -> bool:
        """First paint: loading starts, the chart counts as mounted right away."""
        if self.mounted:
            return False
        t = self._now(now)
        self.mounted = True
        self.is_loading = True
        self._loading_due = t + self.loading_delay
        self.is_chart_ready = True
        self._remount_due = None
        return True

    def select_status(self, status: str, now: Optional[float] = None) -> bool:
        """Re-enter loading and request a chart remount for a new status.

        Returns False when `status` is already selected. A pending fetch error
        is kept; only `retry` or `clear_error` leaves the ERROR phase.
        """
        if not self.mounted:
            self.mount(now)
        if status == self.selected_status:
            return False
        t = self._now(now)
        log.debug("status change %s -> %s", self.selected_status, status)
        self.selected_status = status
        self._restart(t)
        return True

    def retry(self, now: Optional[float] = None) -> None:
        if not self.mounted:
            self.mount(now)
        self.error = ""
        self._restart(self._now(now))

    def _restart(self, t: float) -> None:
        self.generation += 1
        self.is_loading = True
        self.is_chart_ready = False
        # Overwriting the deadlines cancels whatever the previous change scheduled.
        self._loading_due = t + self.loading_delay
        self._remount_due = t + self.remount_delay

    def fail(self, message: str) -> None:
        self.error = str(message or "").strip() or "Unknown error"

    def clear_error(self) -> None:
        self.error = ""

    def tick(self, now: Optional[float] = None) -> bool:
        """Fire every due deadline. Returns True when any flag changed."""
        t = self._now(now)
        changed = False
        if self._remount_due is not None and t >= self._remount_due:
            self._remount_due = None
            if not self.is_chart_ready:
                self.is_chart_ready = True
                changed = True
        if self._loading_due is not None and t >= self._loading_due:
            self._loading_due = None
            if self.is_loading:
                self.is_loading = False
                changed = True
        return changed

    # -------------------------
    # Queries
    # -------------------------
    @property
    def phase(self) -> ReadinessPhase:
        if not self.mounted:
            return ReadinessPhase.IDLE
        if self.error:
            return ReadinessPhase.ERROR
        if self.is_loading:
            return ReadinessPhase.LOADING
        if not self.is_chart_ready:
            return ReadinessPhase.CHART_TEARING_DOWN
        return ReadinessPhase.READY

    @property
    def chart_key(self) -> str:
        return f"{self.key_prefix}::chart::{self.generation}"

    @property
    def pending(self) -> bool:
        return self._loading_due is not None or self._remount_due is not None

    def next_deadline(self) -> Optional[float]:
        dues = [d for d in (self._remount_due, self._loading_due) if d is not None]
        return min(dues) if dues else None

    def seconds_until_next(self, now: Optional[float] = None) -> Optional[float]:
        due = self.next_deadline()
        if due is None:
            return None
        return max(0.0, due - self._now(now))

    def snapshot(self) -> ReadinessSnapshot:
        return ReadinessSnapshot(
            phase=self.phase,
            selected_status=self.selected_status,
            is_loading=self.is_loading,
            is_chart_ready=self.is_chart_ready,
            chart_key=self.chart_key,
            error=self.error,
        )
