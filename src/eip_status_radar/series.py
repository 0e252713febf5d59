"""Status-filtered time series built from the raw /api/graphs groups."""

from __future__ import annotations

from typing import Iterable, List, Sequence

import pandas as pd

from eip_status_radar.config import STATUS_OPTIONS
from eip_status_radar.dates import period_label
from eip_status_radar.palette import ordered_categories
from eip_status_radar.schema import ProposalStatusGroup, SeriesPoint

SERIES_COLUMNS: tuple[str, ...] = ("category", "date", "value")


def build_series(
    groups: Iterable[ProposalStatusGroup], selected_status: str
) -> List[SeriesPoint]:
    """Return one point per event of every group whose status matches exactly.

    Duplicate groups for the same status are concatenated in input order and
    duplicate (category, period) pairs are passed through unmerged. Output
    keeps insertion order; chronological ordering is the chart's job.
    """
    out: List[SeriesPoint] = []
    for group in groups:
        if group.status != selected_status:
            continue
        out.extend(
            SeriesPoint(
                category=event.category,
                period=period_label(event.month, event.year),
                value=event.count,
            )
            for event in group.proposals
        )
    return out


def series_frame(points: Sequence[SeriesPoint]) -> pd.DataFrame:
    """Shape points with the chart field names (`date` is the period label)."""
    if not points:
        return pd.DataFrame(columns=list(SERIES_COLUMNS))
    return pd.DataFrame(
        [{"category": p.category, "date": p.period, "value": int(p.value)} for p in points],
        columns=list(SERIES_COLUMNS),
    )


def status_category_totals(groups: Iterable[ProposalStatusGroup]) -> pd.DataFrame:
    """Summed counts per status (rows) and category (columns)."""
    rows = [
        {"status": g.status, "category": e.category, "count": int(e.count)}
        for g in groups
        for e in g.proposals
    ]
    if not rows:
        return pd.DataFrame()

    df = pd.DataFrame(rows)
    pivot = df.pivot_table(
        index="status", columns="category", values="count", aggfunc="sum", fill_value=0
    )
    known = [s for s in STATUS_OPTIONS if s in pivot.index]
    extra = sorted(s for s in pivot.index if s not in STATUS_OPTIONS)
    pivot = pivot.reindex(index=known + extra, columns=ordered_categories(pivot.columns))
    pivot.columns.name = None
    return pivot.astype(int)
