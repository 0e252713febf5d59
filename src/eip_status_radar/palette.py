"""Stable category -> color assignment for the stacked area chart."""

from __future__ import annotations

import hashlib
from typing import Dict, Iterable, List, Optional

# Established once; not derived from fetched data.
CATEGORY_ORDER: tuple[str, ...] = (
    "Core",
    "Networking",
    "Interface",
    "ERC",
    "Meta",
    "Informational",
)

CATEGORY_COLORS: tuple[str, ...] = (
    "rgb(255, 99, 132)",
    "rgb(255, 159, 64)",
    "rgb(255, 205, 86)",
    "rgb(75, 192, 192)",
    "rgb(54, 162, 235)",
    "rgb(153, 102, 255)",
    "rgb(255, 99, 255)",
    "rgb(50, 205, 50)",
    "rgb(255, 0, 0)",
    "rgb(0, 128, 0)",
)

_RANK_BY_KEY = {name.lower(): idx for idx, name in enumerate(CATEGORY_ORDER)}


def _normalize_token(value: Optional[str]) -> str:
    return " ".join(str(value or "").strip().split()).lower()


def category_colors() -> List[str]:
    """Colors parallel to CATEGORY_ORDER (plus spare slots)."""
    return list(CATEGORY_COLORS)


def _slot(category: Optional[str]) -> int:
    key = _normalize_token(category)
    rank = _RANK_BY_KEY.get(key)
    if rank is not None:
        return rank % len(CATEGORY_COLORS)
    # Unknown categories cycle over the palette by a content hash, so the slot
    # is identical across reruns, sessions and processes.
    digest = hashlib.md5(key.encode("utf-8"), usedforsecurity=False).hexdigest()
    return int(digest[:8], 16) % len(CATEGORY_COLORS)


def category_color(category: Optional[str]) -> str:
    return CATEGORY_COLORS[_slot(category)]


def category_rank(category: Optional[str]) -> int:
    return _RANK_BY_KEY.get(_normalize_token(category), len(CATEGORY_ORDER))


def ordered_categories(categories: Iterable[str]) -> List[str]:
    """Known categories first (palette order), then unknown ones alphabetically.

    Every distinct value is kept so the color sequence matches the trace count.
    """
    uniq = {str(c) for c in categories}
    return sorted(uniq, key=lambda c: (category_rank(c), c.lower()))


def category_color_map(categories: Iterable[str]) -> Dict[str, str]:
    return {c: category_color(c) for c in ordered_categories(categories)}


def color_sequence_for(categories: Iterable[str]) -> List[str]:
    return list(category_color_map(categories).values())
