"""Design tokens shared by the Streamlit chrome and the Plotly theme."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SurfacePalette:
    panel_bg: str
    page_bg: str
    accent: str
    accent_soft: str
    ink: str
    ink_muted: str
    grid: str
    legend_bg: str
    legend_border: str


LIGHT = SurfacePalette(
    panel_bg="#f6f6f7",
    page_bg="#FFFFFF",
    accent="#10b981",
    accent_soft="rgba(16,185,129,0.14)",
    ink="#1A202C",
    ink_muted="#4A5568",
    grid="rgba(26,32,44,0.10)",
    legend_bg="rgba(255,255,255,0.65)",
    legend_border="rgba(26,32,44,0.12)",
)

DARK = SurfacePalette(
    panel_bg="#171923",
    page_bg="#0F1117",
    accent="#10b981",
    accent_soft="rgba(16,185,129,0.22)",
    ink="#EDF2F7",
    ink_muted="#A0AEC0",
    grid="rgba(237,242,247,0.14)",
    legend_bg="rgba(23,25,35,0.72)",
    legend_border="rgba(237,242,247,0.20)",
)

FONT_SANS = '"Inter", "Segoe UI", "Helvetica Neue", Arial, sans-serif'


def palette_for(dark_mode: bool) -> SurfacePalette:
    return DARK if dark_mode else LIGHT
