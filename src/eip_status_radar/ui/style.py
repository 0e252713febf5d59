"""Page CSS and Plotly theming aligned with the design tokens."""

from __future__ import annotations

import html
from typing import Any

import streamlit as st

from eip_status_radar.design_tokens import FONT_SANS, palette_for


def inject_css(*, dark_mode: bool = False) -> None:
    """Inject the panel/hero CSS for the current theme."""
    palette = palette_for(dark_mode)
    st.markdown(
        f"""
        <style>
          .eip-hero {{
            margin: 0 0 0.8rem 0;
          }}
          .eip-hero-title {{
            font-family: {FONT_SANS};
            font-size: 1.6rem;
            font-weight: 800;
            color: {palette.ink};
          }}
          .eip-hero-sub {{
            font-size: 0.92rem;
            color: {palette.ink_muted};
          }}
          .st-key-status_area_panel {{
            background: {palette.panel_bg};
            border: 1px solid transparent;
            border-radius: 0.55rem;
            padding: 1rem 1rem;
            margin-top: 1.5rem;
            overflow-x: auto;
            transition: border-color 200ms ease-in;
          }}
          .st-key-status_area_panel:hover {{
            border-color: {palette.accent};
          }}
          .eip-status-title {{
            font-size: 1.25rem;
            font-weight: 700;
            color: {palette.accent};
          }}
          .eip-loader {{
            display: flex;
            justify-content: center;
            align-items: center;
            height: 200px;
            color: {palette.ink_muted};
          }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_hero(app_title: str) -> None:
    st.markdown(
        f"""
        <div class="eip-hero">
          <div class="eip-hero-title">{html.escape(app_title)}</div>
          <div class="eip-hero-sub">EIP activity by status and category</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def apply_plotly_theme(fig: Any, *, dark_mode: bool = False, showlegend: bool = True) -> Any:
    """Apply a consistent Plotly style aligned with the design tokens."""
    palette = palette_for(dark_mode)
    fig.update_layout(
        template="plotly_dark" if dark_mode else "plotly_white",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(family=FONT_SANS, color=palette.ink),
        showlegend=showlegend,
        margin=dict(l=16, r=16, t=48, b=16),
        hoverlabel=dict(font=dict(family=FONT_SANS)),
    )
    fig.update_layout(
        legend=dict(
            bgcolor=palette.legend_bg,
            bordercolor=palette.legend_border,
            borderwidth=1,
            font=dict(size=11, color=palette.ink),
            title=dict(text=""),
        )
    )
    fig.update_xaxes(showgrid=False, title_text="", color=palette.ink_muted)
    fig.update_yaxes(gridcolor=palette.grid, zeroline=False, title_text="", color=palette.ink_muted)
    return fig
