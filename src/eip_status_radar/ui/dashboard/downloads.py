"""Export helpers for the status area chart ("Download Reports")."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Any, Optional, Sequence, Tuple

import pandas as pd
import streamlit as st
from openpyxl.utils import get_column_letter


@dataclass(frozen=True)
class ExportSpec:
    filename_prefix: str = "eip_activity"
    include_index: bool = False
    encoding: str = "utf-8"


def _safe_filename(s: str) -> str:
    s = (s or "").strip().replace(" ", "_")
    keep = []
    for ch in s:
        if ch.isalnum() or ch in {"_", "-", "."}:
            keep.append(ch)
    return "".join(keep) or "export"


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def build_filename(prefix: str, *, suffix: str = "", ext: str = "csv") -> str:
    pref = _safe_filename(prefix)
    suf = _safe_filename(suffix) if suffix else ""
    dot_ext = (ext or "").strip().lstrip(".") or "txt"
    return f"{pref}{'_' + suf if suf else ''}_{_timestamp()}.{dot_ext}"


def df_to_csv_bytes(
    df: pd.DataFrame | None, *, include_index: bool = False, encoding: str = "utf-8"
) -> bytes:
    if df is None:
        df = pd.DataFrame()
    csv: str = df.to_csv(index=include_index)
    return csv.encode(encoding, errors="replace")


def dfs_to_excel_bytes(
    sheets: Sequence[Tuple[str, pd.DataFrame]], *, include_index: bool = False
) -> bytes:
    """Write one sheet per dataframe with header-sized columns."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        wrote_any = False
        for raw_name, df in sheets:
            name = (_safe_filename(raw_name) or "Sheet")[:31]
            frame = df if isinstance(df, pd.DataFrame) else pd.DataFrame()
            frame.to_excel(writer, sheet_name=name, index=include_index)
            ws = writer.sheets[name]
            for idx, col in enumerate(frame.reset_index().columns if include_index else frame.columns):
                width = max(len(str(col)), 10) + 2
                ws.column_dimensions[get_column_letter(idx + 1)].width = width
            wrote_any = True
        if not wrote_any:
            pd.DataFrame().to_excel(writer, sheet_name="Empty", index=False)
    return buf.getvalue()


def fig_to_html_bytes(fig: Any) -> bytes:
    if fig is None:
        return b""
    to_html = getattr(fig, "to_html", None)
    if not callable(to_html):
        return b""
    html_doc = to_html(include_plotlyjs="cdn", full_html=True)
    return str(html_doc).encode("utf-8", errors="replace")


def render_export_actions(
    *,
    key_prefix: str,
    status: str,
    series_df: pd.DataFrame,
    totals_df: Optional[pd.DataFrame] = None,
    figure: Any = None,
    spec: Optional[ExportSpec] = None,
) -> None:
    """Right-aligned CSV / Excel / HTML export buttons for the current status."""
    export = spec or ExportSpec()
    has_rows = isinstance(series_df, pd.DataFrame) and not series_df.empty
    sheets: list[Tuple[str, pd.DataFrame]] = [(status or "series", series_df)]
    if isinstance(totals_df, pd.DataFrame) and not totals_df.empty:
        sheets.append(("totals", totals_df.reset_index()))

    c_csv, c_xlsx, c_html = st.columns(3, gap="small")
    with c_csv:
        st.download_button(
            label="CSV",
            data=df_to_csv_bytes(series_df, include_index=export.include_index, encoding=export.encoding),
            file_name=build_filename(export.filename_prefix, suffix=status, ext="csv"),
            mime="text/csv",
            key=f"{key_prefix}::dl_csv",
            disabled=not has_rows,
        )
    with c_xlsx:
        st.download_button(
            label="Excel",
            data=dfs_to_excel_bytes(sheets, include_index=export.include_index),
            file_name=build_filename(export.filename_prefix, suffix=status, ext="xlsx"),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key=f"{key_prefix}::dl_xlsx",
            disabled=not has_rows,
        )
    with c_html:
        html_bytes = fig_to_html_bytes(figure) if has_rows else b""
        st.download_button(
            label="HTML",
            data=html_bytes,
            file_name=build_filename(export.filename_prefix, suffix=status, ext="html"),
            mime="text/html",
            key=f"{key_prefix}::dl_html",
            disabled=not html_bytes,
        )
