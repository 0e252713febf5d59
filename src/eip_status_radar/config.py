"""Configuration loading and validation helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List

from dotenv import dotenv_values
from pydantic import BaseModel

STATUS_OPTIONS: tuple[str, ...] = (
    "Final",
    "Review",
    "Last Call",
    "Stagnant",
    "Draft",
    "Living",
)
DEFAULT_STATUS = "Draft"


def _runtime_home() -> Path:
    override = str(os.getenv("EIP_STATUS_RADAR_HOME", "") or "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return Path(__file__).resolve().parents[2]


DEFAULT_CONFIG_HOME = _runtime_home()
ENV_PATH = DEFAULT_CONFIG_HOME / ".env"
ENV_EXAMPLE_PATH = DEFAULT_CONFIG_HOME / ".env.example"

_PATH_SETTING_KEYS = {"LOG_FILE"}
_ENUM_SETTING_KEYS = ("THEME", "DEFAULT_STATUS", "CHART_LEGEND_POSITION", "LOG_LEVEL")


def _candidate_env_example_paths() -> List[Path]:
    out: List[Path] = [ENV_EXAMPLE_PATH]
    try:
        out.append(Path.cwd() / ".env.example")
    except OSError:
        pass

    seen: set[str] = set()
    uniq: List[Path] = []
    for path in out:
        key = str(path)
        if key in seen:
            continue
        seen.add(key)
        uniq.append(path)
    return uniq


def _strip_inline_comment(value: object) -> str:
    """
    Older .env files carry inline hints like:
      THEME=light  # light|dark|auto

    python-dotenv may keep the comment as part of the value, so we strip it
    for enum-like keys.
    """
    txt = str(value or "").strip()
    if " #" in txt:
        txt = txt.split(" #", 1)[0].strip()
    return txt


def _coerce_str(value: Any) -> str:
    return str(value or "").strip()


def config_home() -> Path:
    return ENV_PATH.expanduser().resolve().parent


def _resolve_runtime_path(raw: str) -> str:
    txt = _coerce_str(raw)
    if not txt:
        return ""
    path = Path(txt).expanduser()
    if not path.is_absolute():
        path = config_home() / path
    return str(path.resolve())


def normalize_status(value: object, *, fallback: str = DEFAULT_STATUS) -> str:
    """Map free text to one of STATUS_OPTIONS (case/spacing insensitive)."""
    token = " ".join(_coerce_str(value).replace("_", " ").split()).lower()
    for status in STATUS_OPTIONS:
        if status.lower() == token:
            return status
    return fallback


class Settings(BaseModel):
    APP_TITLE: str = "EIP Status Radar"
    THEME: str = "auto"  # auto|light|dark
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # -------------------------
    # Data source
    # -------------------------
    GRAPHS_API_URL: str = "http://localhost:3000/api/graphs"
    GRAPHS_CONNECT_TIMEOUT: float = 5.0
    GRAPHS_READ_TIMEOUT: float = 30.0

    # -------------------------
    # Dashboard preferences
    # -------------------------
    DEFAULT_STATUS: str = DEFAULT_STATUS
    LOADING_DELAY_SECONDS: float = 1.0
    REMOUNT_DELAY_SECONDS: float = 0.1

    # -------------------------
    # Area chart
    # -------------------------
    CHART_FILL_OPACITY: float = 0.6
    CHART_TICK_COUNT: int = 5
    CHART_SMOOTH: bool = True
    CHART_SLIDER_START: float = 0.1
    CHART_SLIDER_END: float = 0.9
    CHART_LEGEND_POSITION: str = "top-right"


def ensure_env() -> None:
    ENV_PATH.parent.mkdir(parents=True, exist_ok=True)
    if not ENV_PATH.exists():
        example_path = next((p for p in _candidate_env_example_paths() if p.exists()), None)
        if example_path is not None:
            ENV_PATH.write_text(example_path.read_text(encoding="utf-8"), encoding="utf-8")
            return
        ENV_PATH.write_text("", encoding="utf-8")


def load_settings() -> Settings:
    vals = {k: v for k, v in dotenv_values(ENV_PATH).items() if v is not None}

    for key in _ENUM_SETTING_KEYS:
        if key in vals:
            vals[key] = _strip_inline_comment(vals[key])
    if "DEFAULT_STATUS" in vals:
        vals["DEFAULT_STATUS"] = normalize_status(vals["DEFAULT_STATUS"])
    settings = Settings.model_validate(vals)

    payload = settings.model_dump()
    for key in _PATH_SETTING_KEYS:
        payload[key] = _resolve_runtime_path(str(payload.get(key) or ""))
    return Settings.model_validate(payload)
