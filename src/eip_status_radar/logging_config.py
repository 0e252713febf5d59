"""Centralized logging configuration for the dashboard runtime."""

from __future__ import annotations

import logging
import os
from typing import Optional

ROOT_LOGGER_NAME = "eip_status_radar"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_configured = False


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the package logger once per process.

    `EIP_STATUS_RADAR_LOG_LEVEL` overrides `level` when set. Streamlit reruns
    the app script on every interaction, so repeated calls are no-ops.
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    env_level = os.getenv("EIP_STATUS_RADAR_LOG_LEVEL")
    if env_level:
        log_level = getattr(logging, env_level.upper(), log_level)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(log_level)
    root.handlers.clear()
    root.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError:
            root.warning("Could not open log file %s, logging to stderr only", log_file)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
