from __future__ import annotations

import logging

from eip_status_radar.logging_config import ROOT_LOGGER_NAME, get_logger


def test_get_logger_namespaces_under_package_root() -> None:
    assert get_logger("ingest").name == f"{ROOT_LOGGER_NAME}.ingest"
    assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME
    assert get_logger("eip_status_radar.readiness").name == "eip_status_radar.readiness"


def test_module_loggers_share_the_package_hierarchy() -> None:
    child = get_logger("eip_status_radar.ui.cache")
    assert isinstance(child, logging.Logger)
    assert child.parent is not None
    assert child.name.startswith(f"{ROOT_LOGGER_NAME}.")
