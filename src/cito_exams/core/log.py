"""Logger lookup that works inside and outside a Prefect run."""

from __future__ import annotations

import logging
from typing import Union

from prefect import get_run_logger
from prefect.exceptions import MissingContextError

PACKAGE_LOGGER = "cito_exams"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_pipeline_logger(
    name: str = PACKAGE_LOGGER,
) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Return the Prefect run logger when called from a flow or task.

    Outside a run (plain library use, tests) fall back to the module logger
    `name`, so the same messages are still emitted.
    """
    try:
        return get_run_logger()
    except MissingContextError:
        return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """Apply `level` to the Prefect loggers and to the package loggers."""
    level = level.upper()
    logging.getLogger("prefect").setLevel(level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
