# src/autoimporter/logs.py

import logging
from typing import cast

from apathetic_logging import (
    Logger,
    registerDefaultLogLevel,
    registerLogger,
    registerLogLevelEnvVars,
)

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


# accepted by --log-level, quietest last
LEVEL_ORDER = ["trace", "debug", "info", "warning", "error", "critical", "silent"]


class AppLogger(Logger):
    """App-specific logger class."""


# --- Logger initialization ---------------------------------------------------

# Must happen before any loggers are created.
logging.setLoggerClass(AppLogger)

# Registers TRACE, TEST and SILENT levels
AppLogger.extendLoggingModule()

# determineLogLevel() reads these, in order, before falling back to config
registerLogLevelEnvVars(
    [f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}", DEFAULT_ENV_LOG_LEVEL]
)
registerDefaultLogLevel(DEFAULT_LOG_LEVEL)
registerLogger(PROGRAM_PACKAGE)

_APP_LOGGER = cast("AppLogger", logging.getLogger(PROGRAM_PACKAGE))


# --- Convenience utils ---------------------------------------------------------


def getAppLogger() -> AppLogger:  # noqa: N802
    """Return the configured app logger."""
    return _APP_LOGGER
