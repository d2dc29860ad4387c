# src/autoimporter/constants.py
"""Central constants used across the project."""


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_WATCH_INTERVAL: str = "WATCH_INTERVAL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_WATCH_INTERVAL: float = 1.0  # seconds

# --- config defaults ---
DEFAULT_OUTPUT_NAME: str = "imports.js"
DEFAULT_OUTPUT_SUFFIX: str = ".js"
DEFAULT_FILE_EXTENSIONS_JS: list[str] = ["js", "jsx"]
DEFAULT_FILE_EXTENSIONS_OTHER: list[str] = ["css", "less", "sass", "scss"]
DEFAULT_PARSER_LANGUAGE: str = "javascript"
DEFAULT_DRY_RUN: bool = False

# --- version-control conflict markers ---
CONFLICT_START: str = "<<<<<<< HEAD"
CONFLICT_SEPARATOR: str = "======="
CONFLICT_END: str = ">>>>>>>"
