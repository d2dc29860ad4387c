# src/autoimporter/config_loader.py


import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Any, cast

from .config_types import RootConfig
from .logs import getAppLogger
from .meta import PROGRAM_CONFIG
from .utils import load_jsonc, load_toml, plural, remove_path_in_error_message


# camelCase spellings accepted for compatibility with the build-plugin options
CONFIG_KEY_ALIASES: dict[str, str] = {
    "outputName": "output_name",
    "previousOutputNames": "previous_output_names",
    "fileExtensionsJs": "file_extensions_js",
    "fileExtensionsOther": "file_extensions_other",
    "fileExtensionsCustom": "file_extensions_custom",
    "babel": "parser",
    "logLevel": "log_level",
    "watchInterval": "watch_interval",
}

_LIST_OF_STR_KEYS = (
    "import",
    "modify",
    "previous_output_names",
    "file_extensions_js",
    "file_extensions_other",
)
_CALLABLE_KEYS = ("filter", "file_extensions_custom")
_KNOWN_KEYS = {
    *_LIST_OF_STR_KEYS,
    *_CALLABLE_KEYS,
    "output_name",
    "parser",
    "log_level",
    "watch_interval",
}


def can_run_configless(args: argparse.Namespace) -> bool:
    """To run without config we need at least one import or modify root."""
    return bool(
        getattr(args, "import_paths", None)
        or getattr(args, "add_import", None)
        or getattr(args, "modify_paths", None)
        or getattr(args, "add_modify", None)
    )


def _pyproject_has_section(path: Path) -> bool:
    logger = getAppLogger()
    try:
        data = load_toml(path)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable %s: %s", path.name, e)
        return False
    return isinstance(data.get("tool", {}).get(PROGRAM_CONFIG), dict)


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "error",
) -> Path | None:
    """Locate a configuration file.

    missing_level: log-level for failing to find a configuration file.

    Search order:
      1. Explicit path from CLI (--config)
      2. From `cwd` upward, the first directory containing
         .{PROGRAM_CONFIG}.py, .{PROGRAM_CONFIG}.jsonc, .{PROGRAM_CONFIG}.json
         or a pyproject.toml with a [tool.{PROGRAM_CONFIG}] table

    Returns the first matching path, or None if no config was found.
    """
    logger = getAppLogger()

    # --- 1. Explicit config path ---
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidates (current dir and parents) ---
    candidate_names = [
        f".{PROGRAM_CONFIG}.py",
        f".{PROGRAM_CONFIG}.jsonc",
        f".{PROGRAM_CONFIG}.json",
    ]
    current = cwd
    while True:
        found = [current / n for n in candidate_names if (current / n).is_file()]
        if found:
            if len(found) > 1:
                names = ", ".join(p.name for p in found)
                logger.warning(
                    "Multiple config files detected (%s); using %s.",
                    names,
                    found[0].name,
                )
            return found[0]

        pyproject = current / "pyproject.toml"
        if pyproject.is_file() and _pyproject_has_section(pyproject):
            logger.trace(f"[find_config] Using [tool.{PROGRAM_CONFIG}] in {pyproject}")
            return pyproject

        parent = current.parent
        if parent == current:
            break
        current = parent

    level = logging.getLevelName(missing_level.upper())
    if not isinstance(level, int):
        level = logging.ERROR
    logger.log(level, "No config file found in %s or parents", cwd)
    return None


def _load_python_config(config_path: Path) -> Any:
    logger = getAppLogger()
    config_globals: dict[str, Any] = {}

    # Allow local imports in Python configs (e.g. from helpers import my_filter)
    parent_dir = str(config_path.parent)
    added_to_sys_path = parent_dir not in sys.path
    if added_to_sys_path:
        sys.path.insert(0, parent_dir)

    try:
        source = config_path.read_text(encoding="utf-8")
        exec(compile(source, str(config_path), "exec"), config_globals)  # noqa: S102
        logger.trace(f"[EXEC] globals after exec: {list(config_globals.keys())}")
    except Exception as e:
        tb = traceback.format_exc()
        xmsg = (
            f"Error while executing Python config: {config_path.name}\n"
            f"{type(e).__name__}: {e}\n{tb}"
        )
        raise RuntimeError(xmsg) from e
    finally:
        if added_to_sys_path and sys.path[0] == parent_dir:
            sys.path.pop(0)

    if "config" not in config_globals:
        xmsg = f"{config_path.name} did not define `config`"
        raise ValueError(xmsg)
    return config_globals["config"]


def load_config(config_path: Path) -> dict[str, Any] | None:
    """Load raw configuration data from a file.

    Supports:
      - Python configs: .py files exporting `config`
      - JSON/JSONC configs: .json, .jsonc files
      - pyproject.toml: the [tool.autoimporter] table

    Returns None for intentionally empty configs (empty files, `config = None`).
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    if config_path.suffix == ".py":
        result = _load_python_config(config_path)
    elif config_path.name == "pyproject.toml":
        result = load_toml(config_path).get("tool", {}).get(PROGRAM_CONFIG)
    else:
        try:
            result = load_jsonc(config_path)
        except ValueError as e:
            clean_msg = remove_path_in_error_message(str(e), config_path)
            xmsg = (
                f"Error while loading configuration file '{config_path.name}':"
                f" {clean_msg}"
            )
            raise ValueError(xmsg) from e

    if not isinstance(result, (dict, type(None))):
        xmsg = (
            f"config in {config_path.name} must be an object or None"
            f", not {type(result).__name__}"
        )
        raise TypeError(xmsg)
    return cast("dict[str, Any] | None", result)


def _check_list_of_str(key: str, value: Any) -> None:
    if not isinstance(value, list) or not all(
        isinstance(v, str) for v in cast("list[Any]", value)
    ):
        xmsg = f"'{key}' must be a list of strings, not {value!r}"
        raise TypeError(xmsg)


def _check_value(key: str, value: Any) -> None:  # noqa: PLR0911
    if key in _LIST_OF_STR_KEYS:
        _check_list_of_str(key, value)
        return
    if key in _CALLABLE_KEYS:
        if value is None or callable(value) or isinstance(value, str):
            return
        xmsg = f"'{key}' must be a function or a 'module:attr' string"
        raise TypeError(xmsg)
    if key == "output_name":
        if value is None or (isinstance(value, str) and value):
            return
        xmsg = f"'output_name' must be a non-empty string or null, not {value!r}"
        raise TypeError(xmsg)
    if key == "parser":
        if isinstance(value, dict):
            return
        xmsg = f"'parser' must be an object, not {type(value).__name__}"
        raise TypeError(xmsg)
    if key == "log_level":
        if isinstance(value, str):
            return
        xmsg = f"'log_level' must be a string, not {type(value).__name__}"
        raise TypeError(xmsg)
    if key == "watch_interval":
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if is_number and value > 0:
            return
        xmsg = f"'watch_interval' must be a positive number, not {value!r}"
        raise TypeError(xmsg)


def parse_config(raw_config: dict[str, Any] | None) -> RootConfig | None:
    """Normalize key spellings and check value types (no filesystem work).

    camelCase aliases are renamed, unknown keys are warned about and dropped.
    """
    logger = getAppLogger()
    if not raw_config:
        return None

    parsed: dict[str, Any] = {}
    unknown: list[str] = []
    for key, value in raw_config.items():
        canonical = CONFIG_KEY_ALIASES.get(key, key)
        if canonical not in _KNOWN_KEYS:
            unknown.append(key)
            continue
        if canonical in parsed:
            logger.warning("Config key %r given twice; using the last one.", canonical)
        _check_value(canonical, value)
        parsed[canonical] = value

    if unknown:
        logger.warning(
            "Ignoring unknown config key%s: %s",
            plural(unknown),
            ", ".join(sorted(unknown)),
        )
    logger.trace(f"[parse_config] keys: {sorted(parsed)}")
    return cast("RootConfig", parsed)


def load_and_parse_config(
    args: argparse.Namespace,
    cwd: Path | None = None,
) -> tuple[Path, RootConfig] | None:
    """Find, load and parse the user's configuration.

    Also applies the config's log level early so loading is logged at the
    level the user asked for.

    Returns (config_path, root_cfg), or None if no usable config was found.
    """
    logger = getAppLogger()
    cwd = (cwd or Path.cwd()).resolve()

    missing_level = "warning" if can_run_configless(args) else "error"
    config_path = find_config(args, cwd, missing_level=missing_level)
    if config_path is None:
        return None

    raw_config = load_config(config_path)

    # --- Early peek for log_level before parsing ---
    if raw_config:
        raw_log_level = raw_config.get("log_level", raw_config.get("logLevel"))
        if isinstance(raw_log_level, str) and raw_log_level:
            logger.setLevel(
                logger.determineLogLevel(args=args, root_log_level=raw_log_level)
            )

    try:
        root_cfg = parse_config(raw_config)
    except TypeError as e:
        xmsg = f"Invalid config {config_path.name}: {e}"
        raise TypeError(xmsg) from e

    if root_cfg is None:
        logger.warning("Config %s is empty.", config_path.name)
        root_cfg = cast("RootConfig", {})
    return config_path, root_cfg
