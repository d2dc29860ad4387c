# src/autoimporter/config_resolve.py


import argparse
import os
from pathlib import Path
from typing import Any, cast

from .config_types import (
    CustomHandler,
    FilterFunc,
    MetaConfigResolved,
    OriginType,
    ParserOptions,
    RootConfig,
    RootConfigResolved,
)
from .constants import (
    DEFAULT_DRY_RUN,
    DEFAULT_ENV_WATCH_INTERVAL,
    DEFAULT_FILE_EXTENSIONS_JS,
    DEFAULT_FILE_EXTENSIONS_OTHER,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_WATCH_INTERVAL,
)
from .logs import getAppLogger
from .meta import PROGRAM_ENV
from .utils import cast_hint, normalize_path, resolve_callable


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def normalize_output_name(name: str | None) -> str | None:
    """Bare file name of the generated module.

    Path-normalized, `.js` appended when missing, and only the last segment
    kept: ``dist/gen`` → ``gen.js``. None (output disabled) stays None.
    """
    if name is None:
        return None
    name = normalize_path(name)
    if not name.endswith(DEFAULT_OUTPUT_SUFFIX):
        name += DEFAULT_OUTPUT_SUFFIX
    return name.split("/")[-1]


def _resolve_paths(
    base: list[str],
    replace: list[str] | None,
    add: list[str] | None,
) -> list[str]:
    """CLI replacement list (or config), then CLI additions, de-duplicated."""
    paths = list(replace) if replace is not None else list(base)
    paths.extend(add or [])
    seen: dict[str, None] = {}
    for p in paths:
        seen.setdefault(normalize_path(p), None)
    return list(seen)


def _resolve_output_name(
    root_cfg: RootConfig,
    args: argparse.Namespace,
) -> str | None:
    if getattr(args, "no_output", False):
        return None
    cli_name = getattr(args, "output_name", None)
    if cli_name is not None:
        return normalize_output_name(cli_name)
    return normalize_output_name(root_cfg.get("output_name", DEFAULT_OUTPUT_NAME))


def _resolve_watch_interval(root_cfg: RootConfig, args: argparse.Namespace) -> float:
    """CLI → env → config → default."""
    logger = getAppLogger()
    env_watch = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_WATCH_INTERVAL}") or os.getenv(
        DEFAULT_ENV_WATCH_INTERVAL
    )

    if getattr(args, "watch", None) is not None:
        watch_interval = float(args.watch)
    elif env_watch is not None:
        try:
            watch_interval = float(env_watch)
        except ValueError:
            logger.warning(
                "Invalid %s=%r, using default.", DEFAULT_ENV_WATCH_INTERVAL, env_watch
            )
            watch_interval = DEFAULT_WATCH_INTERVAL
    else:
        watch_interval = float(root_cfg.get("watch_interval", DEFAULT_WATCH_INTERVAL))

    if watch_interval <= 0:
        xmsg = f"Watch interval must be positive, got {watch_interval}"
        raise ValueError(xmsg)

    logger.trace(f"[resolve_config] Watch interval resolved to {watch_interval}s")
    return watch_interval


def _resolve_root(
    args: argparse.Namespace,
    config_dir: Path,
    cwd: Path,
) -> Path:
    cli_root = getattr(args, "root", None)
    if cli_root:
        root = (cwd / cli_root).resolve()
        if not root.is_dir():
            xmsg = f"Project root is not a directory: {root}"
            raise FileNotFoundError(xmsg)
        return root
    return config_dir.resolve()


# --------------------------------------------------------------------------- #
# main entry point
# --------------------------------------------------------------------------- #


def resolve_config(
    root_input: RootConfig,
    args: argparse.Namespace,
    config_dir: Path,
    cwd: Path,
    *,
    origin: OriginType = "config",
    config_path: Path | None = None,
) -> RootConfigResolved:
    """Fully resolve a parsed RootConfig into a ready-to-run RootConfigResolved.

    CLI values override the config file; the effective log level is applied
    to the app logger as a side effect.
    """
    logger = getAppLogger()
    root_cfg = cast_hint(RootConfig, dict(root_input))

    # ------------------------------
    # Log level
    # ------------------------------
    log_level = logger.determineLogLevel(
        args=args, root_log_level=root_cfg.get("log_level")
    )
    logger.setLevel(log_level)

    # ------------------------------
    # Roots and paths
    # ------------------------------
    import_paths = _resolve_paths(
        root_cfg.get("import", []),
        getattr(args, "import_paths", None),
        getattr(args, "add_import", None),
    )
    modify_paths = _resolve_paths(
        root_cfg.get("modify", []),
        getattr(args, "modify_paths", None),
        getattr(args, "add_modify", None),
    )
    if not import_paths and not modify_paths:
        logger.warning("No import or modify paths configured; nothing to do.")

    # ------------------------------
    # Output names
    # ------------------------------
    output_name = _resolve_output_name(root_cfg, args)
    previous_raw = list(root_cfg.get("previous_output_names", []))
    previous_raw.extend(getattr(args, "previous_output_names", None) or [])
    previous_output_names: list[str] = []
    for name in previous_raw:
        normalized = normalize_output_name(name)
        if normalized and normalized not in previous_output_names:
            previous_output_names.append(normalized)

    # ------------------------------
    # Callables from config
    # ------------------------------
    filter_func = cast(
        "FilterFunc | None", resolve_callable(root_cfg.get("filter"), key="filter")
    )
    custom_handler = cast(
        "CustomHandler | None",
        resolve_callable(
            root_cfg.get("file_extensions_custom"), key="file_extensions_custom"
        ),
    )

    root = _resolve_root(args, config_dir, cwd)
    meta: MetaConfigResolved = {
        "cli_root": cwd,
        "config_root": config_dir,
        "origin": origin,
    }
    if config_path is not None:
        meta["config_path"] = config_path

    parser_options: dict[str, Any] = dict(root_cfg.get("parser", {}))

    resolved: RootConfigResolved = {
        "import_paths": import_paths,
        "modify_paths": modify_paths,
        "filter": filter_func,
        "output_name": output_name,
        "previous_output_names": previous_output_names,
        "parser": cast("ParserOptions", parser_options),
        "file_extensions_js": list(
            root_cfg.get("file_extensions_js", DEFAULT_FILE_EXTENSIONS_JS)
        ),
        "file_extensions_other": list(
            root_cfg.get("file_extensions_other", DEFAULT_FILE_EXTENSIONS_OTHER)
        ),
        "file_extensions_custom": custom_handler,
        "root": root,
        "log_level": log_level,
        "watch_interval": _resolve_watch_interval(root_cfg, args),
        "dry_run": bool(getattr(args, "dry_run", DEFAULT_DRY_RUN)),
        "__meta__": meta,
    }

    logger.trace(
        f"[resolve_config] root={root} import={import_paths} modify={modify_paths}"
        f" output={output_name!r} previous={previous_output_names}"
    )
    return resolved
