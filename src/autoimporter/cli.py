# src/autoimporter/cli.py

import argparse
import platform
import sys
from dataclasses import dataclass
from difflib import get_close_matches
from pathlib import Path

from .actions import get_metadata, watch_for_changes
from .build import run_sync
from .config_loader import can_run_configless, load_and_parse_config
from .config_resolve import resolve_config
from .config_types import OriginType, RootConfig, RootConfigResolved
from .constants import DEFAULT_WATCH_INTERVAL
from .logs import LEVEL_ORDER, getAppLogger
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT
from .utils import cast_hint


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --imprt ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description=(
            "Keep the leading import line of every managed file in sync with"
            " the identifiers exported across the project."
        ),
    )

    parser.add_argument("-c", "--config", help="Path to config file.")
    parser.add_argument(
        "--root",
        help="Project root (default: the config file's directory, or cwd).",
    )

    # --- Roots ---
    parser.add_argument(
        "--import",
        dest="import_paths",
        nargs="+",
        metavar="PATH",
        help="Override import roots (files or directories to read exports from).",
    )
    parser.add_argument(
        "--add-import",
        nargs="+",
        metavar="PATH",
        help="Additional import roots. Extends config roots.",
    )
    parser.add_argument(
        "--modify",
        dest="modify_paths",
        nargs="+",
        metavar="PATH",
        help="Override modify roots (files whose import line is managed).",
    )
    parser.add_argument(
        "--add-modify",
        nargs="+",
        metavar="PATH",
        help="Additional modify roots. Extends config roots.",
    )

    # --- Output ---
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--output-name",
        metavar="NAME",
        help="File name of the generated module (default: imports.js).",
    )
    output.add_argument(
        "--no-output",
        action="store_true",
        help="Do not generate a module; only remove injected import lines.",
    )
    parser.add_argument(
        "--previous-output-name",
        dest="previous_output_names",
        nargs="+",
        metavar="NAME",
        help="Former output names whose import lines should still be replaced.",
    )

    # --- Execution mode ---
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report which files would change without writing them.",
    )
    parser.add_argument(
        "--watch",
        nargs="?",
        type=float,
        metavar="SECONDS",
        default=None,
        help=(
            "Resync automatically on changes. "
            "Optionally specify interval in seconds"
            f" (default config or: {DEFAULT_WATCH_INTERVAL}). "
        ),
    )

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        type=str.lower,
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


@dataclass
class _LoadedConfig:
    """Container for loaded and resolved configuration data."""

    config_path: Path | None
    root_cfg: RootConfig
    resolved: RootConfigResolved
    config_dir: Path
    cwd: Path


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = getAppLogger()
    logger.setLevel(logger.determineLogLevel(args=args))
    logger.trace(f"[BOOT] log-level initialized: {logger.effectiveLevelName}")

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _handle_early_exits(args: argparse.Namespace) -> int | None:
    """Return an exit code if we should exit before syncing, None otherwise."""
    logger = getAppLogger()

    if getattr(args, "version", None):
        meta = get_metadata()
        logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
        return 0

    if sys.version_info < (3, 10):  # noqa: UP036
        logger.error("%s requires Python 3.10 or newer.", PROGRAM_DISPLAY)
        return 1

    return None


def _load_and_resolve_config(args: argparse.Namespace) -> _LoadedConfig | None:
    """Load and resolve configuration; None when there is nothing to run."""
    logger = getAppLogger()
    cwd = Path.cwd().resolve()

    config_path: Path | None = None
    root_cfg: RootConfig | None = None
    origin: OriginType = "config"
    config_result = load_and_parse_config(args, cwd)
    if config_result is not None:
        config_path, root_cfg = config_result
        if config_path.name == "pyproject.toml":
            origin = "pyproject"

    logger.trace(
        f"[CONFIG] log-level re-resolved from config: {logger.effectiveLevelName}"
    )

    if root_cfg is None:
        if not can_run_configless(args):
            logger.error(
                "No config file found and no roots given.\n"
                "   Add a .autoimporter.json or pass --import / --modify."
            )
            return None
        logger.info("No config file found — using CLI-only mode.")
        root_cfg = cast_hint(RootConfig, {})
        origin = "cli"

    config_dir = config_path.parent if config_path else cwd
    resolved = resolve_config(
        root_cfg,
        args,
        config_dir,
        cwd,
        origin=origin,
        config_path=config_path,
    )

    return _LoadedConfig(
        config_path=config_path,
        root_cfg=root_cfg,
        resolved=resolved,
        config_dir=config_dir,
        cwd=cwd,
    )


def _execute_sync(
    resolved: RootConfigResolved,
    args: argparse.Namespace,
    argv: list[str] | None,
) -> None:
    """Run once, or keep resyncing in watch mode."""
    raw_args = sys.argv[1:] if argv is None else argv
    watch_enabled = getattr(args, "watch", None) is not None or "--watch" in raw_args

    if watch_enabled:
        watch_for_changes(
            lambda: run_sync(resolved),
            resolved,
            interval=resolved["watch_interval"],
        )
    else:
        run_sync(resolved)


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        early_exit_code = _handle_early_exits(args)
        if early_exit_code is not None:
            return early_exit_code

        config = _load_and_resolve_config(args)
        if config is None:
            return 1

        if config.resolved["dry_run"]:
            logger.info("🧪 Dry-run mode: no files will be written.\n")

        # --- Config summary ---
        if config.config_path:
            logger.info("🔧 Using config: %s", config.config_path.name)
        else:
            logger.info("🔧 Running in CLI-only mode (no config file).")
        logger.info("📁 Project root: %s", config.resolved["root"])
        logger.info("📂 Invoked from: %s", config.cwd)

        _execute_sync(config.resolved, args, argv)

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        logger.errorIfNotDebug(str(e))
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        return 1

    else:
        return 0
