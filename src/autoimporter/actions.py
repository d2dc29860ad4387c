# src/autoimporter/actions.py
import re
import subprocess
import time
from collections.abc import Callable
from contextlib import suppress
from importlib import metadata as importlib_metadata
from pathlib import Path

from .build import managed_files
from .config_types import RootConfigResolved
from .constants import DEFAULT_WATCH_INTERVAL
from .logs import getAppLogger
from .meta import PROGRAM_PACKAGE, Metadata


def _watched_files(resolved: RootConfigResolved) -> list[Path]:
    """Every managed file except the generated module itself."""
    output_name = resolved["output_name"]
    out_path = resolved["root"] / output_name if output_name else None
    return [f for f in managed_files(resolved) if f != out_path]


def _snapshot(files: list[Path]) -> dict[Path, float]:
    mtimes: dict[Path, float] = {}
    for f in files:
        with suppress(OSError):
            mtimes[f] = f.stat().st_mtime
    return mtimes


def watch_for_changes(
    rebuild_func: Callable[[], object],
    resolved: RootConfigResolved,
    interval: float = DEFAULT_WATCH_INTERVAL,
) -> None:
    """Poll file modification times and resync when changes are detected.

    Features:
    - Skips the generated module, which every sync rewrites.
    - Re-expands the configured roots every loop to notice new and removed files.
    - Polling interval defaults to 1 second.
    Stops on KeyboardInterrupt.
    """
    logger = getAppLogger()
    logger.info(
        "👀 Watching for changes (interval=%.2fs)... Press Ctrl+C to stop.", interval
    )

    rebuild_func()  # initial sync
    mtimes = _snapshot(_watched_files(resolved))

    try:
        while True:
            time.sleep(interval)

            # 🔁 re-expand every tick so new/removed files are tracked
            current = _snapshot(_watched_files(resolved))
            logger.trace(f"[watch] Checking {len(current)} files for changes")

            changed = [
                f for f, m in current.items() if mtimes.get(f) is None or m > mtimes[f]
            ]
            changed.extend(f for f in mtimes if f not in current)

            if changed:
                logger.info(
                    "\n🔁 Detected %d modified file(s). Resyncing...", len(changed)
                )
                rebuild_func()
                # our own rewrites must not trigger another round
                current = _snapshot(_watched_files(resolved))
            mtimes = current
    except KeyboardInterrupt:
        logger.info("\n🛑 Watch stopped.")


def get_metadata() -> Metadata:
    """Return (version, commit) for this tool.

    - Installed package → version from package metadata
    - Source checkout → version from pyproject.toml, commit from git
    """
    logger = getAppLogger()
    root = Path(__file__).resolve().parents[2]
    version = "unknown"
    commit = "unknown"

    with suppress(importlib_metadata.PackageNotFoundError):
        version = importlib_metadata.version(PROGRAM_PACKAGE)

    if version == "unknown":
        pyproject = root / "pyproject.toml"
        if pyproject.exists():
            logger.trace(f"trying to read metadata from {pyproject}")
            text = pyproject.read_text(encoding="utf-8")
            match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
            if match:
                version = match.group(1)

    # Try git for commit
    with suppress(OSError, subprocess.SubprocessError):
        logger.trace("trying to get commit from git")
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip() or commit

    logger.trace(f"got package version {version} with commit {commit}")
    return Metadata(version, commit)
