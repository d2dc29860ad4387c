# src/autoimporter/collector.py

from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path

from .logs import getAppLogger
from .utils import normalize_path, sort_paths


class FileKind(str, Enum):
    """How a managed file is treated, decided purely by its suffix."""

    JS = "js"  # parsed for exports, imported by name
    PLAIN = "plain"  # imported for side effects only (stylesheets, ...)
    CUSTOM = "custom"  # delegated to the custom-extension handler


def has_extension(path: str, extensions: Iterable[str]) -> bool:
    """Case-insensitive suffix check; extensions may omit the leading dot."""
    lowered = path.lower()
    return any(
        lowered.endswith(ext.lower() if ext.startswith(".") else "." + ext.lower())
        for ext in extensions
    )


def classify_file(
    path: str,
    js_extensions: Iterable[str],
    plain_extensions: Iterable[str],
) -> FileKind:
    if has_extension(path, js_extensions):
        return FileKind.JS
    if has_extension(path, plain_extensions):
        return FileKind.PLAIN
    return FileKind.CUSTOM


def _accepts(predicate: Callable[[str], bool] | None, path: str) -> bool:
    if predicate is None:
        return True
    logger = getAppLogger()
    try:
        return bool(predicate(path))
    except Exception as e:  # noqa: BLE001
        logger.error("Filter failed for %s, skipping it: %s", path, e)
        return False


def _walk(path: str, fs_path: Path, found: list[str]) -> None:
    logger = getAppLogger()
    try:
        if fs_path.is_dir():
            for entry in fs_path.iterdir():
                _walk(f"{path}/{entry.name}", entry, found)
        elif fs_path.is_file():
            found.append(path)
    except OSError as e:
        logger.error("Could not read %s: %s", path, e)


def collect_files(
    root: str,
    *,
    project_root: Path,
    predicate: Callable[[str], bool] | None = None,
) -> list[str]:
    """List every file at or below `root`, sorted for processing.

    Paths come back relative to `project_root` in the same spelling as
    `root`. A missing root is only a warning, and an unreadable directory
    keeps whatever was collected before it failed.
    """
    logger = getAppLogger()
    root = normalize_path(root)
    fs_root = project_root / root

    if not fs_root.exists():
        logger.warning("Path does not exist: %s", root)
        return []

    found: list[str] = []
    _walk(root, fs_root, found)
    logger.trace(f"[COLLECT] {len(found)} file(s) under {root}")

    accepted = [p for p in found if _accepts(predicate, p)]
    if len(accepted) != len(found):
        logger.trace(f"[COLLECT] filter kept {len(accepted)} of {len(found)}")
    return sort_paths(accepted)
