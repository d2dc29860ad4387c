# src/autoimporter/utils/utils_paths.py
"""Lexical path helpers.

Paths handled by the engine are plain strings with forward slashes,
relative to the project root exactly as the user configured them
(``src/a.js`` or ``./src/a.js``). Nothing here touches the filesystem.
"""

from collections.abc import Iterable


def normalize_path(path: str) -> str:
    """Use forward slashes and strip every trailing slash."""
    return str(path).replace("\\", "/").rstrip("/")


def path_segments(path: str) -> list[str]:
    return normalize_path(path).split("/")


def path_depth(path: str) -> int:
    """Number of directories between the project root and the file.

    ``.`` and empty segments do not count, so ``pages/p.js`` and
    ``./pages/p.js`` are both one level deep.
    """
    parts = [p for p in path_segments(path)[:-1] if p not in ("", ".")]
    return len(parts)


def compare_paths(a: str, b: str) -> int:
    """Segment-wise, case-insensitive comparison.

    The first differing segment decides; when one path is a prefix of the
    other, the shorter one sorts first.
    """
    a_parts = path_segments(a)
    b_parts = path_segments(b)
    for a_part, b_part in zip(a_parts, b_parts, strict=False):
        aa = a_part.lower()
        bb = b_part.lower()
        if aa != bb:
            return 1 if aa > bb else -1
    return (len(a_parts) > len(b_parts)) - (len(a_parts) < len(b_parts))


def path_order_key(path: str) -> tuple[str, ...]:
    """Sort key equivalent to compare_paths()."""
    return tuple(part.lower() for part in path_segments(path))


def sort_paths(paths: Iterable[str]) -> list[str]:
    return sorted(paths, key=path_order_key)
