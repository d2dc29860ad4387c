# src/autoimporter/writer.py
"""Write files only when their content really changed.

Every skipped write is one less filesystem event for watchers to react to
and one less diff for version control.
"""

from collections.abc import Callable
from pathlib import Path

from .logs import getAppLogger
from .statements import first_code_line
from .utils import read_text_or_empty


CompareFunc = Callable[[str, str], bool]


def same_trimmed(old: str, new: str) -> bool:
    return old.strip() == new.strip()


def same_first_code_line(old: str, new: str) -> bool:
    return first_code_line(old) == first_code_line(new)


def write_if_changed(
    path: Path,
    new_text: str,
    compare: CompareFunc = same_trimmed,
    *,
    old_text: str | None = None,
    dry_run: bool = False,
) -> bool:
    """Write `new_text` unless `compare(old, new)` says nothing changed.

    Returns True when a write happened (or would have, in dry-run mode).
    """
    logger = getAppLogger()
    if old_text is None:
        old_text = read_text_or_empty(path)

    if compare(old_text, new_text):
        logger.trace(f"[WRITE] unchanged: {path}")
        return False

    if dry_run:
        logger.info("🧪 Would update %s", path)
        return True

    path.write_text(new_text, encoding="utf-8")
    logger.debug("Updated %s", path)
    return True
