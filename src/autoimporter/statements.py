# src/autoimporter/statements.py
"""Text-level handling of the import line the engine injects.

None of this is syntax-aware: statements end at the first ';'. The engine
only ever compares its own deterministic output, so that approximation is
enough to stay idempotent.
"""

import re
from collections.abc import Iterable

from .constants import CONFLICT_END, CONFLICT_SEPARATOR, CONFLICT_START
from .logs import getAppLogger


# a byte order mark counts as leading whitespace
_LEADING_SPACE = re.compile(r"^[\s\ufeff]+")
_STARTS_WITH_NAMED_IMPORT = re.compile(r"^[\s\ufeff]*import\s*{", re.IGNORECASE)

# open-brace | names | closing-brace + from + quote | path | quote + ';' + rest
_OWNED_IMPORT_SHAPE = re.compile(
    r"""^([\s\ufeff]*import\s*{\s*)[^}]*([\S,]\s*}\s*from\s*['"])"""
    r""".*(['"]\s*;[\s\S]*)""",
    re.IGNORECASE,
)


def _lstrip(text: str) -> str:
    return _LEADING_SPACE.sub("", text, count=1)


def first_code_line(text: str) -> str:
    """Everything before the first ';', stripped."""
    end = text.find(";")
    return _lstrip(text[:end] if end >= 0 else text).rstrip()


def first_import_statement(text: str) -> str:
    """Leading `import {...} ...;` statement, or '' if the text starts otherwise."""
    if not _STARTS_WITH_NAMED_IMPORT.match(text):
        return ""
    return text[: text.find(";") + 1]


def render_import_line(names: Iterable[str], module_path: str) -> str:
    return f"import {{{', '.join(names)}}} from '{module_path}';"


def replace_import_line(
    statement: str,
    names: Iterable[str],
    module_path: str,
) -> str | None:
    """Rewrite a previously injected statement in place.

    Keeps the author's spacing around the braces and whatever follows the
    closing quote; only the identifier list and module path change.
    Returns None when the statement does not have the expected shape.
    """
    match = _OWNED_IMPORT_SHAPE.match(statement)
    if match is None:
        return None
    head, middle, tail = match.groups()
    if not middle.startswith(","):
        # the leading character belongs to the old identifier list
        middle = middle[1:]
    return head + ", ".join(names) + middle + module_path + tail


class ImportMatcher:
    """Recognizes import lines that point at the generated module.

    A statement is ours when it mentions ``./<name>';`` for the current
    output name or any previously used one.
    """

    def __init__(
        self,
        output_name: str | None,
        previous_output_names: Iterable[str] = (),
    ) -> None:
        names = ([output_name] if output_name is not None else []) + list(
            previous_output_names
        )
        self.markers: list[str] = [f"./{name}';" for name in names]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(markers={self.markers!r})"

    def is_ours(self, statement: str) -> bool:
        return any(marker in statement for marker in self.markers)

    def starts_with_ours(self, text: str) -> bool:
        statement = first_import_statement(text)
        return bool(statement) and self.is_ours(statement)


def _drop_first_line_statement(text: str, statement: str) -> str:
    line_end = text.find("\n", len(statement))
    return "" if line_end < 0 else text[line_end + 1 :]


def _drop_conflict_block(text: str, matcher: ImportMatcher) -> str | None:
    """Collapse a leading conflict block whose two sides both start with our line.

    Returns the text after the block, or None when the rule does not apply.
    """
    if not text.startswith(CONFLICT_START):
        return None

    ours_start = text.find("\n") + 1
    if ours_start <= 0:
        return None
    separator = text.find(CONFLICT_SEPARATOR, ours_start)
    if separator < 0:
        return None

    theirs_start = text.find("\n", separator) + 1
    if theirs_start <= 0:
        return None
    end_marker = text.find(CONFLICT_END, theirs_start)
    if end_marker < 0:
        return None

    ours = text[ours_start:separator].strip()
    theirs = text[theirs_start:end_marker].strip()
    if not (matcher.starts_with_ours(ours) and matcher.starts_with_ours(theirs)):
        return None

    block_end = text.find("\n", end_marker)
    return "" if block_end < 0 else text[block_end + 1 :]


def purge(text: str, matcher: ImportMatcher) -> str:
    """Remove every previously injected import line from the head of `text`.

    Repeats until a fixed point, so lines stacked by earlier failed runs and
    merge conflicts between two generated lines are all cleaned up. Text that
    needs no purging is returned untouched.
    """
    logger = getAppLogger()
    while True:
        stripped = _lstrip(text)

        statement = first_import_statement(stripped)
        if statement and matcher.is_ours(statement):
            logger.trace(f"[PURGE] dropping generated line {statement.strip()!r}")
            text = _drop_first_line_statement(stripped, statement)
            continue

        after_conflict = _drop_conflict_block(stripped, matcher)
        if after_conflict is not None:
            logger.trace("[PURGE] collapsing conflict block between generated lines")
            text = after_conflict
            continue

        return text
