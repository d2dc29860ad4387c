# src/autoimporter/rewrite.py
"""Keep the leading import line of every consumer file in sync."""

from collections.abc import Sequence
from pathlib import Path

from .extract import extract_exports
from .logs import getAppLogger
from .parser import ParseDeclarations
from .statements import (
    ImportMatcher,
    first_import_statement,
    purge,
    render_import_line,
    replace_import_line,
)
from .utils import path_depth
from .writer import same_first_code_line, write_if_changed


def module_path_for(path: str, output_name: str) -> str:
    """Relative specifier from `path` back to the generated module."""
    return "./" + "../" * path_depth(path) + output_name


def required_imports(exports: Sequence[str], own: Sequence[str]) -> list[str]:
    """Every global export the file does not declare itself, in global order."""
    own_set = set(own)
    return [name for name in exports if name not in own_set]


def build_import_line(
    original: str,
    names: Sequence[str],
    module_path: str,
    matcher: ImportMatcher,
) -> str:
    """New leading line, reusing the author's spacing when the old one was ours."""
    logger = getAppLogger()
    statement = first_import_statement(original)
    if statement and matcher.is_ours(statement):
        replaced = replace_import_line(statement, names, module_path)
        if replaced is not None:
            logger.trace(f"[REWRITE] reusing existing line shape {statement!r}")
            return replaced
    return render_import_line(names, module_path)


def rewrite_consumer(
    path: str,
    *,
    project_root: Path,
    output_name: str | None,
    exports: Sequence[str],
    parse: ParseDeclarations,
    matcher: ImportMatcher,
    dry_run: bool = False,
) -> bool:
    """Purge and re-inject the generated import line of one consumer.

    With output disabled the file is only cleaned. Returns True when the file
    was (or in dry-run mode would be) written.
    """
    logger = getAppLogger()
    fs_path = project_root / path

    try:
        original = fs_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
        return False

    purged = purge(original, matcher)

    if output_name is None:
        new_text = purged
    else:
        own = extract_exports(purged, parse, matcher, purged=True, source=path)
        names = required_imports(exports, own)
        line = build_import_line(
            original, names, module_path_for(path, output_name), matcher
        )
        new_text = f"{line}\n{purged}"

    try:
        return write_if_changed(
            fs_path,
            new_text,
            same_first_code_line,
            old_text=original,
            dry_run=dry_run,
        )
    except OSError as e:
        logger.error("Could not write %s: %s", path, e)
        return False
