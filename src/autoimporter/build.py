# src/autoimporter/build.py

from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from .aggregate import AggregateContext, AggregateResult, build_aggregate
from .collector import FileKind, classify_file, collect_files
from .config_types import RootConfigResolved
from .logs import getAppLogger
from .parser import ParseDeclarations, make_parser
from .rewrite import rewrite_consumer
from .statements import ImportMatcher
from .utils import plural
from .writer import same_trimmed, write_if_changed


@dataclass
class SyncReport:
    """Outcome of one synchronization pass."""

    generated: str | None = None
    exports: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)


# --------------------------------------------------------------------------- #
# File collection
# --------------------------------------------------------------------------- #


def collect_roots(roots: list[str], resolved: RootConfigResolved) -> list[str]:
    """Collect every root in config order; each root's files come back sorted."""
    logger = getAppLogger()
    files: list[str] = []
    for root in roots:
        found = collect_files(
            root, project_root=resolved["root"], predicate=resolved["filter"]
        )
        logger.trace(f"[COLLECT] {root!r} → {len(found)} file(s)")
        files.extend(found)
    return files


def managed_files(resolved: RootConfigResolved) -> list[Path]:
    """Absolute paths of every import and modify target, without duplicates."""
    seen: dict[Path, None] = {}
    for path in collect_roots(
        resolved["import_paths"] + resolved["modify_paths"], resolved
    ):
        seen.setdefault(resolved["root"] / path, None)
    return list(seen)


def _read_project_file(project_root: Path, path: str) -> str:
    return (project_root / path).read_text(encoding="utf-8")


# --------------------------------------------------------------------------- #
# Phases
# --------------------------------------------------------------------------- #


def aggregate_imports(
    resolved: RootConfigResolved,
    parse: ParseDeclarations,
    matcher: ImportMatcher,
) -> AggregateResult:
    ctx = AggregateContext(
        read_text=partial(_read_project_file, resolved["root"]),
        parse=parse,
        matcher=matcher,
        js_extensions=resolved["file_extensions_js"],
        plain_extensions=resolved["file_extensions_other"],
        custom_handler=resolved["file_extensions_custom"],
    )
    return build_aggregate(collect_roots(resolved["import_paths"], resolved), ctx)


def write_aggregate(
    resolved: RootConfigResolved,
    aggregate: AggregateResult,
    report: SyncReport,
) -> None:
    logger = getAppLogger()
    output_name = resolved["output_name"]
    if output_name is None:
        return

    text = aggregate.render()
    report.generated = text
    try:
        if write_if_changed(
            resolved["root"] / output_name,
            text,
            same_trimmed,
            dry_run=resolved["dry_run"],
        ):
            report.written.append(output_name)
    except OSError as e:
        logger.error("Could not write %s: %s", output_name, e)


def rewrite_consumers(
    resolved: RootConfigResolved,
    exports: list[str],
    parse: ParseDeclarations,
    matcher: ImportMatcher,
    report: SyncReport,
) -> None:
    for path in collect_roots(resolved["modify_paths"], resolved):
        kind = classify_file(
            path, resolved["file_extensions_js"], resolved["file_extensions_other"]
        )
        if kind is not FileKind.JS:
            continue
        if rewrite_consumer(
            path,
            project_root=resolved["root"],
            output_name=resolved["output_name"],
            exports=exports,
            parse=parse,
            matcher=matcher,
            dry_run=resolved["dry_run"],
        ):
            report.written.append(path)


# --------------------------------------------------------------------------- #
# Entry point
# --------------------------------------------------------------------------- #


def run_sync(
    resolved: RootConfigResolved,
    parse: ParseDeclarations | None = None,
) -> SyncReport:
    """Run one full synchronization pass over the configured roots.

    `parse` defaults to the tree-sitter parser built from the `parser`
    options; tests inject their own.
    """
    logger = getAppLogger()
    if parse is None:
        parse = make_parser(resolved["parser"])
    matcher = ImportMatcher(resolved["output_name"], resolved["previous_output_names"])
    report = SyncReport()

    if resolved["output_name"] is not None:
        aggregate = aggregate_imports(resolved, parse, matcher)
        report.exports = aggregate.export_names
        write_aggregate(resolved, aggregate, report)
    else:
        logger.debug("Output disabled; only cleaning consumer files")

    rewrite_consumers(resolved, report.exports, parse, matcher, report)

    count = len(report.written)
    verb = "would update" if resolved["dry_run"] else "updated"
    logger.info(
        "✅ Synced %d export%s, %s %d file%s.",
        len(report.exports),
        plural(report.exports),
        verb,
        count,
        plural(count),
    )
    return report
