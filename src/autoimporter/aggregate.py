# src/autoimporter/aggregate.py
"""Build the generated module that re-exports every collected identifier."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .collector import FileKind, classify_file
from .config_types import CustomHandler
from .extract import extract_exports
from .logs import getAppLogger
from .parser import ParseDeclarations
from .statements import ImportMatcher, render_import_line


@dataclass(frozen=True)
class AggregateResult:
    """Accumulated aggregator state.

    `exports` keeps first-seen order; duplicates collapse onto the first.
    """

    statements: tuple[str, ...] = ()
    exports: dict[str, None] = field(default_factory=dict)

    def add(
        self, statement: str | None, names: Iterable[str] = ()
    ) -> "AggregateResult":
        exports = dict(self.exports)
        for name in names:
            exports.setdefault(name, None)
        statements = self.statements + ((statement,) if statement else ())
        return AggregateResult(statements, exports)

    @property
    def export_names(self) -> list[str]:
        return list(self.exports)

    def render(self) -> str:
        body = "".join(f"{statement}\n" for statement in self.statements)
        return f"{body}\nexport {{{', '.join(self.exports)}}};\n"


@dataclass(frozen=True)
class AggregateContext:
    """Everything the per-kind handlers need besides the file itself."""

    read_text: Callable[[str], str]
    parse: ParseDeclarations
    matcher: ImportMatcher
    js_extensions: Sequence[str]
    plain_extensions: Sequence[str]
    custom_handler: CustomHandler | None = None


def _add_js(
    acc: AggregateResult, path: str, ctx: AggregateContext
) -> AggregateResult:
    names = extract_exports(ctx.read_text(path), ctx.parse, ctx.matcher, source=path)
    return acc.add(render_import_line(names, path), names)


def _add_plain(
    acc: AggregateResult,
    path: str,
    ctx: AggregateContext,  # noqa: ARG001
) -> AggregateResult:
    return acc.add(f"import '{path}';")


def _add_custom(
    acc: AggregateResult, path: str, ctx: AggregateContext
) -> AggregateResult:
    logger = getAppLogger()
    if ctx.custom_handler is None:
        logger.trace(f"[AGGREGATE] no handler for {path}, skipping")
        return acc

    result: Any = ctx.custom_handler(path)
    if not isinstance(result, dict):
        if result is not None:
            logger.warning(
                "Custom handler returned %s for %s; expected a dict or None.",
                type(result).__name__,
                path,
            )
        return acc

    code = result.get("code")
    exports = result.get("exports")
    if exports is not None and not isinstance(exports, list):
        logger.warning("Custom handler 'exports' for %s is not a list; ignored.", path)
        exports = None
    return acc.add(code if isinstance(code, str) else None, exports or ())


KindHandler = Callable[[AggregateResult, str, AggregateContext], AggregateResult]

_HANDLERS: dict[FileKind, KindHandler] = {
    FileKind.JS: _add_js,
    FileKind.PLAIN: _add_plain,
    FileKind.CUSTOM: _add_custom,
}


def add_file(acc: AggregateResult, path: str, ctx: AggregateContext) -> AggregateResult:
    """Fold one import-target file into the aggregate.

    Any failure is confined to this file: it is logged and the file simply
    contributes nothing.
    """
    logger = getAppLogger()
    kind = classify_file(path, ctx.js_extensions, ctx.plain_extensions)
    logger.trace(f"[AGGREGATE] {path} ({kind.value})")
    try:
        return _HANDLERS[kind](acc, path, ctx)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
    except Exception as e:  # noqa: BLE001
        logger.error("Skipping %s: %s", path, e)
    return acc


def build_aggregate(
    files: Iterable[str],
    ctx: AggregateContext,
    initial: AggregateResult | None = None,
) -> AggregateResult:
    """Fold `files` (already sorted) into an AggregateResult."""
    acc = initial if initial is not None else AggregateResult()
    for path in files:
        acc = add_file(acc, path, ctx)
    return acc
