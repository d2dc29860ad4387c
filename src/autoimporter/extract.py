# src/autoimporter/extract.py

from collections.abc import Iterable

from .logs import getAppLogger
from .parser import DeclarationKind, DeclarationNode, ParseDeclarations
from .statements import ImportMatcher, purge


def _names_from_node(node: DeclarationNode) -> Iterable[str | None]:
    yield from node.specifiers
    for binding in node.declarations:
        yield binding.name
        yield from binding.array_elements
        yield from binding.object_values


def exported_names(nodes: Iterable[DeclarationNode]) -> list[str]:
    """Flatten the identifiers bound by named-export declarations."""
    return [
        name
        for node in nodes
        if node.kind is DeclarationKind.NAMED_EXPORT
        for name in _names_from_node(node)
        if name
    ]


def extract_exports(
    text: str,
    parse: ParseDeclarations,
    matcher: ImportMatcher,
    *,
    purged: bool = False,
    source: str | None = None,
) -> list[str]:
    """Return the identifiers `text` exports by name.

    The engine's own import line is purged first unless `purged` says that
    already happened. A file that fails to parse exports nothing; the error is
    logged and the run carries on.
    """
    logger = getAppLogger()
    label = source or "<text>"

    if not purged:
        text = purge(text, matcher)

    try:
        nodes = parse(text)
    except Exception as e:  # noqa: BLE001
        logger.error("Could not parse %s: %s", label, e)
        return []

    names = exported_names(nodes)
    logger.trace(f"[EXTRACT] {label} → {names}")
    return names
