# src/autoimporter/parser.py
"""Top-level declaration parsing.

The engine never looks at a syntax tree directly. It consumes a flat list of
DeclarationNode values, one per top-level statement, produced by any callable
with the ParseDeclarations signature. The default implementation wraps a
Tree-sitter grammar.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any

from .config_types import ParserOptions
from .constants import DEFAULT_PARSER_LANGUAGE
from .logs import getAppLogger


class ParseError(ValueError):
    """Raised when file text cannot be turned into declaration nodes."""


class DeclarationKind(str, Enum):
    NAMED_EXPORT = "named_export"
    DEFAULT_EXPORT = "default_export"
    EXPORT_ALL = "export_all"
    OTHER = "other"


@dataclass(frozen=True)
class VariableBinding:
    """One declarator of an exported variable declaration.

    Exactly one of the three shapes is filled in: a plain identifier
    (`name`), an array pattern (`array_elements`) or an object pattern
    (`object_values`). Elements that are not bare identifiers are None.
    """

    name: str | None = None
    array_elements: list[str | None] = field(default_factory=list)
    object_values: list[str | None] = field(default_factory=list)


@dataclass(frozen=True)
class DeclarationNode:
    kind: DeclarationKind
    specifiers: list[str | None] = field(default_factory=list)
    declarations: list[VariableBinding] = field(default_factory=list)


ParseDeclarations = Callable[[str], list[DeclarationNode]]


# --------------------------------------------------------------------------- #
# Tree-sitter adapter
# --------------------------------------------------------------------------- #

_VARIABLE_DECLARATION_TYPES = {"lexical_declaration", "variable_declaration"}


@lru_cache(maxsize=8)
def _load_parser(language: str) -> Any:
    """Load a Tree-sitter parser from whichever grammar bundle is installed.

    Tries ``tree_sitter_language_pack`` first, then ``tree_sitter_languages``.
    """
    errors: list[str] = []

    try:
        from tree_sitter_language_pack import get_parser  # noqa: PLC0415

        return get_parser(language)  # pyright: ignore[reportArgumentType]
    except ModuleNotFoundError:
        pass
    except Exception as e:  # noqa: BLE001
        errors.append(f"Failed to load Tree-sitter grammar {language!r}: {e}")

    try:
        from tree_sitter_languages import get_parser  # noqa: PLC0415

        return get_parser(language)
    except ModuleNotFoundError:
        pass
    except Exception as e:  # noqa: BLE001
        errors.append(f"Failed to load Tree-sitter grammar {language!r}: {e}")

    if errors:
        raise ParseError(errors[0])
    xmsg = (
        "No Tree-sitter grammar bundle is installed."
        " Install 'tree-sitter-language-pack'."
    )
    raise ParseError(xmsg)


def _text(source: bytes, node: Any) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error_line(node: Any) -> int | None:
    if node.type == "ERROR" or node.is_missing:
        return int(node.start_point[0]) + 1
    for child in node.children:
        if child.has_error:
            return _first_error_line(child)
    return None


def _identifier(source: bytes, node: Any | None) -> str | None:
    if node is not None and node.type == "identifier":
        return _text(source, node)
    return None


def _binding(source: bytes, declarator: Any) -> VariableBinding:
    target = declarator.child_by_field_name("name")
    if target is None:
        return VariableBinding()

    if target.type == "array_pattern":
        return VariableBinding(
            array_elements=[_identifier(source, c) for c in target.named_children],
        )

    if target.type == "object_pattern":
        values: list[str | None] = []
        for prop in target.named_children:
            if prop.type == "shorthand_property_identifier_pattern":
                values.append(_text(source, prop))
            elif prop.type == "pair_pattern":
                values.append(_identifier(source, prop.child_by_field_name("value")))
            else:
                values.append(None)
        return VariableBinding(object_values=values)

    return VariableBinding(name=_identifier(source, target))


def _export_node(source: bytes, node: Any) -> DeclarationNode:
    tokens = {child.type for child in node.children}
    if "default" in tokens:
        return DeclarationNode(DeclarationKind.DEFAULT_EXPORT)

    clause = next((c for c in node.named_children if c.type == "export_clause"), None)
    namespace = next(
        (c for c in node.named_children if c.type == "namespace_export"), None
    )
    declaration = node.child_by_field_name("declaration")
    if clause is None and namespace is None and declaration is None:
        # export * from '...'
        return DeclarationNode(DeclarationKind.EXPORT_ALL)

    specifiers: list[str | None] = []
    if namespace is not None:
        # export * as ns from '...'
        alias = namespace.named_children[-1] if namespace.named_children else None
        specifiers.append(_identifier(source, alias))
    if clause is not None:
        for spec in clause.named_children:
            if spec.type != "export_specifier":
                continue
            exported = spec.child_by_field_name("alias") or spec.child_by_field_name(
                "name"
            )
            specifiers.append(_identifier(source, exported))

    declarations: list[VariableBinding] = []
    if declaration is not None and declaration.type in _VARIABLE_DECLARATION_TYPES:
        declarations = [
            _binding(source, d)
            for d in declaration.named_children
            if d.type == "variable_declarator"
        ]

    return DeclarationNode(
        DeclarationKind.NAMED_EXPORT,
        specifiers=specifiers,
        declarations=declarations,
    )


class TreeSitterParser:
    """ParseDeclarations implementation backed by a Tree-sitter grammar."""

    def __init__(self, language: str = DEFAULT_PARSER_LANGUAGE) -> None:
        self.language = language

    def __repr__(self) -> str:
        return f"{type(self).__name__}(language={self.language!r})"

    def __call__(self, text: str) -> list[DeclarationNode]:
        logger = getAppLogger()
        parser = _load_parser(self.language)
        source = text.encode("utf-8")
        tree = parser.parse(source)
        root = tree.root_node

        if root.has_error:
            line = _first_error_line(root)
            where = f" near line {line}" if line is not None else ""
            xmsg = f"Syntax error{where} ({self.language})"
            raise ParseError(xmsg)

        nodes: list[DeclarationNode] = []
        for child in root.named_children:
            if child.type == "export_statement":
                nodes.append(_export_node(source, child))
            else:
                nodes.append(DeclarationNode(DeclarationKind.OTHER))

        logger.trace(f"[PARSE] {len(nodes)} top-level node(s) via {self!r}")
        return nodes


def make_parser(options: ParserOptions | None = None) -> ParseDeclarations:
    """Build the default parser from the pass-through `parser` options."""
    language = (options or {}).get("language") or DEFAULT_PARSER_LANGUAGE
    return TreeSitterParser(language)
