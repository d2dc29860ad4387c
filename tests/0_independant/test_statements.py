# tests/0_independant/test_statements.py

import autoimporter.statements as mod_statements


def test_first_code_line_stops_at_semicolon() -> None:
    text = "  import {A} from './imports.js';\nconst x = 1;"
    assert mod_statements.first_code_line(text) == "import {A} from './imports.js'"


def test_first_code_line_without_semicolon_is_whole_text() -> None:
    assert mod_statements.first_code_line("  const x = 1\n") == "const x = 1"


def test_first_import_statement_includes_leading_whitespace() -> None:
    text = "\n  import { A } from './imports.js';\nrest"
    statement = mod_statements.first_import_statement(text)
    assert statement == "\n  import { A } from './imports.js';"


def test_first_import_statement_is_case_insensitive() -> None:
    assert mod_statements.first_import_statement("IMPORT{A} from 'x';") == (
        "IMPORT{A} from 'x';"
    )


def test_first_import_statement_ignores_other_forms() -> None:
    assert mod_statements.first_import_statement("import React from 'react';") == ""
    assert mod_statements.first_import_statement("const a = 1;") == ""


def test_render_import_line() -> None:
    line = mod_statements.render_import_line(["A", "B"], "./../imports.js")
    assert line == "import {A, B} from './../imports.js';"


def test_render_import_line_with_no_names() -> None:
    assert mod_statements.render_import_line([], "./imports.js") == (
        "import {} from './imports.js';"
    )


def test_replace_import_line_keeps_author_spacing() -> None:
    """Only the identifier list and the module path change."""
    # --- setup ---
    statement = "import {  Old1, Old2  } from \"./imports.js\";"

    # --- execute ---
    result = mod_statements.replace_import_line(
        statement, ["A", "B"], "./../gen.js"
    )

    # --- verify ---
    assert result == "import {  A, B  } from \"./../gen.js\";"


def test_replace_import_line_is_stable_on_its_own_output() -> None:
    line = mod_statements.render_import_line(["A", "B"], "./imports.js")
    again = mod_statements.replace_import_line(line, ["A", "B"], "./imports.js")
    assert again == line


def test_replace_import_line_returns_none_for_other_shapes() -> None:
    assert (
        mod_statements.replace_import_line("import A from './x.js';", ["A"], "./y.js")
        is None
    )


def test_import_matcher_markers() -> None:
    # --- setup ---
    matcher = mod_statements.ImportMatcher("imports.js", ["old.js"])

    # --- verify ---
    assert matcher.markers == ["./imports.js';", "./old.js';"]
    assert matcher.is_ours("import {A} from './../imports.js';")
    assert matcher.is_ours("import {A} from './old.js';")
    assert not matcher.is_ours("import {A} from './other.js';")
    # double quotes never match the marker
    assert not matcher.is_ours('import {A} from "./imports.js";')


def test_import_matcher_without_output_name() -> None:
    matcher = mod_statements.ImportMatcher(None, ["old.js"])
    assert matcher.markers == ["./old.js';"]
    assert matcher.starts_with_ours("import {A} from './old.js';\n")
