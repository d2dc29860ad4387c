# tests/50_core/test_build_aggregate.py

from typing import Any

import pytest

import autoimporter.aggregate as mod_aggregate
import autoimporter.statements as mod_statements
from tests.utils import fake_parse


MATCHER = mod_statements.ImportMatcher("imports.js", [])


def _ctx(
    files: dict[str, str],
    custom_handler: Any = None,
) -> mod_aggregate.AggregateContext:
    def read_text(path: str) -> str:
        if path not in files:
            raise FileNotFoundError(path)
        return files[path]

    return mod_aggregate.AggregateContext(
        read_text=read_text,
        parse=fake_parse,
        matcher=MATCHER,
        js_extensions=["js", "jsx"],
        plain_extensions=["css", "scss"],
        custom_handler=custom_handler,
    )


def test_build_aggregate_scenario() -> None:
    """Two sources: one import line each, then the aggregate export."""
    # --- setup ---
    files = {
        "a.js": "export const A = 1, B = 2;\n",
        "b.js": "export const [C] = [3];\n",
    }

    # --- execute ---
    result = mod_aggregate.build_aggregate(["a.js", "b.js"], _ctx(files))

    # --- verify ---
    assert result.export_names == ["A", "B", "C"]
    assert result.render() == (
        "import {A, B} from 'a.js';\n"
        "import {C} from 'b.js';\n"
        "\n"
        "export {A, B, C};\n"
    )


def test_build_aggregate_plain_files_are_side_effect_imports() -> None:
    result = mod_aggregate.build_aggregate(["styles/site.scss"], _ctx({}))
    assert result.statements == ("import 'styles/site.scss';",)
    assert result.export_names == []


def test_build_aggregate_duplicates_keep_first_position() -> None:
    files = {
        "a.js": "export const A = 1;\n",
        "b.js": "export const B = 1, A = 2;\n",
    }
    result = mod_aggregate.build_aggregate(["a.js", "b.js"], _ctx(files))
    assert result.export_names == ["A", "B"]
    assert result.statements[1] == "import {B, A} from 'b.js';"


def test_build_aggregate_file_without_exports_still_imported() -> None:
    result = mod_aggregate.build_aggregate(["a.js"], _ctx({"a.js": "const x = 1;\n"}))
    assert result.render() == "import {} from 'a.js';\n\nexport {};\n"


def test_build_aggregate_custom_handler_result() -> None:
    # --- setup ---
    calls: list[str] = []

    def handler(path: str) -> dict[str, Any]:
        calls.append(path)
        return {"code": "import logo from './logo.svg';", "exports": ["logo"]}

    # --- execute ---
    result = mod_aggregate.build_aggregate(["logo.svg"], _ctx({}, handler))

    # --- verify ---
    assert calls == ["logo.svg"]
    assert result.render() == (
        "import logo from './logo.svg';\n\nexport {logo};\n"
    )


def test_build_aggregate_custom_without_handler_is_skipped() -> None:
    result = mod_aggregate.build_aggregate(["logo.svg"], _ctx({}))
    assert result.statements == ()


def test_build_aggregate_custom_handler_none_is_skipped() -> None:
    result = mod_aggregate.build_aggregate(["logo.svg"], _ctx({}, lambda _p: None))
    assert result.statements == ()
    assert result.export_names == []


def test_build_aggregate_custom_handler_failure_is_logged(
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    def handler(_path: str) -> dict[str, Any]:
        xmsg = "handler blew up"
        raise RuntimeError(xmsg)

    files = {"a.js": "export const A = 1;\n"}

    # --- execute ---
    result = mod_aggregate.build_aggregate(["a.js", "logo.svg"], _ctx(files, handler))

    # --- verify ---
    assert result.export_names == ["A"]
    assert "handler blew up" in capsys.readouterr().err


def test_build_aggregate_unreadable_file_contributes_nothing(
    capsys: pytest.CaptureFixture[str],
) -> None:
    files = {"b.js": "export const B = 1;\n"}

    result = mod_aggregate.build_aggregate(["a.js", "b.js"], _ctx(files))

    assert result.statements == ("import {B} from 'b.js';",)
    assert "Could not read a.js" in capsys.readouterr().err


def test_aggregate_result_is_not_mutated_by_add() -> None:
    empty = mod_aggregate.AggregateResult()
    grown = empty.add("import 'x.css';", ["X"])
    assert empty.statements == ()
    assert empty.export_names == []
    assert grown.export_names == ["X"]
