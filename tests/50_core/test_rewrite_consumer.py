# tests/50_core/test_rewrite_consumer.py

from pathlib import Path

import pytest

import autoimporter.rewrite as mod_rewrite
import autoimporter.statements as mod_statements
from tests.utils import fake_parse, write_files


MATCHER = mod_statements.ImportMatcher("imports.js", ["old.js"])


def _rewrite(
    tmp_path: Path,
    path: str,
    exports: list[str],
    *,
    output_name: str | None = "imports.js",
    dry_run: bool = False,
) -> bool:
    return mod_rewrite.rewrite_consumer(
        path,
        project_root=tmp_path,
        output_name=output_name,
        exports=exports,
        parse=fake_parse,
        matcher=MATCHER,
        dry_run=dry_run,
    )


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("p.js", "./imports.js"),
        ("pages/p.js", "./../imports.js"),
        ("./src/pages/p.js", "./../../imports.js"),
    ],
)
def test_module_path_for(path: str, expected: str) -> None:
    assert mod_rewrite.module_path_for(path, "imports.js") == expected


def test_required_imports_excludes_own_and_keeps_order() -> None:
    assert mod_rewrite.required_imports(["A", "B", "C"], ["B"]) == ["A", "C"]


def test_rewrite_consumer_prepends_import_line(tmp_path: Path) -> None:
    # --- setup ---
    write_files(tmp_path, {"pages/p.js": "console.log(A);\n"})

    # --- execute ---
    written = _rewrite(tmp_path, "pages/p.js", ["A", "B", "C"])

    # --- verify ---
    assert written is True
    assert (tmp_path / "pages/p.js").read_text(encoding="utf-8") == (
        "import {A, B, C} from './../imports.js';\nconsole.log(A);\n"
    )


def test_rewrite_consumer_excludes_own_exports(tmp_path: Path) -> None:
    write_files(tmp_path, {"a.js": "export const A = 1;\n"})

    _rewrite(tmp_path, "a.js", ["A", "B"])

    text = (tmp_path / "a.js").read_text(encoding="utf-8")
    assert text.splitlines()[0] == "import {B} from './imports.js';"


def test_rewrite_consumer_is_idempotent(tmp_path: Path) -> None:
    # --- setup ---
    write_files(tmp_path, {"pages/p.js": "console.log(A);\n"})
    _rewrite(tmp_path, "pages/p.js", ["A"])
    first = (tmp_path / "pages/p.js").read_text(encoding="utf-8")

    # --- execute ---
    written = _rewrite(tmp_path, "pages/p.js", ["A"])

    # --- verify ---
    assert written is False
    assert (tmp_path / "pages/p.js").read_text(encoding="utf-8") == first


def test_rewrite_consumer_replaces_previous_output_name(tmp_path: Path) -> None:
    """A line pointing at a former output name is rewritten in place."""
    write_files(
        tmp_path,
        {"pages/p.js": "import { X } from './../old.js';\nbody();\n"},
    )

    assert _rewrite(tmp_path, "pages/p.js", ["A", "B"]) is True

    assert (tmp_path / "pages/p.js").read_text(encoding="utf-8") == (
        "import { A, B } from './../imports.js';\nbody();\n"
    )


def test_rewrite_consumer_keeps_foreign_first_statement(tmp_path: Path) -> None:
    write_files(tmp_path, {"p.js": "import {x} from './lib.js';\nx();\n"})

    _rewrite(tmp_path, "p.js", ["A"])

    assert (tmp_path / "p.js").read_text(encoding="utf-8") == (
        "import {A} from './imports.js';\nimport {x} from './lib.js';\nx();\n"
    )


def test_rewrite_consumer_output_disabled_only_cleans(tmp_path: Path) -> None:
    # --- setup ---
    write_files(
        tmp_path,
        {"p.js": "import {A} from './imports.js';\nconst b = A;\n"},
    )

    # --- execute ---
    written = _rewrite(tmp_path, "p.js", [], output_name=None)

    # --- verify ---
    assert written is True
    assert (tmp_path / "p.js").read_text(encoding="utf-8") == "const b = A;\n"


def test_rewrite_consumer_dry_run_leaves_file(tmp_path: Path) -> None:
    write_files(tmp_path, {"p.js": "x();\n"})

    assert _rewrite(tmp_path, "p.js", ["A"], dry_run=True) is True

    assert (tmp_path / "p.js").read_text(encoding="utf-8") == "x();\n"


def test_rewrite_consumer_unreadable_file_is_skipped(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _rewrite(tmp_path, "missing.js", ["A"]) is False
    assert "Could not read missing.js" in capsys.readouterr().err
