# tests/50_core/test_find_config.py

from argparse import Namespace
from pathlib import Path

import pytest

import autoimporter.config_loader as mod_config_loader
import autoimporter.meta as mod_meta


def test_find_config_raises_for_missing_file(tmp_path: Path) -> None:
    """Explicit --config path that doesn't exist should raise FileNotFoundError."""
    # --- setup ---
    args = Namespace(config=str(tmp_path / "nope.json"))

    # --- execute and verify ---
    with pytest.raises(FileNotFoundError, match="not found"):
        mod_config_loader.find_config(args, tmp_path)


def test_find_config_rejects_directory(tmp_path: Path) -> None:
    args = Namespace(config=str(tmp_path))
    with pytest.raises(ValueError, match="directory"):
        mod_config_loader.find_config(args, tmp_path)


def test_find_config_returns_explicit_file(tmp_path: Path) -> None:
    """Should return the explicit file path when it exists."""
    # --- setup ---
    cfg = tmp_path / "custom.json"
    cfg.write_text("{}")
    args = Namespace(config=str(cfg))

    # --- execute ---
    result = mod_config_loader.find_config(args, tmp_path)

    # --- verify ---
    assert result == cfg.resolve()


def test_find_config_logs_and_returns_none_when_missing(
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
) -> None:
    """Should log and return None when no default config file exists."""
    # --- setup ---
    args = Namespace(config=None)

    # --- execute ---
    result = mod_config_loader.find_config(args, tmp_path)

    # --- verify ---
    assert result is None
    assert "no config file found" in capsys.readouterr().err.lower()


def test_find_config_warns_for_multiple_candidates(
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
) -> None:
    """If multiple config files exist, should warn and prefer .py."""
    # --- setup ---
    prefix = mod_meta.PROGRAM_CONFIG
    py = tmp_path / f".{prefix}.py"
    json = tmp_path / f".{prefix}.json"
    jsonc = tmp_path / f".{prefix}.jsonc"
    for f in (py, json, jsonc):
        f.write_text("{}")

    args = Namespace(config=None)

    # --- execute ---
    result = mod_config_loader.find_config(args, tmp_path)

    # --- verify ---
    assert result == py
    assert "multiple config" in capsys.readouterr().err.lower()


def test_find_config_searches_parent_directories(tmp_path: Path) -> None:
    # --- setup ---
    cfg = tmp_path / f".{mod_meta.PROGRAM_CONFIG}.jsonc"
    cfg.write_text("{}")
    nested = tmp_path / "src" / "pages"
    nested.mkdir(parents=True)

    # --- execute ---
    result = mod_config_loader.find_config(Namespace(config=None), nested)

    # --- verify ---
    assert result == cfg


def test_find_config_uses_pyproject_table(tmp_path: Path) -> None:
    # --- setup ---
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[tool.autoimporter]\nimport = ["src"]\n')

    # --- execute ---
    result = mod_config_loader.find_config(Namespace(config=None), tmp_path)

    # --- verify ---
    assert result == pyproject


def test_find_config_ignores_pyproject_without_table(
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')

    result = mod_config_loader.find_config(
        Namespace(config=None), tmp_path, missing_level="warning"
    )

    assert result is None
    assert "no config file found" in capsys.readouterr().err.lower()


def test_find_config_prefers_dot_file_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.autoimporter]\nimport = ["x"]\n')
    dot = tmp_path / f".{mod_meta.PROGRAM_CONFIG}.json"
    dot.write_text("{}")

    assert mod_config_loader.find_config(Namespace(config=None), tmp_path) == dot
