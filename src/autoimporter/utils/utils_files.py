# src/autoimporter/utils/utils_files.py

import json
import re
from pathlib import Path
from typing import Any, cast

from autoimporter.logs import getAppLogger


def read_text_or_empty(path: Path) -> str:
    """Read a UTF-8 file; unreadable or missing files read as ''."""
    logger = getAppLogger()
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.trace(f"[read] treating {path} as empty: {e}")
        return ""


_JSONC_TOKEN = re.compile(
    r"""
    (?P<string>"(?:\\.|[^"\\])*")     # keep strings verbatim
    | (?P<line>(?<!:)//[^\n]*|\#[^\n]*)  # // or # comments (not URLs)
    | (?P<block>/\*.*?\*/)            # block comments
    """,
    re.VERBOSE | re.DOTALL,
)


def _strip_jsonc_comments(text: str) -> str:
    """Strip //, # and /* */ comments while leaving string contents alone."""

    def _keep(match: re.Match[str]) -> str:
        if match.group("string") is not None:
            return match.group("string")
        return ""

    return _JSONC_TOKEN.sub(_keep, text)


def load_jsonc(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load JSONC (JSON with comments and trailing commas)."""
    logger = getAppLogger()
    logger.trace(f"[load_jsonc] Loading from {path}")

    if not path.exists():
        xmsg = f"JSONC file not found: {path}"
        raise FileNotFoundError(xmsg)

    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    text = _strip_jsonc_comments(path.read_text(encoding="utf-8"))
    text = re.sub(r",(?=\s*[}\]])", "", text).strip()

    if not text:
        # Empty or only comments → interpret as "no config"
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid JSONC syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any] | list[Any]", data)


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file with tomllib (3.11+) or tomli (3.10)."""
    if not path.exists():
        xmsg = f"TOML file not found: {path}"
        raise FileNotFoundError(xmsg)

    try:
        import tomllib  # noqa: PLC0415
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef] # noqa: PLC0415

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        xmsg = f"Invalid TOML syntax in {path}: {e}"
        raise ValueError(xmsg) from e


def remove_path_in_error_message(inner_msg: str, path: Path) -> str:
    """Remove redundant mentions of `path` from a wrapped error message.

    "Invalid JSONC syntax in /abs/cfg.jsonc: Expecting value"
    → "Invalid JSONC syntax: Expecting value"
    """
    candidates = [f"in {path}", f"in '{path}'", str(path), path.name]
    clean_msg = inner_msg
    for pattern in candidates:
        clean_msg = clean_msg.replace(pattern, "")
    clean_msg = re.sub(r"\s*:\s*", ": ", clean_msg)
    clean_msg = re.sub(r"\s{2,}", " ", clean_msg)
    return clean_msg.strip(": ").strip()


def plural(obj: Any) -> str:
    """Return 's' unless obj (a count or sized object) is exactly one."""
    try:
        count = len(obj)
    except TypeError:
        count = obj if isinstance(obj, (int, float)) else 0
    return "s" if count != 1 else ""
