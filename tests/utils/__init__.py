# tests/utils/__init__.py

from .config import (
    make_config_content,
    make_meta,
    make_resolved,
    write_config_file,
    write_files,
)
from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT
from .fake_parser import fake_parse
from .force_mtime_advance import force_mtime_advance


__all__ = [  # noqa: RUF022
    # config
    "make_config_content",
    "make_meta",
    "make_resolved",
    "write_config_file",
    "write_files",
    # constants
    "PROJ_ROOT",
    "DEFAULT_TEST_LOG_LEVEL",
    # fake_parser
    "fake_parse",
    # force_mtime_advance
    "force_mtime_advance",
]
