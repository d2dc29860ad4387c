# src/autoimporter/utils/__init__.py

from .utils_files import (
    load_jsonc,
    load_toml,
    plural,
    read_text_or_empty,
    remove_path_in_error_message,
)
from .utils_paths import (
    compare_paths,
    normalize_path,
    path_depth,
    path_order_key,
    sort_paths,
)
from .utils_types import cast_hint, resolve_callable


__all__ = [  # noqa: RUF022
    # utils_files
    "load_jsonc",
    "load_toml",
    "plural",
    "read_text_or_empty",
    "remove_path_in_error_message",
    # utils_paths
    "compare_paths",
    "normalize_path",
    "path_depth",
    "path_order_key",
    "sort_paths",
    # utils_types
    "cast_hint",
    "resolve_callable",
]
