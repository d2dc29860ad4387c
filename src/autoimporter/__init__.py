# src/autoimporter/__init__.py

"""AutoImporter — keep module-level imports in sync with the files on disk.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()              → CLI entrypoint
    - run_sync()          → Run one synchronization pass
    - resolve_config()    → Merge CLI args with config files
    - get_metadata()      → Retrieve version / commit info
"""

from .actions import get_metadata, watch_for_changes
from .aggregate import AggregateContext, AggregateResult, add_file, build_aggregate
from .build import SyncReport, collect_roots, managed_files, run_sync
from .cli import main
from .collector import FileKind, classify_file, collect_files, has_extension
from .config_loader import (
    CONFIG_KEY_ALIASES,
    can_run_configless,
    find_config,
    load_and_parse_config,
    load_config,
    parse_config,
)
from .config_resolve import normalize_output_name, resolve_config
from .config_types import (
    CustomHandler,
    CustomResult,
    FilterFunc,
    MetaConfigResolved,
    OriginType,
    ParserOptions,
    RootConfig,
    RootConfigResolved,
)
from .constants import (
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_WATCH_INTERVAL,
    DEFAULT_FILE_EXTENSIONS_JS,
    DEFAULT_FILE_EXTENSIONS_OTHER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_WATCH_INTERVAL,
)
from .extract import exported_names, extract_exports
from .logs import getAppLogger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .parser import (
    DeclarationKind,
    DeclarationNode,
    ParseDeclarations,
    ParseError,
    TreeSitterParser,
    VariableBinding,
    make_parser,
)
from .rewrite import (
    build_import_line,
    module_path_for,
    required_imports,
    rewrite_consumer,
)
from .statements import (
    ImportMatcher,
    first_code_line,
    first_import_statement,
    purge,
    render_import_line,
    replace_import_line,
)
from .utils import (
    compare_paths,
    normalize_path,
    path_depth,
    path_order_key,
    sort_paths,
)
from .writer import same_first_code_line, same_trimmed, write_if_changed


__all__ = [  # noqa: RUF022
    # actions
    "get_metadata",
    "watch_for_changes",
    # aggregate
    "AggregateContext",
    "AggregateResult",
    "add_file",
    "build_aggregate",
    # build
    "SyncReport",
    "collect_roots",
    "managed_files",
    "run_sync",
    # cli
    "main",
    # collector
    "FileKind",
    "classify_file",
    "collect_files",
    "has_extension",
    # config_loader
    "CONFIG_KEY_ALIASES",
    "can_run_configless",
    "find_config",
    "load_and_parse_config",
    "load_config",
    "parse_config",
    # config_resolve
    "normalize_output_name",
    "resolve_config",
    # config_types
    "CustomHandler",
    "CustomResult",
    "FilterFunc",
    "MetaConfigResolved",
    "OriginType",
    "ParserOptions",
    "RootConfig",
    "RootConfigResolved",
    # constants
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_ENV_WATCH_INTERVAL",
    "DEFAULT_FILE_EXTENSIONS_JS",
    "DEFAULT_FILE_EXTENSIONS_OTHER",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_OUTPUT_NAME",
    "DEFAULT_WATCH_INTERVAL",
    # extract
    "exported_names",
    "extract_exports",
    # logs
    "getAppLogger",
    # meta
    "Metadata",
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # parser
    "DeclarationKind",
    "DeclarationNode",
    "ParseDeclarations",
    "ParseError",
    "TreeSitterParser",
    "VariableBinding",
    "make_parser",
    # rewrite
    "build_import_line",
    "module_path_for",
    "required_imports",
    "rewrite_consumer",
    # statements
    "ImportMatcher",
    "first_code_line",
    "first_import_statement",
    "purge",
    "render_import_line",
    "replace_import_line",
    # utils
    "compare_paths",
    "normalize_path",
    "path_depth",
    "path_order_key",
    "sort_paths",
    # writer
    "same_first_code_line",
    "same_trimmed",
    "write_if_changed",
]
