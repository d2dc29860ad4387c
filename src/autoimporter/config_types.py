# src/autoimporter/config_types.py


from collections.abc import Callable
from pathlib import Path
from typing import Literal, TypedDict

from typing_extensions import NotRequired


OriginType = Literal["cli", "config", "pyproject", "default", "test"]


class CustomResult(TypedDict, total=False):
    """What a custom-extension handler may return for one file."""

    code: str  # statement appended verbatim to the generated module
    exports: list[str]  # identifiers added to the global export set


FilterFunc = Callable[[str], bool]
CustomHandler = Callable[[str], CustomResult | None]


class ParserOptions(TypedDict, total=False):
    language: str  # tree-sitter grammar name: javascript, typescript, tsx


# "import" is a Python keyword, hence the functional TypedDict form.
RootConfig = TypedDict(
    "RootConfig",
    {
        "import": list[str],
        "modify": list[str],
        "filter": FilterFunc | str | None,
        "output_name": str | None,
        "previous_output_names": list[str],
        "parser": ParserOptions,
        "file_extensions_js": list[str],
        "file_extensions_other": list[str],
        "file_extensions_custom": CustomHandler | str | None,
        "log_level": str,
        "watch_interval": float,
    },
    total=False,
)


class MetaConfigResolved(TypedDict):
    # sources of parameters
    cli_root: Path
    config_root: Path
    origin: OriginType
    config_path: NotRequired[Path]


class RootConfigResolved(TypedDict):
    import_paths: list[str]
    modify_paths: list[str]

    filter: FilterFunc | None
    output_name: str | None
    previous_output_names: list[str]
    parser: ParserOptions
    file_extensions_js: list[str]
    file_extensions_other: list[str]
    file_extensions_custom: CustomHandler | None

    # project root: every managed path is relative to it
    root: Path

    log_level: str
    watch_interval: float

    # runtime flag (CLI only, not persisted in normal configs)
    dry_run: bool

    __meta__: MetaConfigResolved

