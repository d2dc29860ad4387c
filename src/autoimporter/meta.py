# src/autoimporter/meta.py
"""Program identity constants shared across the package."""

from typing import NamedTuple


PROGRAM_PACKAGE = "autoimporter"
PROGRAM_SCRIPT = "autoimporter"
PROGRAM_DISPLAY = "AutoImporter"
PROGRAM_CONFIG = "autoimporter"
PROGRAM_ENV = "AUTOIMPORTER"


class Metadata(NamedTuple):
    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"
