# tests/utils/constants.py

from pathlib import Path


PROJ_ROOT = Path(__file__).resolve().parents[2]

# TEST sits below TRACE: everything is logged while a test runs
DEFAULT_TEST_LOG_LEVEL = "test"
