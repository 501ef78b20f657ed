"""Pytest configuration — ensures the project root is importable."""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Ignore any local .env and ZH_NUMERALS_* variables — tests see defaults only."""
    for name in list(os.environ):
        if name.startswith("ZH_NUMERALS_") and name != "ZH_NUMERALS_LONG_TESTS":
            monkeypatch.delenv(name)
    with patch("zh_numerals.config.load_dotenv", return_value=False):
        yield
