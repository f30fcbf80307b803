"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import csvtable' works without
installing, and isolates every test from CSV_* environment variables.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from csvtable.config import Settings, get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Run each test with default settings (no .env, no CSV_* variables)."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
