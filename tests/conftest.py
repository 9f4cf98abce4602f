"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import recordcsv...' works
without installing the package.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from recordcsv.config.settings import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Give every test default settings, independent of the developer's .env."""
    monkeypatch.delenv("RECORDCSV_SEPARATOR", raising=False)
    monkeypatch.delenv("RECORDCSV_ENCODING", raising=False)
    reset_settings()
    yield
    reset_settings()
