# tests/conftest.py

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from sigstat.config.settings import ENV_VAR, reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
	monkeypatch.delenv(ENV_VAR, raising=False)
	reset_settings()
	try:
		yield
	finally:
		reset_settings()
