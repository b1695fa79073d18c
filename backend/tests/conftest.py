from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[2]

# Ensure `backend/` is importable so `phrasetime` resolves without an install.
BACKEND_DIR = ROOT / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from phrasetime.core.clock import CurrentInstant  # noqa: E402


@pytest.fixture()
def currently() -> CurrentInstant:
    """Friday 2016-01-01 00:00:00, the reference instant used throughout."""
    return CurrentInstant.from_erl(((2016, 1, 1), (0, 0, 0)))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in ("PT_DEBUG", "PT_LOG_LEVEL", "PT_CURRENTLY", "PT_SCENARIOS_YAML"):
        monkeypatch.delenv(key, raising=False)
