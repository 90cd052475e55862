import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aeskit.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.workers == 1
    assert s.global_seed == 1337
    assert s.runs_dir == "runs"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AESKIT_WORKERS", "4")
    monkeypatch.setenv("AESKIT_VERBOSE", "yes")
    monkeypatch.setenv("GLOBAL_SEED", "7")
    load_settings.cache_clear()
    try:
        s = load_settings()
        assert s.workers == 4
        assert s.verbose is True
        assert s.global_seed == 7
    finally:
        load_settings.cache_clear()


def test_workers_validated():
    with pytest.raises(ValidationError):
        Settings(workers=0)
