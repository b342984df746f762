"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import TimeShiftConfig, parse_worker_count
from core.errors import TimeShiftConfigError


def test_from_env_reads_data_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data dir from environment."""
    monkeypatch.setenv("TIMESHIFT_DATA_DIR", "./.tmp-timeshift")

    config = TimeShiftConfig.from_env()

    assert config.data_dir.name == ".tmp-timeshift"


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should default to one worker and the packaged path table."""
    monkeypatch.delenv("TIMESHIFT_WORKERS", raising=False)
    monkeypatch.delenv("TIMESHIFT_PATHS_FILE", raising=False)

    config = TimeShiftConfig.from_env()

    assert (config.workers, config.paths_file) == (1, None)


def test_from_env_raises_for_invalid_workers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric worker count."""
    monkeypatch.setenv("TIMESHIFT_WORKERS", "many")

    with pytest.raises(TimeShiftConfigError):
        TimeShiftConfig.from_env()


def test_parse_worker_count_rejects_zero() -> None:
    """Worker count must be positive."""
    with pytest.raises(TimeShiftConfigError):
        parse_worker_count("0")
