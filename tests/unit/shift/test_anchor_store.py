"""Unit tests for anchor date marker persistence."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from core.errors import AnchorDateError
from shift.anchor_store import has_anchor, parse_anchor_date, read_anchor_date, write_anchor_date


def test_read_anchor_date_returns_none_without_marker(tmp_path: Path) -> None:
    """Directories without a marker have no anchor."""
    assert read_anchor_date(tmp_path) is None


def test_read_anchor_date_trims_whitespace(tmp_path: Path) -> None:
    """Surrounding whitespace in the marker is ignored."""
    (tmp_path / ".anchorDate").write_text(" 2019-04-29\n", encoding="utf-8")

    assert read_anchor_date(tmp_path) == date(2019, 4, 29)


def test_write_anchor_date_writes_raw_date(tmp_path: Path) -> None:
    """The marker holds exactly the date string, without a newline."""
    anchor_file = write_anchor_date(tmp_path, date(2024, 5, 1))

    assert anchor_file.read_text(encoding="utf-8") == "2024-05-01" and has_anchor(tmp_path)


@pytest.mark.parametrize("raw_value", ["2024/05/01", "2024-5-1", "2024-02-30", "yesterday"])
def test_parse_anchor_date_is_strict(raw_value: str) -> None:
    """Only zero-padded YYYY-MM-DD calendar dates are accepted."""
    with pytest.raises(AnchorDateError):
        parse_anchor_date(raw_value)


def test_read_anchor_date_raises_for_malformed_marker(tmp_path: Path) -> None:
    """A malformed marker is reported with its file."""
    (tmp_path / ".anchorDate").write_text("soon", encoding="utf-8")

    with pytest.raises(AnchorDateError, match=".anchorDate"):
        read_anchor_date(tmp_path)
