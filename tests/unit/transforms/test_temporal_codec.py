"""Unit tests for temporal value detection and shifting."""

from __future__ import annotations

import pytest

from core.errors import TemporalParseError
from core.types import ShiftPlan
from transforms.temporal_codec import (
    DATE,
    DATETIME,
    INSTANT,
    LOCAL_DATETIME,
    YEAR,
    YEAR_2,
    YEAR_MONTH,
    detect_layout,
    normalize_unit,
    shift_text,
    shift_value,
)


@pytest.mark.parametrize(
    ("value", "layout"),
    [
        ("19", YEAR_2),
        ("2019", YEAR),
        ("2019-04", YEAR_MONTH),
        ("2019-04-29", DATE),
        ("2019-04-29T10:15:00", LOCAL_DATETIME),
        ("2019-04-29T10:15:00.123Z", INSTANT),
        ("2019-04-29T10:15:00.123456+02:00", INSTANT),
        ("2019-04-29T10:15:00Z", DATETIME),
        ("2019-04-29T10:15:00-05:00", DATETIME),
        ("2019-04-29T10:15:00.12Z", DATETIME),
    ],
)
def test_detect_layout_by_shape(value: str, layout: object) -> None:
    """Layout detection should follow the literal's length and fraction."""
    assert detect_layout(value) == layout


@pytest.mark.parametrize(
    ("value", "plan", "expected"),
    [
        ("19", ShiftPlan(365, "days"), "20"),
        ("2019", ShiftPlan(365, "days"), "2020"),
        ("2019-04", ShiftPlan(30, "days"), "2019-05"),
        ("2019-04-29", ShiftPlan(5, "days"), "2019-05-04"),
        ("2019-04-29T10:15:00", ShiftPlan(2, "days"), "2019-05-01T10:15:00"),
        ("2019-04-29T23:30:00.123+02:00", ShiftPlan(1, "days"), "2019-04-30T23:30:00.123+02:00"),
        ("2019-04-29T10:15:00.123456Z", ShiftPlan(1, "hours"), "2019-04-29T11:15:00.123456Z"),
        ("2019-12-31T23:59:59Z", ShiftPlan(1, "days"), "2020-01-01T23:59:59Z"),
        ("2019-04-29T10:15:00-05:00", ShiftPlan(-3, "days"), "2019-04-26T10:15:00-05:00"),
        ("2019-04-29T10:15:00.12Z", ShiftPlan(1, "days"), "2019-04-30T10:15:00.12Z"),
        ("2019-04-29T23:15:00.5-04:00", ShiftPlan(1, "hours"), "2019-04-30T00:15:00.5-04:00"),
    ],
)
def test_shift_value_preserves_layout(value: str, plan: ShiftPlan, expected: str) -> None:
    """Shifted values keep their precision, separators, and offset style."""
    assert shift_value(value, plan) == expected


def test_shift_value_months_clamps_to_month_end() -> None:
    """Calendar units should clamp to the last valid day."""
    assert shift_value("2020-01-31", ShiftPlan(1, "months")) == "2020-02-29"


def test_shift_value_years_from_leap_day() -> None:
    """Year shifts from a leap day land on February 28."""
    assert shift_value("2020-02-29", ShiftPlan(1, "year")) == "2021-02-28"


@pytest.mark.parametrize(
    "value",
    [
        "2019-04-29",
        "2019-04-29T10:15:00",
        "2019-04-29T10:15:00.123Z",
        "2019-04-29T10:15:00-05:00",
        "2019-04-29T10:15:00.12Z",
    ],
)
def test_shift_forward_then_back_is_identity(value: str) -> None:
    """Shifting by +N then -N days restores the original literal."""
    shifted = shift_value(value, ShiftPlan(400, "days"))

    assert shift_value(shifted, ShiftPlan(-400, "days")) == value


@pytest.mark.parametrize("value", ["2019-13-01", "01/02/1980", "yesterday", "2019-02-30"])
def test_shift_value_rejects_malformed_literals(value: str) -> None:
    """Malformed literals are a hard parse failure."""
    with pytest.raises(TemporalParseError):
        shift_value(value, ShiftPlan(1, "days"))


def test_normalize_unit_accepts_singular_names() -> None:
    """Singular and mixed-case unit names map to relativedelta keywords."""
    assert normalize_unit("Day") == "days"


def test_normalize_unit_rejects_unknown_units() -> None:
    """Unknown units are rejected."""
    with pytest.raises(TemporalParseError):
        normalize_unit("fortnights")


def test_shift_text_replaces_only_the_embedded_date() -> None:
    """Narrative markup around a date is left untouched."""
    text = '<div xmlns="http://www.w3.org/1999/xhtml">Seen on 2020-01-01 at clinic</div>'

    shifted = shift_text(text, ShiftPlan(5, "days"))

    assert shifted == '<div xmlns="http://www.w3.org/1999/xhtml">Seen on 2020-01-06 at clinic</div>'


def test_shift_text_handles_every_layout_family() -> None:
    """Instants, offset date-times, and dates are each shifted once."""
    text = "<p>2020-01-01T10:00:00.000Z, 2020-01-01T10:00:00+02:00, 2020-01-01</p>"

    shifted = shift_text(text, ShiftPlan(1, "days"))

    assert shifted == "<p>2020-01-02T10:00:00.000Z, 2020-01-02T10:00:00+02:00, 2020-01-02</p>"


def test_shift_text_leaves_invalid_matches_untouched() -> None:
    """Date-shaped text that is not a calendar date stays as written."""
    text = "<p>Reference 2020-99-99</p>"

    assert shift_text(text, ShiftPlan(1, "days")) == text


def test_shift_text_keeps_short_fraction_of_date_time() -> None:
    """A one or two digit fraction is shifted as part of its date-time."""
    text = "<p>Issued 2020-01-01T10:00:00.12Z</p>"

    assert shift_text(text, ShiftPlan(1, "days")) == "<p>Issued 2020-01-02T10:00:00.12Z</p>"
