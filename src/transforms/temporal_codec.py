"""Temporal value detection, parsing, shifting, and rendering.

This module classifies FHIR date-like literals by shape, parses them
strictly as UTC (or their own offset), applies a shift plan, and renders
the result in exactly the layout of the input. Narrative text is handled
by independent global substitution passes, one per layout family.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import re

from dateutil.relativedelta import relativedelta

from core.constants import SUPPORTED_SHIFT_UNITS
from core.errors import TemporalParseError
from core.types import ShiftPlan

_DATE = r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
_TIME = r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
_OFFSET = r"(?P<offset>[zZ]|[+-]\d{2}:\d{2})"
_FRACTION_MARKER = re.compile(r"T\d{2}:\d{2}:\d{2}\.\d{3,}", re.ASCII)


@dataclass(frozen=True)
class TemporalLayout:
    """One literal shape a temporal value can take.

    Attributes:
        name: Stable layout identifier.
        pattern: Regex the whole literal must match.
    """

    name: str
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class TemporalValue:
    """A parsed temporal literal with the details needed to re-render it.

    Attributes:
        layout: Layout the literal matched.
        moment: Parsed timezone-aware datetime.
        fraction: Original fractional-second digits, if any.
        offset: Original offset text (``Z`` or ``+HH:MM``), if any.
    """

    layout: TemporalLayout
    moment: datetime
    fraction: str | None = None
    offset: str | None = None


YEAR_2 = TemporalLayout("year2", re.compile(r"(?P<year>\d{2})", re.ASCII))
YEAR = TemporalLayout("year", re.compile(r"(?P<year>\d{4})", re.ASCII))
YEAR_MONTH = TemporalLayout(
    "year_month", re.compile(r"(?P<year>\d{4})-(?P<month>\d{2})", re.ASCII)
)
DATE = TemporalLayout("date", re.compile(_DATE, re.ASCII))
LOCAL_DATETIME = TemporalLayout("local_datetime", re.compile(_DATE + _TIME, re.ASCII))
INSTANT = TemporalLayout(
    "instant",
    re.compile(_DATE + _TIME + r"\.(?P<fraction>\d{3,})" + _OFFSET + "?", re.ASCII),
)
DATETIME = TemporalLayout(
    "datetime",
    re.compile(_DATE + _TIME + r"(?:\.(?P<fraction>\d{1,2}))?" + _OFFSET, re.ASCII),
)

_LAYOUTS_BY_LENGTH = {
    2: YEAR_2,
    4: YEAR,
    7: YEAR_MONTH,
    10: DATE,
    19: LOCAL_DATETIME,
}

# Applied in this order; the shapes are disjoint so no pass re-matches
# the output of an earlier one.
_NARRATIVE_PASSES = (
    (
        INSTANT,
        re.compile(
            r"\b\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}(?:[+-]\d{2}:\d{2}|[zZ])\b", re.ASCII
        ),
    ),
    (
        DATETIME,
        re.compile(
            r"\b\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,2})?(?:[+-]\d{2}:\d{2}|[zZ])\b",
            re.ASCII,
        ),
    ),
    (DATE, re.compile(r"\b\d{4}-\d{2}-\d{2}\b", re.ASCII)),
)


def detect_layout(value: str) -> TemporalLayout:
    """Classify an exact field value by its literal shape.

    Args:
        value: Raw temporal literal.

    Returns:
        Layout used both to parse and to re-render the value.
    """
    layout = _LAYOUTS_BY_LENGTH.get(len(value))
    if layout is not None:
        return layout
    if _FRACTION_MARKER.search(value):
        return INSTANT
    return DATETIME


def parse(value: str, layout: TemporalLayout | None = None) -> TemporalValue:
    """Strictly parse a temporal literal.

    Args:
        value: Raw temporal literal.
        layout: Expected layout, detected from the value when omitted.

    Returns:
        Parsed value; literals without an offset are read as UTC.

    Raises:
        TemporalParseError: If the literal does not match the layout or
            does not name a valid calendar date and time.
    """
    layout = layout or detect_layout(value)
    match = layout.pattern.fullmatch(value)
    if match is None:
        raise TemporalParseError(
            f"Invalid temporal value {value!r}: expected {layout.name} layout."
        )
    parts = match.groupdict()
    fraction = parts.get("fraction")
    offset = parts.get("offset")
    try:
        moment = datetime(
            year=_parse_year(parts["year"]),
            month=int(parts.get("month") or 1),
            day=int(parts.get("day") or 1),
            hour=int(parts.get("hour") or 0),
            minute=int(parts.get("minute") or 0),
            second=int(parts.get("second") or 0),
            microsecond=int(fraction[:6].ljust(6, "0")) if fraction else 0,
            tzinfo=_parse_offset(offset),
        )
    except ValueError as error:
        raise TemporalParseError(
            f"Invalid temporal value {value!r}: {error}."
        ) from error
    return TemporalValue(layout=layout, moment=moment, fraction=fraction, offset=offset)


def render(value: TemporalValue) -> str:
    """Render a temporal value in the layout it was parsed from."""
    moment = value.moment
    name = value.layout.name
    if name == YEAR_2.name:
        return f"{moment.year % 100:02d}"
    if name == YEAR.name:
        return f"{moment.year:04d}"
    if name == YEAR_MONTH.name:
        return f"{moment.year:04d}-{moment.month:02d}"
    text = f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
    if name == DATE.name:
        return text
    text += f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    if value.fraction is not None:
        text += "." + _render_fraction(moment.microsecond, value.fraction)
    return text + (value.offset or "")


def shift_moment(moment: datetime, plan: ShiftPlan) -> datetime:
    """Add a signed shift to a datetime.

    Args:
        moment: Datetime to shift.
        plan: Signed amount and unit.

    Returns:
        Shifted datetime, in the same timezone.

    Raises:
        TemporalParseError: If the unit is unknown or the result is out of range.
    """
    unit = normalize_unit(plan.unit)
    try:
        if plan.amount < 0:
            return moment - relativedelta(**{unit: abs(plan.amount)})
        return moment + relativedelta(**{unit: plan.amount})
    except (OverflowError, ValueError) as error:
        raise TemporalParseError(
            f"Cannot shift {moment.isoformat()} by {plan.amount} {unit}: {error}."
        ) from error


def shift_value(value: str, plan: ShiftPlan, layout: TemporalLayout | None = None) -> str:
    """Shift one temporal literal and keep its layout.

    Args:
        value: Raw temporal literal.
        plan: Signed amount and unit.
        layout: Known layout, detected from the value when omitted.

    Returns:
        Shifted literal with the same shape, separators, precision,
        and offset style.

    Raises:
        TemporalParseError: If the literal is malformed.
    """
    return _render_shifted(parse(value, layout), plan)


def shift_text(text: str, plan: ShiftPlan) -> str:
    """Shift every temporal literal embedded in narrative text.

    Matches that look like dates but are not valid calendar values are
    left as they are; surrounding text is never altered.

    Args:
        text: Narrative text such as an XHTML ``div``.
        plan: Signed amount and unit.

    Returns:
        Text with each recognized literal shifted in place.
    """
    for layout, pattern in _NARRATIVE_PASSES:
        text = pattern.sub(
            lambda match, layout=layout: _shift_text_match(match.group(0), plan, layout),
            text,
        )
    return text


def normalize_unit(unit: str) -> str:
    """Return the plural unit name accepted by relativedelta.

    Raises:
        TemporalParseError: If the unit is not supported.
    """
    candidate = unit.strip().lower()
    if not candidate.endswith("s"):
        candidate += "s"
    if candidate not in SUPPORTED_SHIFT_UNITS:
        raise TemporalParseError(
            f"Unsupported shift unit {unit!r}. Use one of: {', '.join(SUPPORTED_SHIFT_UNITS)}."
        )
    return candidate


def _shift_text_match(literal: str, plan: ShiftPlan, layout: TemporalLayout) -> str:
    """Shift one narrative match, leaving invalid calendar values untouched."""
    try:
        parsed = parse(literal, layout)
    except TemporalParseError:
        return literal
    return _render_shifted(parsed, plan)


def _render_shifted(parsed: TemporalValue, plan: ShiftPlan) -> str:
    """Apply a plan to a parsed value and render it in its original layout."""
    shifted = TemporalValue(
        layout=parsed.layout,
        moment=shift_moment(parsed.moment, plan),
        fraction=parsed.fraction,
        offset=parsed.offset,
    )
    return render(shifted)


def _parse_year(raw_year: str) -> int:
    """Expand a two-digit year with the 1969 pivot."""
    year = int(raw_year)
    if len(raw_year) == 2:
        return year + (1900 if year >= 69 else 2000)
    return year


def _parse_offset(offset: str | None) -> timezone:
    """Convert offset text to a timezone, reading a missing offset as UTC."""
    if offset is None or offset in ("Z", "z"):
        return timezone.utc
    sign = -1 if offset[0] == "-" else 1
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if minutes >= 60:
        raise ValueError(f"offset minutes must be in 0..59, got {minutes}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _render_fraction(microsecond: int, original: str) -> str:
    """Render fractional seconds with the digit count of the original text."""
    digits = f"{microsecond:06d}"
    if len(original) <= len(digits):
        return digits[: len(original)]
    return digits + original[len(digits):]
