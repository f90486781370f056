"""
Release dates with variable precision.

Spotify reports release dates as "1981", "1981-12" or "1981-12-01" together
with a precision token ("year", "month", "day"). Coarser dates are expanded
to the first day of the year or month; formatting truncates a date back to
the length implied by its precision.

The precision may arrive after the date inside an object, so object
converters collect both raw values and call apply_release_date() in their
construction step.
"""

import re
from datetime import date, datetime
from typing import Any

from spotify_web.core.exceptions import ReleaseDateFormatError
from spotify_web.objectmodel.enums import ReleaseDatePrecision


# precision -> (pattern, strptime format, formatted length)
_FORMATS = {
    ReleaseDatePrecision.YEAR: (re.compile(r"\d{4}"), "%Y", 4),
    ReleaseDatePrecision.MONTH: (re.compile(r"\d{4}-\d{2}"), "%Y-%m", 7),
    ReleaseDatePrecision.DAY: (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d", 10),
}

_PRECISION_BY_LENGTH = {length: precision for precision, (_, _, length) in _FORMATS.items()}


def parse_release_date(value: str, precision: ReleaseDatePrecision) -> date:
    """
    Parse a release date string according to its precision.

    Raises:
        ReleaseDateFormatError: If the string does not have the shape of the
                                precision or is not a real calendar date.
    """
    pattern, fmt, _ = _FORMATS[precision]
    details = {"value": value, "precision": precision.name.lower()}

    if not pattern.fullmatch(value):
        raise ReleaseDateFormatError(
            f"Release date {value!r} does not match precision '{precision.name.lower()}'",
            details=details
        )

    try:
        return datetime.strptime(value, fmt).date()
    except ValueError as e:
        raise ReleaseDateFormatError(f"Invalid release date {value!r}: {e}", details=details) from e


def format_release_date(value: date, precision: ReleaseDatePrecision) -> str:
    """Format value with as many components as precision allows."""
    _, _, length = _FORMATS[precision]
    return value.isoformat()[:length]


def infer_release_date_precision(value: str) -> ReleaseDatePrecision:
    """Precision implied by the length of a release date string."""
    try:
        return _PRECISION_BY_LENGTH[len(value)]
    except KeyError:
        raise ReleaseDateFormatError(
            f"Cannot infer the precision of release date {value!r}",
            details={"value": value}
        ) from None


def apply_release_date(fields: dict[str, Any]) -> dict[str, Any]:
    """
    Replace the raw 'release_date' slot with a parsed date.

    A missing precision is inferred from the raw string. Without a raw date
    the slots are left untouched.
    """
    raw = fields.get("release_date")
    if raw is None:
        return fields

    precision = fields.get("release_date_precision")
    if precision is None:
        precision = infer_release_date_precision(raw)
        fields["release_date_precision"] = precision

    fields["release_date"] = parse_release_date(raw, precision)
    return fields
