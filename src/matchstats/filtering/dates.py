"""Date-range selection over stored matches.

Both bounds are inclusive and compared at calendar-day granularity; an
omitted bound leaves that side of the range open.
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from matchstats.adapters.records import parse_date
from matchstats.exceptions import InvalidFilterParameterError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from matchstats.adapters.schemas import Match


def parse_date_bound(value: object, name: str = "date") -> dt.date | None:
    """Validate a caller-supplied date bound.

    Args:
        value: ``None``, a :class:`datetime.date`/:class:`datetime.datetime`,
            or an ISO 8601 string. An empty string counts as omitted.
        name: Parameter name used in the error message.

    Returns:
        The calendar date, or ``None`` for an open bound.

    Raises:
        InvalidFilterParameterError: If *value* is not a parseable date.
    """
    if value is None or value == "":
        return None
    try:
        return parse_date(value)
    except ValueError as exc:
        msg = f"{name} is not a valid date: {value!r}"
        raise InvalidFilterParameterError(msg) from exc


def validate_date_range(
    start: object = None,
    end: object = None,
) -> tuple[dt.date | None, dt.date | None]:
    """Parse both bounds and check that they are ordered.

    Raises:
        InvalidFilterParameterError: If a bound is unparseable or
            *start* falls after *end*.
    """
    start_date = parse_date_bound(start, "start")
    end_date = parse_date_bound(end, "end")
    if start_date is not None and end_date is not None and start_date > end_date:
        msg = f"start ({start_date}) must not be after end ({end_date})"
        raise InvalidFilterParameterError(msg)
    return start_date, end_date


def in_date_range(
    match: Match,
    start: dt.date | None,
    end: dt.date | None,
) -> bool:
    """Return ``True`` if *match* was played within ``[start, end]``."""
    if start is not None and match.date < start:
        return False
    return end is None or match.date <= end


def filter_by_date(
    matches: Iterable[Match],
    start: object = None,
    end: object = None,
) -> list[Match]:
    """Select the matches played within an inclusive date range.

    Args:
        matches: Stored matches.
        start: Earliest date to include, or ``None`` for no lower bound.
        end: Latest date to include, or ``None`` for no upper bound.

    Returns:
        Matching records in input order.

    Raises:
        InvalidFilterParameterError: If a bound is invalid.
    """
    start_date, end_date = validate_date_range(start, end)
    return [m for m in matches if in_date_range(m, start_date, end_date)]
