"""Timestamp parsing and calendar bucketing.

Weekly buckets start on Monday (ISO week) and every bucket is computed in
UTC, independent of the host's locale or timezone settings.
"""

from __future__ import annotations

from typing import Literal

import pendulum

Granularity = Literal["week", "month"]


def _parse_exact(value: str | None) -> object | None:
    # "now" is a pendulum keyword that resolves against the host clock.
    if not value or value.strip() == "now":
        return None
    try:
        return pendulum.parse(value, exact=True, tz="UTC")
    except (ValueError, TypeError, OverflowError):
        return None


def parse_timestamp(value: str | None) -> pendulum.DateTime | None:
    """Parse an ISO-8601 date or datetime, returning None when missing or unparsable.

    A date-only value is midnight UTC. Time-only values and durations are
    unparsable since they would resolve against the current date.
    """
    parsed = _parse_exact(value)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.in_tz("UTC")
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC")
    return None


def parse_period_end(value: str | None) -> pendulum.DateTime | None:
    """Like ``parse_timestamp``, but a date-only value covers that whole day."""
    parsed = _parse_exact(value)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.in_tz("UTC")
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC").end_of("day")
    return None


def hours_between(start: str | None, end: str | None) -> int | None:
    """Whole hours from ``start`` to ``end``; None if either is unusable.

    An end before its start violates the record invariant and is treated
    the same as a missing date.
    """
    start_at = parse_timestamp(start)
    end_at = parse_timestamp(end)
    if start_at is None or end_at is None or end_at < start_at:
        return None
    return start_at.diff(end_at).in_hours()


def week_start(moment: pendulum.DateTime) -> pendulum.DateTime:
    day = moment.in_tz("UTC").start_of("day")
    return day.subtract(days=day.weekday())


def month_start(moment: pendulum.DateTime) -> pendulum.DateTime:
    utc = moment.in_tz("UTC")
    return pendulum.datetime(utc.year, utc.month, 1, tz="UTC")


def bucket_key(moment: pendulum.DateTime, granularity: Granularity) -> tuple[str, str]:
    """Return ``(period, label)`` for the bucket containing ``moment``.

    ``period`` is the ISO date of the bucket start and sorts chronologically.
    """
    if granularity == "month":
        start = month_start(moment)
        return start.to_date_string(), start.format("MMM YYYY")
    start = week_start(moment)
    return start.to_date_string(), start.format("MMM DD")
