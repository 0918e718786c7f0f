"""
Reconstruction of a local wall-clock capture time from a UTC media-encoded date.

Phones store the capture time in the container as UTC. Converted files should
show the local time the clip was recorded, so the UTC value is shifted by the
machine's UTC offset and, inside the daylight-saving window, by one more hour.

Two rules are available:

- ``fixed``: the US transition approximation. DST runs from the first Sunday
  on/after March 8 (inclusive) to the first Sunday on/after November 1
  (exclusive), both at 00:00 of the capture timestamp's own clock. It is wrong
  for regions with other transition dates and for years with different legal
  rules; that is a known limitation of the rule, not something to correct here.
- ``system``: the platform's timezone rules, as applied by ``datetime.astimezone``.
"""
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Tuple

from ..config.video import (
    DST_BEGIN_MONTH_DAY,
    DST_END_MONTH_DAY,
    DST_RULE_FIXED,
    DST_RULE_SYSTEM,
    DST_SHIFT_MINUTES,
)

SUNDAY = 6


@dataclass(frozen=True)
class LocalClock:
    """
    The local machine's timezone as far as the fixed rule needs it.

    Attributes:
        base_offset_minutes: Standard (non-DST) offset from UTC, e.g. -300 for UTC-5.
        observes_dst: Whether the local zone has a daylight-saving period at all.
    """

    base_offset_minutes: int
    observes_dst: bool

    @classmethod
    def from_system(cls) -> "LocalClock":
        # time.timezone is the standard offset in seconds *west* of UTC.
        return cls(
            base_offset_minutes=-time.timezone // 60,
            observes_dst=bool(time.daylight),
        )


def first_sunday_on_or_after(day: date) -> date:
    return day + timedelta(days=(SUNDAY - day.weekday()) % 7)


def dst_window(year: int) -> Tuple[datetime, datetime]:
    """Returns the [begin, end) daylight-saving window of the fixed rule for `year`."""
    begin = first_sunday_on_or_after(date(year, *DST_BEGIN_MONTH_DAY))
    end = first_sunday_on_or_after(date(year, *DST_END_MONTH_DAY))
    return (
        datetime.combine(begin, datetime.min.time()),
        datetime.combine(end, datetime.min.time()),
    )


def is_in_dst_window(timestamp: datetime) -> bool:
    begin, end = dst_window(timestamp.year)
    return begin <= timestamp < end


def to_local_fixed_rule(utc_timestamp: datetime, clock: LocalClock) -> datetime:
    offset = timedelta(minutes=clock.base_offset_minutes)
    if clock.observes_dst and is_in_dst_window(utc_timestamp):
        offset += timedelta(minutes=DST_SHIFT_MINUTES)
    return utc_timestamp + offset


def to_local_system_rule(utc_timestamp: datetime) -> datetime:
    return utc_timestamp.replace(tzinfo=timezone.utc).astimezone().replace(tzinfo=None)


def reconstruct_local_time(
    utc_timestamp: datetime,
    clock: LocalClock | None = None,
    rule: str = DST_RULE_FIXED,
) -> datetime:
    """
    Computes the local wall-clock time to stamp on a converted file.

    The result depends only on the arguments (and, for the system rule, on the
    process timezone), so repeated calls give the same value.

    Args:
        utc_timestamp: Naive datetime holding the UTC media-encoded date.
        clock: Offset and DST flag for the fixed rule. Read from the system when omitted.
        rule: ``"fixed"`` or ``"system"``.

    Returns:
        A naive datetime in local wall-clock time.

    Raises:
        ValueError: If `rule` is not a known rule name.
    """
    if utc_timestamp.tzinfo is not None:
        utc_timestamp = utc_timestamp.astimezone(timezone.utc).replace(tzinfo=None)

    if rule == DST_RULE_FIXED:
        return to_local_fixed_rule(utc_timestamp, clock or LocalClock.from_system())
    if rule == DST_RULE_SYSTEM:
        return to_local_system_rule(utc_timestamp)
    raise ValueError(f"Unknown DST rule: {rule!r}")
