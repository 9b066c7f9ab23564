"""Publish time conversion.

The hosting service takes the publish date as entered (local, unconverted)
and the publish time as a UTC time of day. Only the time is converted
here; callers send the original date string alongside it.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from podpublisher.config.schema import DEFAULT_TIMEZONE
from podpublisher.utils.errors import TimeParseError


def parse_local_datetime(date: str, time: str, source_zone: str = DEFAULT_TIMEZONE) -> datetime:
    """Interpret ``date`` and ``time`` as wall-clock time in ``source_zone``.

    Times inside a spring-forward gap move forward by the gap, and times
    in the repeated fall-back hour resolve to the first occurrence.

    Raises:
        TimeParseError: If the strings don't form a valid timestamp or the
            zone is unknown
    """
    try:
        zone = ZoneInfo(source_zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimeParseError(f"Unknown timezone: {source_zone}") from e

    try:
        naive = datetime.fromisoformat(f"{date.strip()}T{time.strip()}")
    except ValueError as e:
        raise TimeParseError(f"Invalid publish date/time: {date!r} {time!r}") from e

    if naive.tzinfo is not None:
        raise TimeParseError(
            f"Publish time must not carry a UTC offset: {time!r} (interpreted in {source_zone})"
        )

    local = naive.replace(tzinfo=zone)

    # Round-trip through UTC to push non-existent times forward
    return local.astimezone(timezone.utc).astimezone(zone)


def to_utc_time_of_day(date: str, time: str, source_zone: str = DEFAULT_TIMEZONE) -> str:
    """Convert a local publish date and time to a UTC time of day.

    Example:
        >>> to_utc_time_of_day("2023-05-15", "10:30", "America/Halifax")
        '13:30:00'

    Returns:
        UTC time of day as ``HH:MM:SS``

    Raises:
        TimeParseError: If the date/time is invalid
    """
    local = parse_local_datetime(date, time, source_zone)
    return local.astimezone(timezone.utc).strftime("%H:%M:%S")
