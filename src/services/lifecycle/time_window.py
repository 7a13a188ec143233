import datetime
import re
from typing import Tuple
from dateutil import tz

TARGET_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)

def load_timezone(name: str, log=None) -> datetime.tzinfo:
    """Resolve an IANA timezone name, falling back to UTC when it is unknown."""
    location = tz.gettz(name) if name else None
    if location is None:
        if log is not None:
            log(f"Failed to load timezone {name!r}, using UTC", "WARNING")
        return tz.UTC
    return location

def parse_target_time(target_time: str) -> Tuple[int, int]:
    """Parse an "HH:MM" time of day into (hour, minute).

    Raises ValueError unless the value has exactly two integral components
    within a valid clock range.
    """
    match = TARGET_TIME_PATTERN.fullmatch(target_time or "")
    if match is None:
        raise ValueError(f"invalid auto-delete time format: {target_time!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"auto-delete time out of range: {target_time!r}")
    return hour, minute

def todays_target(now: datetime.datetime, location: datetime.tzinfo, hour: int, minute: int) -> datetime.datetime:
    local_now = now.astimezone(location)
    return datetime.datetime(
        local_now.year, local_now.month, local_now.day,
        hour, minute, 0,
        tzinfo=location
    )

def is_within_auto_delete_window(
        now: datetime.datetime,
        location: datetime.tzinfo,
        target_time: str,
        tolerance: datetime.timedelta
    ) -> bool:
    """Return True if now falls in [target, target + tolerance) for today.

    The target is today's target_time in the given location. An unparseable
    target_time never matches; callers that need to report it should call
    parse_target_time themselves.
    """
    try:
        hour, minute = parse_target_time(target_time)
    except ValueError:
        return False

    target = todays_target(now, location, hour, minute)
    # Compare in UTC so a DST shift between the two instants is accounted for
    diff = now.astimezone(tz.UTC) - target.astimezone(tz.UTC)
    return datetime.timedelta(0) <= diff < tolerance
