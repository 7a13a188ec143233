import datetime
import re
from typing import Optional, Tuple
from dateutil.parser import isoparse

RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt](?P<hour>\d{2}):\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII
)

def parse_annotation_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    """Parse an RFC 3339 annotation value.

    Returns None when the annotation is absent or empty, meaning the pod has
    no such policy. Raises ValueError when the value is present but is not a
    full RFC 3339 date-time: basic or week-date ISO forms, truncated times,
    missing offsets and the 24:00 hour are all rejected.
    """
    if not value:
        return None

    value = value.strip()
    match = RFC3339_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"timestamp {value!r} is not RFC 3339")
    if int(match.group("hour")) > 23:
        raise ValueError(f"timestamp {value!r} has an hour out of range")
    return isoparse(value.upper())

def expired_reason(expires_at: datetime.datetime, now: datetime.datetime) -> str:
    minutes = int((now - expires_at).total_seconds() + 30) // 60
    return f"expired {minutes}m ago"

def is_expired(annotation_value: Optional[str], now: datetime.datetime) -> Tuple[bool, str]:
    """Decide whether a pod's expires-at annotation has passed.

    Returns (expired, reason). A missing annotation yields (False, "").
    A malformed annotation fails open: (False, <description of the problem>),
    so the caller can log it without deleting the pod.
    """
    try:
        expires_at = parse_annotation_timestamp(annotation_value)
    except ValueError as e:
        return False, f"invalid expires-at annotation {annotation_value!r}: {e}"

    if expires_at is None:
        return False, ""

    if now > expires_at:
        return True, expired_reason(expires_at, now)
    return False, ""

def is_protected(annotation_value: Optional[str], now: datetime.datetime) -> bool:
    """A pod is protected until and including its protected-until instant.

    Raises ValueError for a malformed annotation.
    """
    protected_until = parse_annotation_timestamp(annotation_value)
    if protected_until is None:
        return False
    return now <= protected_until
