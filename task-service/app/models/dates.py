import re
from datetime import datetime, timedelta, timezone

RFC3339_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(Z|[+-][0-9]{2}:[0-9]{2})"
)
SHORT_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2})")


def _offset(text):
    if text == "Z":
        return timezone.utc
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError(f"offset out of range: {text}")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if text[0] == "-" else delta)


def _parse(value):
    m = RFC3339_RE.fullmatch(value)
    if m:
        year, month, day, hour, minute, second, fraction, offset = m.groups()
        # fractions finer than microseconds are truncated
        micro = int((fraction or "").ljust(6, "0")[:6])
        parsed = datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second), micro,
            tzinfo=_offset(offset),
        )
        return parsed.astimezone(timezone.utc)
    m = SHORT_RE.fullmatch(value)
    if m:
        return datetime(*(int(g) for g in m.groups()), tzinfo=timezone.utc)
    raise ValueError("matches neither RFC 3339 nor YYYY-MM-DDTHH:MM")


def parse_due_date(value):
    """Parse an RFC 3339 timestamp, falling back to ``YYYY-MM-DDTHH:MM`` in UTC."""
    if not value:
        raise ValueError("due_date is required")
    try:
        return _parse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"invalid due_date format: {value!r}: {e}") from None


def as_utc(value):
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_due_date(value):
    value = as_utc(value)
    out = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        out += "." + f"{value.microsecond:06d}".rstrip("0")
    return out + "Z"
