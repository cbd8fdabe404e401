from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def resolve_timezone(name: str | None) -> tzinfo | None:
    if not name:
        return None
    if name.upper() in {"UTC", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name}") from exc


def parse_moment(value: str, *, tz: tzinfo | None = None, now: datetime | None = None) -> datetime:
    cleaned = value.strip()
    lowered = cleaned.lower()
    if lowered == "now":
        return now or datetime.now(tz)
    if lowered == "today":
        base = now or datetime.now(tz)
        return base.replace(hour=0, minute=0, second=0, microsecond=0)
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError as exc:
        raise ValueError(f"Unsupported moment format: {value}") from exc
    if parsed.tzinfo is None and tz is not None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def format_moment(value: datetime, fmt: str = "iso") -> str:
    if fmt != "iso":
        return value.strftime(fmt)
    rendered = value.isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[:-6] + "Z"
    return rendered
