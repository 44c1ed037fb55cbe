from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_iso_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_clock_time(value, field_name: str) -> str:
    """Validate an HH:MM wall-clock value and return it zero-padded."""
    try:
        return datetime.strptime(str(value or "").strip(), "%H:%M").strftime("%H:%M")
    except ValueError:
        raise ValidationError(f"{field_name} must be a time (HH:MM)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_clock(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def isoformat_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
