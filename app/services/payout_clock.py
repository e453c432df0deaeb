# app/services/payout_clock.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

SUNDAY = 6  # datetime.weekday()
PAYOUT_HOUR = 23
PAYOUT_MINUTE = 59
ROLLOVER_MODES = ("next_week", "same_day")


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def next_payout_utc(now: datetime | None = None, rollover: str = "next_week") -> datetime:
    """
    Next Sunday 23:59:00 UTC.
    rollover="next_week": on a Sunday, always point at the following Sunday (7 days out).
    rollover="same_day":  on a Sunday, point at today's 23:59 even if it has already passed.
    """
    if rollover not in ROLLOVER_MODES:
        raise ValueError(f"unknown rollover mode {rollover!r}")
    now = _as_utc(now or datetime.now(timezone.utc))
    days_until_sunday = (SUNDAY - now.weekday()) % 7
    if days_until_sunday == 0 and rollover == "next_week":
        days_until_sunday = 7
    day = now + timedelta(days=days_until_sunday)
    return day.replace(hour=PAYOUT_HOUR, minute=PAYOUT_MINUTE, second=0, microsecond=0)


def time_remaining(
    now: datetime | None = None,
    target: datetime | None = None,
    rollover: str = "next_week",
) -> timedelta:
    """Time left until the payout; clamped at zero once the target has passed."""
    now = _as_utc(now or datetime.now(timezone.utc))
    target = _as_utc(target) if target else next_payout_utc(now, rollover)
    remaining = target - now
    if remaining <= timedelta(0):
        return timedelta(0)
    return remaining


def format_countdown(remaining: timedelta) -> str:
    """'3d 14h 59m 10s'; the day part is dropped when zero."""
    total = max(0, int(remaining.total_seconds()))
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    prefix = f"{days}d " if days > 0 else ""
    return f"{prefix}{hours}h {minutes}m {seconds}s"


def countdown_text(now: datetime | None = None, rollover: str = "next_week") -> str:
    return format_countdown(time_remaining(now, rollover=rollover))
