from __future__ import annotations
from datetime import timedelta, timezone
from typing import Any, Optional

from app.services.payout_clock import format_countdown
from app.services.ranking import mask_name

# ---- Filters ----
def _as_float(x: Any) -> Optional[float]:
    if x is None:
        return None
    try:
        return float(x)
    except (TypeError, ValueError):
        return None

def fmt_wager(value) -> str:
    """
    Currency with thousands separators and exactly two decimals.
    1234.5 -> "$1,234.50"; None or junk -> "$0.00".
    """
    v = _as_float(value) or 0.0
    return f"${v:,.2f}"

def fmt_prize(value) -> str:
    """Whole-dollar prize: 100 -> "$100"."""
    v = _as_float(value) or 0.0
    if v.is_integer():
        return f"${int(v):,}"
    return f"${v:,.2f}"

def fmt_countdown(value) -> str:
    if isinstance(value, timedelta):
        return format_countdown(value)
    return format_countdown(timedelta(seconds=_as_float(value) or 0))

def period_label(period: Optional[str]) -> str:
    """'this_week' -> 'this week' (used in the empty-board message)."""
    if not period:
        return ""
    return period.replace("_", " ")

def to_utc_ts(dt):
    """
    Convert a datetime (naive or tz-aware) to a UTC epoch timestamp (float).
    Returns None if dt is falsy.
    """
    if not dt:
        return None
    if getattr(dt, "tzinfo", None) is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.timestamp()

# ---- Registration hook ----
def register_template_utils(app):
    app.add_template_filter(mask_name,     "mask_name")
    app.add_template_filter(fmt_wager,     "fmt_wager")
    app.add_template_filter(fmt_prize,     "fmt_prize")
    app.add_template_filter(fmt_countdown, "fmt_countdown")
    app.add_template_filter(period_label,  "period_label")
    app.add_template_filter(to_utc_ts,     "to_utc_ts")
