"""Human-readable number, duration and date labels."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from core.activity import day_of

_ONE_DECIMAL = Decimal("0.1")


def _one_decimal(value: Decimal) -> str:
    # ROUND_HALF_UP on Decimal rounds ties away from zero.
    return str(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def format_number(n: int) -> str:
    """Abbreviate large counts: 999 -> '999', 1500 -> '1.5K', 2_500_000 -> '2.5M'."""

    if n < 0:
        raise ValueError(f"format_number expects a non-negative integer, got {n}")
    if n >= 1_000_000:
        return f"{_one_decimal(Decimal(n) / 1_000_000)}M"
    if n >= 1_000:
        return f"{_one_decimal(Decimal(n) / 1_000)}K"
    return str(n)


def format_duration(start: Optional[datetime], end: datetime) -> Optional[str]:
    """Return a compact span such as '<1m', '42m', '2h 5m' or '3d 4h'."""

    if start is None:
        return None
    seconds = int((end.astimezone() - start.astimezone()).total_seconds())
    if seconds < 60:
        return "<1m"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        hours, minutes = seconds // 3600, (seconds % 3600) // 60
        return f"{hours}h {minutes}m" if minutes else f"{hours}h"
    days, hours = seconds // 86400, (seconds % 86400) // 3600
    return f"{days}d {hours}h" if hours else f"{days}d"


def date_group(instant: datetime, now: datetime) -> str:
    """Return 'Today', 'Yesterday' or a short 'Jan 12' label for list grouping."""

    day = day_of(instant)
    today = day_of(now)
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day.strftime('%b')} {day.day}"
