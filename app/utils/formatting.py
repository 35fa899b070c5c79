"""
Display formatting for fares, durations and distances.
"""

from typing import Tuple

CURRENCY_SYMBOL = "₱"


def format_currency(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{amount:.2f}"


def format_time(minutes: float) -> str:
    """Format minutes as ``45 min``, ``2 hr`` or ``1 hr 5 min``."""
    minutes = int(round(minutes))
    if minutes < 60:
        return f"{minutes} min"

    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"


def format_distance(km: float) -> str:
    if km < 1:
        return f"{km * 1000:.0f} m"
    return f"{km:.1f} km"


def get_time_range_minutes(
    minutes: float,
    variability_pct: float = 0.15,
    min_delta_min: int = 2,
    max_delta_min: int = 30,
    round_to_min: int = 1,
) -> Tuple[int, int]:
    """
    Spread an estimate into a (low, high) range to account for traffic.

    The spread is ``variability_pct`` of the estimate, clamped to
    [min_delta_min, max_delta_min] and rounded to ``round_to_min``.
    """
    base = max(0, int(round(minutes)))
    if base <= 1:
        return base, base

    step = round_to_min if round_to_min > 0 else 1
    raw_delta = round(base * variability_pct)
    delta = round(min(max_delta_min, max(min_delta_min, raw_delta)) / step) * step

    low = max(0, base - delta)
    high = max(low, base + delta)
    return low, high


def format_time_range(minutes: float) -> str:
    low, high = get_time_range_minutes(minutes)
    if low == high:
        return format_time(low)
    if high < 60:
        return f"{low}-{high} min"
    return f"{format_time(low)} - {format_time(high)}"
