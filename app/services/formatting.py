"""Display formatting for board rows."""

from __future__ import annotations

from typing import Optional

BILLION = 1e9


def format_price(value: float) -> str:
    """
    USD price with thousands grouping and up to 3 fraction digits,
    trailing zeros dropped: 67234.5 -> "$67,234.5", 0.07312 -> "$0.073".
    """
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def format_market_cap(value: float) -> str:
    return f"${value / BILLION:.2f}B"


def change_direction(change: Optional[float]) -> Optional[str]:
    if change is None:
        return None
    return "up" if change >= 0 else "down"


def format_change(change: Optional[float]) -> str:
    if change is None:
        return "n/a"
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f}%"
