"""
Display formatting helpers: number/currency text and colour bands.
"""

from typing import Optional


# (upper bound inclusive, band name, css colour)
DIFFICULTY_BANDS = (
    (30, "low", "#22c55e"),
    (50, "medium", "#eab308"),
    (70, "high", "#f97316"),
)
DIFFICULTY_MAX_BAND = ("very-high", "#ef4444")

POSITION_BANDS = (
    (3, "top-3", "#22c55e"),
    (10, "top-10", "#eab308"),
    (20, "top-20", "#f97316"),
)
POSITION_MAX_BAND = ("beyond-20", "#ef4444")


def format_number(value: Optional[float]) -> str:
    """Thousands-separated integer text; missing values show as 0."""
    return f"{round(value or 0):,}"


def format_currency(value: Optional[float], symbol: str = "$") -> str:
    """Whole-unit currency, e.g. $1,235."""
    amount = round(value or 0)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,}"


def format_percent(value: Optional[float], digits: int = 1) -> str:
    return f"{(value or 0):.{digits}f}%"


def format_score(value: Optional[float]) -> str:
    """Scores print without a trailing .0 when whole."""
    value = value or 0
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def difficulty_band(difficulty: Optional[float]) -> str:
    """low (<=30), medium (<=50), high (<=70), very-high."""
    difficulty = difficulty or 0
    for limit, name, _ in DIFFICULTY_BANDS:
        if difficulty <= limit:
            return name
    return DIFFICULTY_MAX_BAND[0]


def difficulty_color(difficulty: Optional[float]) -> str:
    difficulty = difficulty or 0
    for limit, _, color in DIFFICULTY_BANDS:
        if difficulty <= limit:
            return color
    return DIFFICULTY_MAX_BAND[1]


def position_band(position: Optional[int]) -> str:
    """top-3, top-10, top-20 or beyond-20."""
    position = position or 0
    for limit, name, _ in POSITION_BANDS:
        if position <= limit:
            return name
    return POSITION_MAX_BAND[0]


def position_color(position: Optional[int]) -> str:
    position = position or 0
    for limit, _, color in POSITION_BANDS:
        if position <= limit:
            return color
    return POSITION_MAX_BAND[1]
