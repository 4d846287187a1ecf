"""
Display formatting for templated insight text.

Currency is compacted to $K/$M/$B/$T with one decimal place from $1,000 up;
percentages carry one decimal place.
"""

from typing import Optional


MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

_CURRENCY_UNITS = [
    (1e12, 'T'),
    (1e9, 'B'),
    (1e6, 'M'),
    (1e3, 'K'),
]


def format_currency(value: float) -> str:
    """
    Compact currency: 1234567 -> '$1.2M', 999960 -> '$1.0M', 999 -> '$999'.

    Args:
        value: Dollar amount

    Returns:
        Formatted string
    """
    for index, (threshold, suffix) in enumerate(_CURRENCY_UNITS):
        if value >= threshold:
            # a quotient that rounds to 1000 moves up one unit
            if index > 0 and round(value / threshold, 1) >= 1000:
                threshold, suffix = _CURRENCY_UNITS[index - 1]
            return f"${value / threshold:.1f}{suffix}"
    if round(value) >= 1000:
        return "$1.0K"
    return f"${value:.0f}"


def format_percent(value: float) -> str:
    """One-decimal percentage without the % sign: 30 -> '30.0'."""
    return f"{value:.1f}"


def format_growth(value: Optional[float]) -> str:
    """Growth percent: whole values without decimals (12.0 -> '12'), others at one decimal (12.3456 -> '12.3')."""
    if value is None:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_dollars(value: float) -> str:
    """Grouped dollars with cents trimmed when whole: 12345.5 -> '$12,345.5'."""
    if float(value).is_integer():
        return f"${int(value):,}"
    return f"${value:,.2f}".rstrip('0').rstrip('.')


def month_name(month: str) -> str:
    """'03' -> 'Mar'; anything unparseable or out of range is returned as given."""
    try:
        index = int(month)
    except (TypeError, ValueError):
        return month
    if 1 <= index <= 12:
        return MONTH_NAMES[index - 1]
    return month
