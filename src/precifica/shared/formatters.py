"""Value formatters for display.

Engines return unrounded floats; rounding happens only here.
"""

from typing import Optional


def round_money(value: float) -> float:
    """Round a currency amount to cents."""
    return round(value, 2)


def format_currency(value: float, symbol: str = "R$") -> str:
    """
    Format a value as Brazilian currency.

    Args:
        value: Amount to format
        symbol: Currency symbol (default: R$)

    Returns:
        Formatted string like "R$ 1.234,56"
    """
    negative = value < 0
    formatted = f"{round_money(abs(value)):,.2f}"

    # Brazilian separators (. for thousands, , for decimals)
    formatted = formatted.replace(",", "X").replace(".", ",").replace("X", ".")

    result = f"{symbol} {formatted}"
    return f"-{result}" if negative else result


def format_percentage(value: float, decimals: int = 2) -> str:
    """
    Format a percent-unit value.

    Args:
        value: Value in percent units (e.g., 4.33 for 4.33%)
        decimals: Number of decimal places

    Returns:
        Formatted string like "4,33%"
    """
    formatted = f"{value:.{decimals}f}".replace(".", ",")
    return f"{formatted}%"


def format_variation(value: float, show_sign: bool = True) -> str:
    """
    Format a percent variation with sign indicator.

    Returns:
        Formatted string like "+15,5%" or "-3,2%"
    """
    sign = "+" if show_sign and value > 0 else ""
    formatted = f"{value:.1f}".replace(".", ",")
    return f"{sign}{formatted}%"


def format_optional_currency(value: Optional[float], placeholder: str = "-") -> str:
    """Format a currency amount that may be absent."""
    if value is None:
        return placeholder
    return format_currency(value)
