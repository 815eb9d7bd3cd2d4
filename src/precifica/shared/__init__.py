"""Shared utilities for Precifica."""

from precifica.shared.exceptions import (
    CalculationError,
    PrecificaError,
    UnknownMarketplaceError,
    UnknownRegimeError,
    ValidationError,
)
from precifica.shared.formatters import (
    format_currency,
    format_optional_currency,
    format_percentage,
    format_variation,
    round_money,
)

__all__ = [
    # Exceptions
    "CalculationError",
    "PrecificaError",
    "UnknownMarketplaceError",
    "UnknownRegimeError",
    "ValidationError",
    # Formatters
    "format_currency",
    "format_optional_currency",
    "format_percentage",
    "format_variation",
    "round_money",
]
