"""Custom exceptions for Precifica.

The calculation engines report out-of-range and unknown inputs in-band
(alerts, None, fallbacks); these exceptions are raised by callers that
need a hard failure, such as the CLI.
"""


class PrecificaError(Exception):
    """Base exception for all Precifica errors."""

    pass


class ValidationError(PrecificaError):
    """Input data validation error."""

    pass


class UnknownRegimeError(PrecificaError):
    """Regime or anexo id not present in the catalog."""

    pass


class UnknownMarketplaceError(PrecificaError):
    """Marketplace fee profile id not present in the catalog."""

    pass


class CalculationError(PrecificaError):
    """Calculation could not produce a result."""

    pass
