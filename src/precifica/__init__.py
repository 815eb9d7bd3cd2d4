"""Precifica - tax regime resolution, sensitivity analysis and price suggestions."""

__version__ = "0.1.0"
