"""Command line interface for Precifica."""
