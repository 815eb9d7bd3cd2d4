"""Core domain: models, rules and calculation engines."""
