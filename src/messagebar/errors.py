"""Exceptions raised by messagebar."""


class ConfigError(ValueError):
    """Raised for configuration values the message bar cannot use."""
