# app/errors.py


class TypiError(Exception):
    """Base class for startup-time errors."""


class LayoutError(TypiError, ValueError):
    pass


class ConfigError(TypiError):
    pass
