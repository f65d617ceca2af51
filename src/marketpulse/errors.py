"""Custom exceptions for the loading and configuration edges of the app."""


class MarketPulseError(Exception):
    """Base exception for all app-specific errors."""


class ConfigError(MarketPulseError):
    """Raised when environment configuration is invalid or missing."""


class PayloadError(MarketPulseError):
    """Raised when an API payload snapshot cannot be read."""
