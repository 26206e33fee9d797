"""Custom exceptions for map generation."""


class SeedMapError(Exception):
    """Base exception for map generation errors."""

    pass


class ConfigurationError(SeedMapError):
    """Raised when generation parameters are invalid."""

    pass
