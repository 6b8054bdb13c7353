"""Custom exceptions for contentnav."""


class ContentNavError(Exception):
    """Base exception for contentnav operations."""


class ContentRootError(ContentNavError):
    """Content root is missing or cannot be read."""


class ConfigLoadError(ContentNavError):
    """A JSON5 configuration file could not be parsed."""
