class EventRegistryError(Exception):
    """Base exception for the event registry package."""


class InvalidChannelError(EventRegistryError, ValueError):
    """Raised when a channel name is not a non-empty string."""


class InvalidListenerError(EventRegistryError, TypeError):
    """Raised when a listener is not callable."""


class ConfigError(EventRegistryError):
    """Raised when a registry config file cannot be read or parsed."""
