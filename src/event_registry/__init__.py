"""
Event registry package root.

Named event channels with ordered listeners, dispatched synchronously on
the caller's thread. Create a registry and pass it to whatever needs it;
there is no process-global instance.
"""

from .config import RegistryConfig, load_config
from .exceptions import ConfigError, EventRegistryError, InvalidChannelError, InvalidListenerError
from .registry import EventRegistry, listener_count

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "EventRegistry",
    "EventRegistryError",
    "InvalidChannelError",
    "InvalidListenerError",
    "RegistryConfig",
    "__version__",
    "listener_count",
    "load_config",
]
