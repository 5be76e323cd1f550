from .loader import RegistryConfig, load_config

__all__ = [
    "RegistryConfig",
    "load_config",
]
