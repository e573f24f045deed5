"""Configuration management package for the hosted-login core"""

from .loader import ENV_PREFIX, ConfigLoader, get_config_loader, reset_config_loader

__all__ = [
    "ENV_PREFIX",
    "ConfigLoader",
    "get_config_loader",
    "reset_config_loader",
]
