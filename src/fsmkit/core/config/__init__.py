"""Layered YAML configuration for fsmkit."""
from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, register_cache_clearer
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "clear_all_caches",
    "get_cached_config",
    "register_cache_clearer",
]
