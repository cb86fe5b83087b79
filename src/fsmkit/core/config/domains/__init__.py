"""Domain-specific configuration accessors."""
from .logging import LoggingConfig
from .states import StatesConfig

__all__ = ["LoggingConfig", "StatesConfig"]
