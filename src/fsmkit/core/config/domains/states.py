"""Domain-specific configuration for state machine engines."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class StatesConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "states"

    @cached_property
    def _id_section(self) -> dict:
        return self.section.get("id") or {}

    @cached_property
    def id_prefix(self) -> str:
        return str(self._id_section.get("prefix", "states"))

    @cached_property
    def id_strategy(self) -> str:
        return str(self._id_section.get("strategy", "counter"))


__all__ = ["StatesConfig"]
