"""Domain-specific configuration for fsmkit logging and auditing.

This config controls:
- Whether fsmkit writes a stdlib log file and at which level
- Whether structured audit events are emitted, and where they are stored
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "INFO")).upper()

    @cached_property
    def audit_enabled(self) -> bool:
        audit = self.section.get("audit") or {}
        return bool(audit.get("enabled", True))

    def _resolve(self, raw: Optional[str]) -> Optional[Path]:
        if not raw:
            return None
        path = Path(str(raw)).expanduser()
        if not path.is_absolute():
            path = self.repo_root / path
        return path

    @cached_property
    def log_path(self) -> Optional[Path]:
        """Stdlib log file, resolved against the project root."""
        return self._resolve(self.section.get("file"))

    @cached_property
    def audit_path(self) -> Optional[Path]:
        """Audit JSONL file, resolved against the project root."""
        audit = self.section.get("audit") or {}
        jsonl = audit.get("jsonl") or {}
        return self._resolve(jsonl.get("path"))


__all__ = ["LoggingConfig"]
