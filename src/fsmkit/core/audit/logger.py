from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from fsmkit.core.config.cache import register_cache_clearer
from fsmkit.core.config.domains.logging import LoggingConfig
from fsmkit.core.utils.io import append_jsonl
from fsmkit.core.utils.time import utc_timestamp

_AUDIT_ENABLED: bool | None = None


def audit_enabled() -> bool:
    """Return whether audit events are written, resolving config once.

    The decision is cached until `clear_all_caches()` runs. Config that cannot
    be loaded counts as disabled.
    """
    global _AUDIT_ENABLED
    if _AUDIT_ENABLED is None:
        try:
            cfg = LoggingConfig()
            _AUDIT_ENABLED = bool(cfg.enabled and cfg.audit_enabled and cfg.audit_path is not None)
        except Exception:
            _AUDIT_ENABLED = False
    return _AUDIT_ENABLED


def _clear_audit_enabled() -> None:
    global _AUDIT_ENABLED
    _AUDIT_ENABLED = None


register_cache_clearer("audit", _clear_audit_enabled)


def audit_event(event: str, *, repo_root: Path | None = None, **fields: Any) -> None:
    """Emit a single structured audit event as JSONL (fail-open).

    This is separate from stdlib `logging` so audit consumers get one
    machine-readable stream regardless of log levels.
    """
    try:
        cfg = LoggingConfig(repo_root=repo_root)
    except Exception:
        return

    if not cfg.enabled or not cfg.audit_enabled:
        return

    path = cfg.audit_path
    if path is None:
        return

    try:
        payload: dict[str, Any] = {
            "ts": utc_timestamp(repo_root=repo_root),
            "event": event,
            "pid": os.getpid(),
        }
        payload.update(fields)
        append_jsonl(path=path, payload=payload)
    except Exception:
        return


__all__ = ["audit_enabled", "audit_event"]
