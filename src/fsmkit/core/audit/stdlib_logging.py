from __future__ import annotations

import logging
from pathlib import Path

from fsmkit.core.utils.io import ensure_directory

_CONFIGURED_LOG_PATH: str | None = None
_FSMKIT_FILE_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = getattr(logging, str(name).upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure Python stdlib logging to write to `log_path`.

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _FSMKIT_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _FSMKIT_FILE_HANDLER is not None:
        return

    ensure_directory(Path(resolved).parent)

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    # Replace the fsmkit-installed file handler when switching paths.
    if _FSMKIT_FILE_HANDLER is not None:
        root.removeHandler(_FSMKIT_FILE_HANDLER)
        _FSMKIT_FILE_HANDLER.close()
        _FSMKIT_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(fh)

    _FSMKIT_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def configure_logging_from_config(repo_root: Path | None = None) -> bool:
    """Install the file handler described by the `logging` config section.

    Returns:
        True if logging was configured, False if it is disabled.
    """
    from fsmkit.core.config.domains.logging import LoggingConfig

    cfg = LoggingConfig(repo_root=repo_root)
    if not cfg.enabled or cfg.log_path is None:
        return False
    configure_stdlib_logging(log_path=cfg.log_path, level=cfg.level)
    return True


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the fsmkit file handler."""
    global _CONFIGURED_LOG_PATH, _FSMKIT_FILE_HANDLER
    if _FSMKIT_FILE_HANDLER is not None:
        root = logging.getLogger()
        root.removeHandler(_FSMKIT_FILE_HANDLER)
        _FSMKIT_FILE_HANDLER.close()
    _CONFIGURED_LOG_PATH = None
    _FSMKIT_FILE_HANDLER = None


__all__ = [
    "configure_stdlib_logging",
    "configure_logging_from_config",
    "reset_stdlib_logging_for_tests",
]
