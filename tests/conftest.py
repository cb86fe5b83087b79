import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'fsmkit'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from fsmkit.core.audit.stdlib_logging import reset_stdlib_logging_for_tests
from fsmkit.core.config.cache import clear_all_caches
from fsmkit.core.state.ids import reset_default_id_generator


def _reset_fsmkit_caches() -> None:
    clear_all_caches()
    reset_default_id_generator()
    reset_stdlib_logging_for_tests()


@pytest.fixture(autouse=True)
def _isolate_fsmkit(tmp_path, monkeypatch):
    """Run every test in an empty project with no FSMKIT_* overrides.

    Config resolves `.fsmkit/` against the working directory, so a developer's
    checkout must never leak into test runs.
    """
    for key in list(os.environ):
        if key.startswith("FSMKIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    _reset_fsmkit_caches()
    yield
    _reset_fsmkit_caches()


@pytest.fixture
def project_config(tmp_path):
    """Write `.fsmkit/config/<name>.yaml` files into the isolated project."""
    config_dir = tmp_path / ".fsmkit" / "config"
    config_dir.mkdir(parents=True, exist_ok=True)

    def _write(name: str, text: str) -> Path:
        path = config_dir / f"{name}.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def calls():
    """Ordered record of handler/subscriber invocations."""
    return []
