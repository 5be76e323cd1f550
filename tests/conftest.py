import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _clean_registry_env(monkeypatch: pytest.MonkeyPatch):
    """Keep EVREG_* variables from the developer's shell out of the tests."""
    for key in ("EVREG_CONFIG_FILE", "EVREG_MAX_LISTENERS", "EVREG_LOG_EMITS"):
        monkeypatch.delenv(key, raising=False)
