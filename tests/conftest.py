from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = ROOT / "tests"
SANDBOX_HOME = ROOT / ".test_place" / "home"
os.environ.setdefault("CREATE_X402_HOME", str(SANDBOX_HOME))
for entry in (SRC, TESTS):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

from create_x402.settings import RuntimeSettings  # noqa: E402


@pytest.fixture()
def runtime_settings(tmp_path: Path) -> RuntimeSettings:
    home = tmp_path / "runtime" / "home"
    log_dir = home / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return RuntimeSettings(home_dir=home, log_dir=log_dir, cli_version="0.0.0-test")


@pytest.fixture(autouse=True)
def _telemetry_on(monkeypatch: pytest.MonkeyPatch) -> None:
    # event assertions need the opt-in log; tests of the default delete it
    monkeypatch.setenv("CREATE_X402_TELEMETRY", "1")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GH_TOKEN", raising=False)
