"""Runtime settings for the create-x402 scaffolder."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from create_x402 import __version__

DEFAULT_EXAMPLES_BASE = "coinbase/x402/examples/typescript"
DEFAULT_REF = "main"
DEFAULT_ARCHIVE_HOST = "https://codeload.github.com"


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    log_dir: Path
    examples_base: str = DEFAULT_EXAMPLES_BASE
    default_ref: str = DEFAULT_REF
    archive_host: str = DEFAULT_ARCHIVE_HOST
    request_timeout: float = 30.0
    npm_command: str = "npm"
    cli_version: str = __version__

    @property
    def telemetry_file(self) -> Path:
        return self.log_dir / "telemetry.jsonl"


def _default_home_dir() -> Path:
    override = os.environ.get("CREATE_X402_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".create-x402"


def _default_npm_command() -> str:
    override = os.environ.get("CREATE_X402_NPM", "").strip()
    if override:
        return override
    return "npm.cmd" if sys.platform == "win32" else "npm"


def load_settings() -> RuntimeSettings:
    base = _default_home_dir()
    return RuntimeSettings(
        home_dir=base,
        log_dir=base / "logs",
        default_ref=os.environ.get("CREATE_X402_REF", "").strip() or DEFAULT_REF,
        npm_command=_default_npm_command(),
    )


SETTINGS = load_settings()
