"""Application service that runs ``npm install`` inside a scaffolded project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Sequence, Tuple

from create_x402.app.errors import InstallExitError, InstallSpawnError
from create_x402.ports.process_runner import ProcessResult, ProcessRunner, ProcessSpawnError
from create_x402.ports.reporter import StatusReporter

INSTALL_ARGS: Tuple[str, ...] = ("install", "--loglevel", "error", "--no-progress")
START_TEXT = "Installing dependencies"
SUCCESS_TEXT = "Dependencies installed"
FAILURE_TEXT = "npm install failed"


def install_environment(base_env: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Environment overrides that silence npm funding/audit chatter and Node warnings."""

    source = os.environ if base_env is None else base_env
    node_options = source.get("NODE_OPTIONS", "")
    return {
        "npm_config_fund": "false",
        "npm_config_audit": "false",
        "NODE_OPTIONS": f"{node_options} --no-warnings",
    }


@dataclass
class InstallerService:
    runner: ProcessRunner
    reporter: StatusReporter
    command: str = "npm"
    args: Sequence[str] = INSTALL_ARGS
    silent: bool = True
    progress_items: Sequence[str] = field(default_factory=tuple)
    progress_interval: float = 0.35

    def install(self, project_dir: Path) -> ProcessResult:
        status = self.reporter.start(
            START_TEXT,
            progress_items=self.progress_items,
            interval=self.progress_interval,
        )
        try:
            result = self.runner.run(
                self.command,
                self.args,
                cwd=project_dir,
                env=install_environment(),
                capture=self.silent,
            )
        except ProcessSpawnError as exc:
            status.fail(FAILURE_TEXT)
            raise InstallSpawnError(str(exc)) from exc

        if not result.ok:
            status.fail(FAILURE_TEXT)
            raise InstallExitError(result)
        status.succeed(SUCCESS_TEXT)
        return result
