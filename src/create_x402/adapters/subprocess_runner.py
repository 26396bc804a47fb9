"""Process runner that executes commands via :mod:`subprocess`."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Dict, Mapping, Sequence

from create_x402.ports.process_runner import ProcessResult, ProcessRunner, ProcessSpawnError


class SubprocessRunner(ProcessRunner):
    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> ProcessResult:
        merged_env: Dict[str, str] = os.environ.copy()
        if env:
            merged_env.update(env)
        argv = [command, *args]
        try:
            process = subprocess.run(
                argv,
                cwd=str(cwd),
                env=merged_env,
                stdin=subprocess.DEVNULL if capture else None,
                capture_output=capture,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ProcessSpawnError(f"{command}: {exc.strerror or exc}") from exc
        return ProcessResult(
            command=argv,
            returncode=process.returncode,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
        )
