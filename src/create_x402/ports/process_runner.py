"""Port for launching external executables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence


@dataclass(frozen=True)
class ProcessResult:
    command: Sequence[str]
    returncode: int | None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessSpawnError(RuntimeError):
    """Raised when the executable could not be launched at all."""


class ProcessRunner(ABC):
    @abstractmethod
    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> ProcessResult:
        """Run ``command`` to completion and report its exit status.

        ``env`` entries are layered over the current environment. With
        ``capture`` the child's stdout/stderr are collected instead of inherited.
        """
