"""Fatal scaffold failures and the exit codes they map to."""

from __future__ import annotations

from pathlib import Path

from create_x402.ports.process_runner import ProcessResult


class ScaffoldError(RuntimeError):
    """Base class for errors that abort a scaffold run."""

    exit_code = 1


class TargetExistsError(ScaffoldError):
    def __init__(self, project_name: str, target: Path) -> None:
        super().__init__(f"Folder {project_name} already exists. Pick another name.")
        self.project_name = project_name
        self.target = target


class DownloadError(ScaffoldError):
    """Raised when the template tree could not be retrieved."""


class ManifestParseError(ScaffoldError):
    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"{path} is not valid JSON: {detail}")
        self.path = path


class InstallSpawnError(ScaffoldError):
    """Raised when the package manager could not be launched."""


class InstallExitError(ScaffoldError):
    def __init__(self, result: ProcessResult) -> None:
        code = result.returncode
        super().__init__(f"{' '.join(result.command)} exited with status {code}")
        self.result = result
        # negative codes mean the child died from a signal
        self.exit_code = code if code is not None and code > 0 else 1

    @property
    def stdout(self) -> str:
        return self.result.stdout

    @property
    def stderr(self) -> str:
        return self.result.stderr
