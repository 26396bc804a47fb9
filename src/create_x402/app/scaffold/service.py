"""Application service orchestrating fetch, manifest fix-up and install."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from create_x402.app.errors import DownloadError, ManifestParseError, ScaffoldError, TargetExistsError
from create_x402.app.installer.service import InstallerService
from create_x402.app.manifest.service import ManifestFixResult, fix_workspace_dependencies
from create_x402.domain.template import (
    Selection,
    SourceLocator,
    TemplateCatalog,
    TemplateDescriptor,
    resolve_locator,
)
from create_x402.ports.reporter import StatusReporter
from create_x402.ports.template_source import TemplateFetchError, TemplateSource
from create_x402.settings import RuntimeSettings
from create_x402.utils.telemetry import record_structured_event


@dataclass(frozen=True)
class ScaffoldResult:
    selection: Selection
    template: TemplateDescriptor
    locator: SourceLocator
    target: Path
    manifest: ManifestFixResult
    installed: bool


@dataclass
class ScaffoldService:
    """Turn a :class:`Selection` into an installed project directory."""

    catalog: TemplateCatalog
    source: TemplateSource
    installer: InstallerService
    reporter: StatusReporter
    settings: RuntimeSettings

    def ensure_target_available(self, selection: Selection, cwd: Path) -> Path:
        target = (cwd / selection.project_name).resolve()
        if target.exists():
            raise TargetExistsError(selection.project_name, target)
        return target

    def create(self, selection: Selection, *, cwd: Path, install: bool = True) -> ScaffoldResult:
        template = self.catalog.get(selection.template)
        locator = resolve_locator(template, self.settings.examples_base)
        target = self.ensure_target_available(selection, cwd)

        self._fetch(template, locator, target)
        manifest = self._fix_manifest(target)
        if install:
            self._install(target)

        return ScaffoldResult(
            selection=selection,
            template=template,
            locator=locator,
            target=target,
            manifest=manifest,
            installed=install,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _fetch(self, template: TemplateDescriptor, locator: SourceLocator, target: Path) -> None:
        status = self.reporter.start(f"Downloading {template.identifier}")
        started = time.perf_counter()
        try:
            summary = self.source.fetch(locator, target)
        except TemplateFetchError as exc:
            status.fail("Failed to download template")
            self._record("scaffold.fetch", started, {"locator": str(locator), "error": str(exc)}, failed=True)
            raise DownloadError(str(exc)) from exc
        if summary.skipped:
            status.succeed(f"Template downloaded ({summary.skipped} links or special files skipped)")
        else:
            status.succeed("Template downloaded")
        self._record("scaffold.fetch", started, {"locator": str(locator), "skipped": summary.skipped})

    def _fix_manifest(self, target: Path) -> ManifestFixResult:
        status = self.reporter.start("Preparing package.json")
        started = time.perf_counter()
        try:
            result = fix_workspace_dependencies(target)
        except ManifestParseError:
            status.fail("Could not parse package.json")
            self._record("scaffold.manifest", started, {}, failed=True)
            raise
        if result.changed:
            status.succeed("Fixed workspace dependencies")
        else:
            status.stop()
        self._record("scaffold.manifest", started, {"rewritten": result.packages})
        return result

    def _install(self, target: Path) -> None:
        started = time.perf_counter()
        try:
            self.installer.install(target)
        except ScaffoldError as exc:
            self._record("scaffold.install", started, {"exit_code": exc.exit_code}, failed=True)
            raise
        self._record("scaffold.install", started, {"command": self.installer.command})

    def _record(self, event: str, started: float, payload: dict, *, failed: bool = False) -> None:
        record_structured_event(
            self.settings,
            event,
            payload=payload,
            level="error" if failed else "info",
            status="error" if failed else "ok",
            component="scaffold",
            duration_ms=(time.perf_counter() - started) * 1000.0,
        )
