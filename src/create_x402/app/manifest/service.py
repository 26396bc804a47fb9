"""Rewrite ``workspace:`` dependency references to published versions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from create_x402.app.errors import ManifestParseError

MANIFEST_FILENAME = "package.json"
WORKSPACE_MARKER = "workspace:"
LATEST_MARKER = "latest"
DEPENDENCY_GROUPS = ("dependencies", "devDependencies", "peerDependencies")


@dataclass(frozen=True)
class ManifestFixResult:
    path: Path
    rewritten: Tuple[Tuple[str, str, str], ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return bool(self.rewritten)

    @property
    def packages(self) -> List[str]:
        return sorted({name for _, name, _ in self.rewritten})


def fix_workspace_dependencies(target_dir: Path) -> ManifestFixResult:
    """Point every ``workspace:`` dependency at ``latest``.

    A missing manifest is not an error. The file is rewritten only when at
    least one entry changed; invalid JSON raises :class:`ManifestParseError`.
    """

    manifest_path = target_dir / MANIFEST_FILENAME
    if not manifest_path.is_file():
        return ManifestFixResult(path=manifest_path)

    content = manifest_path.read_text(encoding="utf-8")
    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(manifest_path, str(exc)) from exc
    if not isinstance(manifest, dict):
        return ManifestFixResult(path=manifest_path)

    rewritten: List[Tuple[str, str, str]] = []
    for group in DEPENDENCY_GROUPS:
        entries = manifest.get(group)
        if not isinstance(entries, dict):
            continue
        for name, version in entries.items():
            if isinstance(version, str) and version.startswith(WORKSPACE_MARKER):
                entries[name] = LATEST_MARKER
                rewritten.append((group, name, version))

    if rewritten:
        manifest_path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return ManifestFixResult(path=manifest_path, rewritten=tuple(rewritten))
