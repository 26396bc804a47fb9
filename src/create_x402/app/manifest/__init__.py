"""Manifest rewriting for templates copied out of a workspace."""

from .service import (
    DEPENDENCY_GROUPS,
    LATEST_MARKER,
    MANIFEST_FILENAME,
    WORKSPACE_MARKER,
    ManifestFixResult,
    fix_workspace_dependencies,
)

__all__ = [
    "DEPENDENCY_GROUPS",
    "LATEST_MARKER",
    "MANIFEST_FILENAME",
    "WORKSPACE_MARKER",
    "ManifestFixResult",
    "fix_workspace_dependencies",
]
