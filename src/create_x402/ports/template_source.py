"""Port definitions for remote template storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from create_x402.domain.template import SourceLocator


class TemplateFetchError(RuntimeError):
    """Raised when a template tree cannot be retrieved."""


@dataclass(frozen=True)
class FetchSummary:
    destination: Path
    extracted: int = 0
    skipped: int = 0


class TemplateSource(ABC):
    @abstractmethod
    def fetch(self, locator: SourceLocator, destination: Path) -> FetchSummary:
        """Materialise the tree behind ``locator`` into ``destination``.

        Existing files under ``destination`` are overwritten. Implementations
        raise :class:`TemplateFetchError` for every retrieval failure and leave
        partial output in place. Entries that cannot be materialised safely
        (links, special files, paths escaping ``destination``) are counted in
        :attr:`FetchSummary.skipped`.
        """
