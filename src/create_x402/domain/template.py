"""Domain model for scaffold templates and their remote sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Sequence

GITHUB_PREFIX = "github:"


class TemplateNotFoundError(LookupError):
    pass


class SourceLocatorError(ValueError):
    pass


@dataclass(frozen=True)
class TemplateDescriptor:
    identifier: str
    title: str
    description: str = ""
    repo: str | None = None

    def default_project_name(self) -> str:
        return self.identifier.rstrip("/").split("/")[-1]


@dataclass(frozen=True)
class SourceLocator:
    """Repository-style reference ``owner/name[/sub/path][#ref]``."""

    owner: str
    repo: str
    subpath: str = ""
    ref: str | None = None

    @classmethod
    def parse(cls, value: str) -> "SourceLocator":
        text = value.strip()
        if text.startswith(GITHUB_PREFIX):
            text = text[len(GITHUB_PREFIX):]
        ref: str | None = None
        if "#" in text:
            text, _, ref = text.partition("#")
            ref = ref.strip() or None
        parts = [part for part in text.split("/") if part]
        if len(parts) < 2:
            raise SourceLocatorError(f"locator must include owner/name: {value!r}")
        if any(part in {".", ".."} for part in parts):
            raise SourceLocatorError(f"locator contains relative segments: {value!r}")
        return cls(owner=parts[0], repo=parts[1], subpath="/".join(parts[2:]), ref=ref)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        path = self.slug
        if self.subpath:
            path = f"{path}/{self.subpath}"
        if self.ref:
            path = f"{path}#{self.ref}"
        return f"{GITHUB_PREFIX}{path}"


@dataclass(frozen=True)
class Selection:
    template: str
    project_name: str


class TemplateCatalog:
    """Immutable, ordered collection of template descriptors."""

    __slots__ = ("_templates",)

    def __init__(self, templates: Iterable[TemplateDescriptor]) -> None:
        self._templates: tuple[TemplateDescriptor, ...] = tuple(templates)

    @classmethod
    def from_payload(cls, entries: Sequence[Mapping[str, Any]]) -> "TemplateCatalog":
        templates: list[TemplateDescriptor] = []
        for entry in entries:
            identifier = str(entry.get("id", "")).strip()
            if not identifier:
                raise ValueError("catalog entry missing 'id'")
            repo = entry.get("repo")
            templates.append(
                TemplateDescriptor(
                    identifier=identifier,
                    title=str(entry.get("title", "")).strip() or identifier,
                    description=str(entry.get("description", "")).strip(),
                    repo=str(repo).strip() if repo else None,
                )
            )
        return cls(templates)

    def __iter__(self) -> Iterator[TemplateDescriptor]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, identifier: object) -> bool:
        return any(template.identifier == identifier for template in self._templates)

    def identifiers(self) -> list[str]:
        return [template.identifier for template in self._templates]

    def get(self, identifier: str) -> TemplateDescriptor:
        for template in self._templates:
            if template.identifier == identifier:
                return template
        raise TemplateNotFoundError(f"unknown template '{identifier}'")


def resolve_locator(template: TemplateDescriptor, examples_base: str) -> SourceLocator:
    """Explicit repositories win; everything else lives under the shared examples tree."""

    if template.repo:
        return SourceLocator.parse(template.repo)
    return SourceLocator.parse(f"{examples_base.rstrip('/')}/{template.identifier}")
