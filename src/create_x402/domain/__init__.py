"""Domain model for create-x402."""

from .template import (
    Selection,
    SourceLocator,
    SourceLocatorError,
    TemplateCatalog,
    TemplateDescriptor,
    TemplateNotFoundError,
    resolve_locator,
)

__all__ = [
    "Selection",
    "SourceLocator",
    "SourceLocatorError",
    "TemplateCatalog",
    "TemplateDescriptor",
    "TemplateNotFoundError",
    "resolve_locator",
]
