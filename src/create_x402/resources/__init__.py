"""Packaged resources for create-x402."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Dict, Tuple

import yaml

from create_x402.domain.template import TemplateCatalog

__all__ = ["load_catalog_payload", "load_default_catalog"]

CATALOG_FILENAME = "catalog.yaml"


@lru_cache(maxsize=1)
def load_catalog_payload() -> Tuple[Dict[str, object], ...]:
    """Return the template entries shipped with the package, in menu order."""

    raw = (resources.files(__name__) / CATALOG_FILENAME).read_text("utf-8")
    payload = yaml.safe_load(raw) or {}
    entries = payload.get("templates", [])
    if not isinstance(entries, list):
        raise ValueError(f"{CATALOG_FILENAME}: 'templates' must be a list")
    return tuple(dict(entry) for entry in entries)


def load_default_catalog() -> TemplateCatalog:
    return TemplateCatalog.from_payload(load_catalog_payload())
