"""Catalog data structures and loaders."""

from __future__ import annotations

from .loader import (
    CatalogLoadError,
    build_catalogs,
    get_catalogs,
    load_catalogs,
    warn_on_probability_sums,
)
from .schemas import (
    Catalogs,
    DialogueNode,
    DialogueTree,
    ResponseEntry,
    ResponseGroup,
    ResponseTree,
    Topic,
)

__all__ = [
    "CatalogLoadError",
    "Catalogs",
    "DialogueNode",
    "DialogueTree",
    "ResponseEntry",
    "ResponseGroup",
    "ResponseTree",
    "Topic",
    "build_catalogs",
    "get_catalogs",
    "load_catalogs",
    "warn_on_probability_sums",
]
