"""Knowledge catalog of sources and virtual objects."""

from aln_runtime.catalog.models import SourceEntry, VirtualObjectEntry
from aln_runtime.catalog.store import (
    DEFAULT_CATALOG_DIR,
    CatalogDecodeError,
    CatalogError,
    KnowledgeCatalog,
)

__all__ = [
    "DEFAULT_CATALOG_DIR",
    "CatalogDecodeError",
    "CatalogError",
    "KnowledgeCatalog",
    "SourceEntry",
    "VirtualObjectEntry",
]
