"""Catalog entry models for knowledge sources and virtual objects."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CatalogEntry(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SourceEntry(_CatalogEntry):
    """A knowledge source (URL, file, API) recorded in the catalog."""

    id: str
    uri: str = ""
    kind: str = "unknown"
    description: str = ""
    tags: tuple[str, ...] = ()
    created_at: str


class VirtualObjectEntry(_CatalogEntry):
    """A discovered data shape recorded in the catalog."""

    id: str
    name: str = "unnamed"
    signature: str = ""
    category: str = "unknown"
    source_id: str | None = None
    field_types: dict[str, Any] = Field(default_factory=dict, alias="fields")
    relationships: tuple[Any, ...] = ()
    tags: tuple[str, ...] = ()
    created_at: str
