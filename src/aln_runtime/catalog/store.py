"""Flat-file knowledge catalog: append/list sources and virtual objects as JSON arrays."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from aln_runtime.catalog.models import SourceEntry, VirtualObjectEntry
from aln_runtime.clock import Clock, epoch_millis, iso_timestamp, utc_now

_LOGGER = logging.getLogger(__name__)

DEFAULT_CATALOG_DIR = ".javaspectre"
SOURCES_FILENAME = "sources.json"
VIRTUAL_OBJECTS_FILENAME = "virtual-objects.json"


class CatalogError(RuntimeError):
    """Base error for catalog operations."""


class CatalogDecodeError(CatalogError):
    """Raised when a catalog file is not a valid JSON array of entries."""


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(tag) for tag in value)
    return ()


class KnowledgeCatalog:
    """File-backed catalog under base_dir. Both files are created on construction."""

    def __init__(self, base_dir: Path | None = None, *, clock: Clock | None = None) -> None:
        self.base_dir = (base_dir or Path(DEFAULT_CATALOG_DIR)).resolve()
        self.sources_file = self.base_dir / SOURCES_FILENAME
        self.virtual_objects_file = self.base_dir / VIRTUAL_OBJECTS_FILENAME
        self._clock: Clock = clock or utc_now
        self._ensure_base()

    def _ensure_base(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        for path in (self.sources_file, self.virtual_objects_file):
            if not path.exists():
                self._write_entries(path, [])
                _LOGGER.debug("Created catalog file %s", path)

    def _read_entries[M: BaseModel](self, path: Path, model: type[M]) -> list[M]:
        """Decode a catalog file into entries.

        Raises:
            CatalogDecodeError: If the file is not a JSON array of valid entries.
        """
        raw = path.read_text(encoding="utf-8")
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CatalogDecodeError(f"Invalid catalog JSON in {path.name}: {exc}") from exc
        if not isinstance(decoded, list):
            raise CatalogDecodeError(f"Invalid catalog payload in {path.name}: expected array")
        try:
            return [model.model_validate(item) for item in decoded]
        except ValidationError as exc:
            raise CatalogDecodeError(f"Invalid catalog entry in {path.name}: {exc}") from exc

    def _write_entries(self, path: Path, entries: Sequence[BaseModel]) -> None:
        """Replace path with the serialized entries via a synced sibling temp file.

        Raises:
            CatalogError: If the file cannot be written.
        """
        data = json.dumps(
            [entry.model_dump(mode="json", by_alias=True) for entry in entries],
            indent=2,
            ensure_ascii=False,
        ).encode("utf-8")
        fd, temp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except OSError as exc:
            Path(temp_name).unlink(missing_ok=True)
            raise CatalogError(f"Cannot write {path.name}: {exc}") from exc

    def _append(self, path: Path, model: type[BaseModel], entry: BaseModel) -> None:
        entries = self._read_entries(path, model)
        entries.append(entry)
        self._write_entries(path, entries)

    def add_source(self, source: Mapping[str, Any]) -> SourceEntry:
        """Append a source, filling defaults for missing fields.

        Args:
            source: Partial source fields (id, uri, kind, description, tags).

        Returns:
            The stored entry.
        """
        now = self._clock()
        entry = SourceEntry(
            id=_text(source.get("id"), f"src-{epoch_millis(now):x}"),
            uri=_text(source.get("uri"), ""),
            kind=_text(source.get("kind"), "unknown"),
            description=_text(source.get("description"), ""),
            tags=_tags(source.get("tags")),
            created_at=iso_timestamp(now),
        )
        self._append(self.sources_file, SourceEntry, entry)
        _LOGGER.info("Catalogued source %s", entry.id)
        return entry

    def list_sources(self, *, kind: str | None = None, tag: str | None = None) -> list[SourceEntry]:
        """List sources; filters are conjunctive and skipped when None."""
        return [
            entry
            for entry in self._read_entries(self.sources_file, SourceEntry)
            if (kind is None or entry.kind == kind) and (tag is None or tag in entry.tags)
        ]

    def add_virtual_object(self, virtual_object: Mapping[str, Any]) -> VirtualObjectEntry:
        """Append a virtual object, filling defaults for missing fields.

        Args:
            virtual_object: Partial fields (id, name, signature, category,
                sourceId/source_id, fields, relationships, tags).

        Returns:
            The stored entry.
        """
        now = self._clock()
        source_id = virtual_object.get("sourceId", virtual_object.get("source_id"))
        fields = virtual_object.get("fields")
        relationships = virtual_object.get("relationships")
        entry = VirtualObjectEntry(
            id=_text(virtual_object.get("id"), f"vo-{epoch_millis(now):x}"),
            name=_text(virtual_object.get("name"), "unnamed"),
            signature=_text(virtual_object.get("signature"), ""),
            category=_text(virtual_object.get("category"), "unknown"),
            source_id=source_id if isinstance(source_id, str) and source_id else None,
            field_types=dict(fields) if isinstance(fields, Mapping) else {},
            relationships=tuple(relationships) if isinstance(relationships, (list, tuple)) else (),
            tags=_tags(virtual_object.get("tags")),
            created_at=iso_timestamp(now),
        )
        self._append(self.virtual_objects_file, VirtualObjectEntry, entry)
        _LOGGER.info("Catalogued virtual object %s", entry.id)
        return entry

    def list_virtual_objects(
        self, *, category: str | None = None, tag: str | None = None
    ) -> list[VirtualObjectEntry]:
        """List virtual objects; filters are conjunctive and skipped when None."""
        return [
            entry
            for entry in self._read_entries(self.virtual_objects_file, VirtualObjectEntry)
            if (category is None or entry.category == category)
            and (tag is None or tag in entry.tags)
        ]
