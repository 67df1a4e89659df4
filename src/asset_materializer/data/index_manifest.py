"""Asset index schema and serialization helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

INDEX_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "AssetIndex",
    "type": "object",
    "required": ["objects"],
    "properties": {
        "objects": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["hash", "size"],
                "properties": {
                    "hash": {"type": "string"},
                    "size": {"type": "integer", "minimum": 0},
                },
            },
        },
    },
}


@dataclass(frozen=True)
class IndexObject:
    """One blob reference. ``size`` is the declared size and is never checked."""

    hash: str
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {"hash": self.hash, "size": self.size}


@dataclass(frozen=True)
class IndexManifest:
    objects: Mapping[str, IndexObject] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", MappingProxyType(dict(self.objects)))

    def __len__(self) -> int:
        return len(self.objects)

    def to_dict(self) -> dict[str, Any]:
        return {"objects": {path: entry.to_dict() for path, entry in self.objects.items()}}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)


def _matches_field_schema(value: Any, field_schema: Mapping[str, Any]) -> bool:
    if field_schema["type"] == "string":
        return isinstance(value, str)
    if field_schema["type"] == "integer":
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value >= field_schema.get("minimum", value)
    raise ValueError(f"Unsupported schema type {field_schema['type']!r}.")


def validate_index_dict(payload: Any) -> None:
    if not isinstance(payload, Mapping):
        raise ValueError("Index payload must be a mapping.")

    missing = set(INDEX_JSON_SCHEMA["required"]) - set(payload.keys())
    if missing:
        raise ValueError(f"Index missing required keys: {sorted(missing)}")

    objects = payload["objects"]
    if not isinstance(objects, Mapping):
        raise ValueError("Index field 'objects' must be a mapping.")

    entry_schema = INDEX_JSON_SCHEMA["properties"]["objects"]["additionalProperties"]
    entry_required = set(entry_schema["required"])
    for logical_path, entry in objects.items():
        if not isinstance(entry, Mapping):
            raise ValueError(f"Index object {logical_path!r} must be a mapping.")
        missing = entry_required - set(entry.keys())
        if missing:
            raise ValueError(f"Index object {logical_path!r} missing required keys: {sorted(missing)}")
        for field_name, field_schema in entry_schema["properties"].items():
            if not _matches_field_schema(entry[field_name], field_schema):
                raise ValueError(f"Index object {logical_path!r} field '{field_name}' must match {field_schema}.")


def parse_index(text: str) -> IndexManifest:
    """Parse index JSON text. Raises ``ValueError`` on malformed input."""

    payload = json.loads(text)
    validate_index_dict(payload)
    return IndexManifest(
        objects={
            logical_path: IndexObject(hash=entry["hash"], size=entry["size"])
            for logical_path, entry in payload["objects"].items()
        }
    )


def save_index(manifest: IndexManifest, output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(manifest.to_json() + "\n", encoding="utf-8")
    return path
