"""Index file interfaces for asset materialization."""

from .index_manifest import (
    INDEX_JSON_SCHEMA,
    IndexManifest,
    IndexObject,
    parse_index,
    save_index,
    validate_index_dict,
)
from .index_store import IndexDescriptor, discover_indexes, load_index

__all__ = [
    "INDEX_JSON_SCHEMA",
    "IndexDescriptor",
    "IndexManifest",
    "IndexObject",
    "discover_indexes",
    "load_index",
    "parse_index",
    "save_index",
    "validate_index_dict",
]
