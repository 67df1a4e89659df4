"""Rebuild package file trees from asset indexes and a content-addressed object store."""

from .config import ExtractorConfig, default_config
from .data import IndexDescriptor, IndexManifest, IndexObject, discover_indexes, load_index
from .errors import (
    AssetExtractionError,
    AssetsFolderNotFound,
    IndexesFolderNotFound,
    IndexParseError,
    InvalidIndexFile,
    ObjectCopyError,
    ProgressRenderError,
    UnsafeObjectPath,
)
from .extract import ExtractionReport, PackageReport, extract_assets, materialize_index, run_extraction
from .paths import AssetPaths, get_asset_paths, resolve_assets_root, resolve_object_path
from .progress import ProgressCoordinator, ProgressHandle, RenderOutcome, RenderThread

__all__ = [
    "AssetExtractionError",
    "AssetPaths",
    "AssetsFolderNotFound",
    "ExtractionReport",
    "ExtractorConfig",
    "IndexDescriptor",
    "IndexManifest",
    "IndexObject",
    "IndexParseError",
    "IndexesFolderNotFound",
    "InvalidIndexFile",
    "ObjectCopyError",
    "PackageReport",
    "ProgressCoordinator",
    "ProgressHandle",
    "ProgressRenderError",
    "RenderOutcome",
    "RenderThread",
    "UnsafeObjectPath",
    "default_config",
    "discover_indexes",
    "extract_assets",
    "get_asset_paths",
    "load_index",
    "materialize_index",
    "resolve_assets_root",
    "resolve_object_path",
    "run_extraction",
]

__version__ = "0.1.0"
