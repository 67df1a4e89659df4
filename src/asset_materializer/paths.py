"""Filesystem path helpers for the assets root and the object store."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from asset_materializer.config import ExtractorConfig
from asset_materializer.errors import AssetsFolderNotFound


@dataclass(frozen=True)
class AssetPaths:
    root: Path
    indexes: Path
    objects: Path
    files: Path

    def package_dir(self, package_id: str) -> Path:
        return self.files / package_id

    def ensure_package_dir(self, package_id: str) -> Path:
        output_dir = self.package_dir(package_id)
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir


def resolve_object_path(objects_dir: str | Path, object_hash: str) -> Path:
    """Return ``objects/<first two chars>/<hash>``; existence is not checked."""

    return Path(objects_dir) / object_hash[:2] / object_hash


def resolve_assets_root(candidates: Iterable[str | Path]) -> Path:
    tried: list[Path] = []
    for candidate in candidates:
        path = Path(candidate).expanduser()
        tried.append(path)
        if path.is_dir():
            return path
    raise AssetsFolderNotFound(tried)


def get_asset_paths(root: str | Path, config: ExtractorConfig | None = None) -> AssetPaths:
    cfg = config or ExtractorConfig()
    root_path = Path(root)
    return AssetPaths(
        root=root_path,
        indexes=root_path / cfg.indexes_dirname,
        objects=root_path / cfg.objects_dirname,
        files=root_path / cfg.files_dirname,
    )
