"""Configuration objects for asset materialization."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
from typing import Any


@dataclass(frozen=True)
class ExtractorConfig:
    """Single-source configuration for folder names and progress display."""

    assets_dir: str = "assets"
    fallback_assets_dirs: tuple[str, ...] = ()
    indexes_dirname: str = "indexes"
    objects_dirname: str = "objects"
    files_dirname: str = "files"
    progress_refresh_interval: float = 0.1
    show_progress: bool = True
    log_level: str = "INFO"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    def with_overrides(self, **overrides: Any) -> "ExtractorConfig":
        merged = self.to_dict()
        merged.update(overrides)
        merged["fallback_assets_dirs"] = tuple(merged["fallback_assets_dirs"])
        return ExtractorConfig(**merged)

    def assets_dir_candidates(self) -> tuple[str, ...]:
        return (self.assets_dir, *self.fallback_assets_dirs)


def default_config() -> ExtractorConfig:
    return ExtractorConfig()
