"""Discovery and loading of per-package index files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from asset_materializer.data.index_manifest import IndexManifest, parse_index
from asset_materializer.errors import IndexesFolderNotFound, IndexParseError, InvalidIndexFile

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexDescriptor:
    path: Path
    size_bytes: int

    @property
    def package_id(self) -> str:
        """Filename without its final extension; names the output folder."""

        stem = self.path.stem
        if not stem.strip("."):
            raise InvalidIndexFile(self.path)
        return stem


def discover_indexes(indexes_dir: str | Path) -> list[IndexDescriptor]:
    indexes_path = Path(indexes_dir)
    if not indexes_path.is_dir():
        raise IndexesFolderNotFound([indexes_path])

    descriptors: list[IndexDescriptor] = []
    with os.scandir(indexes_path) as entries:
        for entry in entries:
            try:
                stat = entry.stat()
            except OSError as exc:
                LOGGER.debug("Skipping unreadable index entry %s: %s", entry.path, exc)
                continue
            descriptors.append(IndexDescriptor(path=Path(entry.path), size_bytes=stat.st_size))

    descriptors.sort(key=lambda descriptor: descriptor.path.name)
    return descriptors


def load_index(descriptor: IndexDescriptor) -> IndexManifest | None:
    """Read and parse one index.

    Returns ``None`` when the file cannot be read as UTF-8 text; the package is
    then treated as having no objects. Text that was read but does not parse raises
    ``IndexParseError``.
    """

    try:
        text = descriptor.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.warning("Could not read index %s, treating it as empty: %s", descriptor.path, exc)
        return None

    LOGGER.debug("Read index %s (%d bytes)", descriptor.path, descriptor.size_bytes)
    try:
        return parse_index(text)
    except ValueError as exc:
        raise IndexParseError(descriptor.path, str(exc)) from exc
