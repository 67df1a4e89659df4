"""Error kinds raised while materializing asset indexes.

Every fatal condition of an extraction run is one of the classes below, so
callers can catch ``AssetExtractionError`` and report a single message.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


def _join_paths(paths: Sequence[Path]) -> str:
    return ", ".join(str(path) for path in paths)


class AssetExtractionError(Exception):
    """Base class for all fatal extraction errors."""


class AssetsFolderNotFound(AssetExtractionError):
    def __init__(self, tried: Sequence[Path]):
        self.tried = tuple(Path(path) for path in tried)
        super().__init__(f"Could not find assets folder. Tried {_join_paths(self.tried)}")


class IndexesFolderNotFound(AssetExtractionError):
    def __init__(self, tried: Sequence[Path]):
        self.tried = tuple(Path(path) for path in tried)
        super().__init__(f"Could not find indexes folder. Tried {_join_paths(self.tried)}")


class InvalidIndexFile(AssetExtractionError):
    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Invalid index file {self.path}")


class IndexParseError(AssetExtractionError):
    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not parse index file {self.path}: {reason}")


class ObjectCopyError(AssetExtractionError):
    def __init__(self, input_path: Path, output_path: Path, cause: OSError):
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.cause = cause
        super().__init__(f"Could not copy object {self.input_path} to {self.output_path}: {cause}")


class UnsafeObjectPath(AssetExtractionError):
    def __init__(self, package_id: str, logical_path: str):
        self.package_id = package_id
        self.logical_path = logical_path
        super().__init__(f"Refusing to write {logical_path!r} outside package {package_id!r}")


class ProgressRenderError(AssetExtractionError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Progress rendering failed: {reason}")
