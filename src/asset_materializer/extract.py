"""Materialize package file trees from asset indexes and the object store."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path, PurePosixPath
import shutil

from asset_materializer.config import ExtractorConfig
from asset_materializer.data.index_manifest import IndexManifest
from asset_materializer.data.index_store import discover_indexes, load_index
from asset_materializer.errors import ObjectCopyError, UnsafeObjectPath
from asset_materializer.paths import AssetPaths, get_asset_paths, resolve_assets_root, resolve_object_path
from asset_materializer.progress import ProgressCoordinator

LOGGER = logging.getLogger(__name__)

OBJECTS_PROGRESS_DESC = "Extracting assets"
INDEXES_PROGRESS_DESC = "Indexes"
RUNNING_PROGRESS_DESC = "Running"


@dataclass(frozen=True)
class PackageReport:
    package_id: str
    output_dir: Path
    index_loaded: bool
    objects_total: int = 0
    objects_copied: int = 0


@dataclass(frozen=True)
class ExtractionReport:
    assets_root: Path
    packages: tuple[PackageReport, ...]

    @property
    def manifests_processed(self) -> int:
        return len(self.packages)

    @property
    def objects_copied(self) -> int:
        return sum(package.objects_copied for package in self.packages)


def _output_path_for(output_dir: Path, package_id: str, logical_path: str) -> Path:
    if PurePosixPath(logical_path).is_absolute() or os.path.isabs(logical_path):
        raise UnsafeObjectPath(package_id, logical_path)
    base = Path(os.path.normpath(output_dir))
    output_path = Path(os.path.normpath(base / logical_path))
    if base not in output_path.parents:
        raise UnsafeObjectPath(package_id, logical_path)
    return output_path


def materialize_index(
    paths: AssetPaths,
    manifest: IndexManifest,
    package_id: str,
    *,
    progress: ProgressCoordinator,
) -> PackageReport:
    output_dir = paths.ensure_package_dir(package_id)
    bar = progress.add(total=len(manifest), desc=OBJECTS_PROGRESS_DESC, unit="obj")

    copied = 0
    for logical_path, entry in bar.track(manifest.objects.items()):
        output_path = _output_path_for(output_dir, package_id, logical_path)
        input_path = resolve_object_path(paths.objects, entry.hash)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(input_path, output_path)
        except OSError as exc:
            raise ObjectCopyError(input_path, output_path, exc) from exc
        copied += 1

    LOGGER.debug("Materialized %d objects into %s", copied, output_dir)
    return PackageReport(
        package_id=package_id,
        output_dir=output_dir,
        index_loaded=True,
        objects_total=len(manifest),
        objects_copied=copied,
    )


def extract_assets(paths: AssetPaths, *, progress: ProgressCoordinator) -> ExtractionReport:
    descriptors = discover_indexes(paths.indexes)
    bar = progress.add(total=len(descriptors), desc=INDEXES_PROGRESS_DESC, unit="index")

    packages: list[PackageReport] = []
    for descriptor in bar.track(descriptors):
        package_id = descriptor.package_id
        output_dir = paths.ensure_package_dir(package_id)
        manifest = load_index(descriptor)
        if manifest is None:
            packages.append(PackageReport(package_id=package_id, output_dir=output_dir, index_loaded=False))
            continue
        LOGGER.debug("Index %s lists %d objects", descriptor.path, len(manifest))
        packages.append(materialize_index(paths, manifest, package_id, progress=progress))

    return ExtractionReport(assets_root=paths.root, packages=tuple(packages))


def run_extraction(config: ExtractorConfig, *, progress: ProgressCoordinator | None = None) -> ExtractionReport:
    """Extract every index under the configured assets root.

    Runs on the calling thread while a separate thread draws progress. A failure
    or crash of the render thread is raised here once extraction is done.
    """

    root = resolve_assets_root(config.assets_dir_candidates())
    paths = get_asset_paths(root, config)
    coordinator = progress or ProgressCoordinator(
        refresh_interval=config.progress_refresh_interval,
        disable=not config.show_progress,
    )

    running = coordinator.add(desc=RUNNING_PROGRESS_DESC)
    render_thread = coordinator.spawn_render_thread()

    report = extract_assets(paths, progress=coordinator)
    running.finish_and_clear()
    render_thread.join_outcome().raise_for_status()

    LOGGER.info(
        "Extracted %d objects from %d indexes under %s",
        report.objects_copied,
        report.manifests_processed,
        paths.files,
    )
    return report
