"""CLI entrypoints for asset materialization."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Sequence

from asset_materializer.config import ExtractorConfig, default_config
from asset_materializer.data.index_store import discover_indexes
from asset_materializer.errors import AssetExtractionError, InvalidIndexFile
from asset_materializer.extract import run_extraction
from asset_materializer.logging_utils import configure_logging
from asset_materializer.paths import get_asset_paths, resolve_assets_root, resolve_object_path


def _config_from_args(args: argparse.Namespace, config: ExtractorConfig) -> ExtractorConfig:
    overrides: dict[str, object] = {"log_level": args.log_level}
    if getattr(args, "assets_dir", None) is not None:
        overrides["assets_dir"] = str(args.assets_dir)
    if getattr(args, "no_progress", False):
        overrides["show_progress"] = False
    return config.with_overrides(**overrides)


def _cmd_extract(args: argparse.Namespace, config: ExtractorConfig) -> int:
    cfg = _config_from_args(args, config)
    report = run_extraction(cfg)

    print("extract_status=ok")
    print(f"assets_root={report.assets_root}")
    print(f"manifests_processed={report.manifests_processed}")
    print(f"objects_copied={report.objects_copied}")
    for package in report.packages:
        if not package.index_loaded:
            print(f"warning=index for package {package.package_id} could not be read; no objects extracted")
    return 0


def _cmd_list_indexes(args: argparse.Namespace, config: ExtractorConfig) -> int:
    cfg = _config_from_args(args, config)
    paths = get_asset_paths(resolve_assets_root(cfg.assets_dir_candidates()), cfg)

    descriptors = discover_indexes(paths.indexes)
    print(f"index_count={len(descriptors)}")
    for descriptor in descriptors:
        try:
            print(f"package_id={descriptor.package_id} path={descriptor.path}")
        except InvalidIndexFile:
            print(f"invalid={descriptor.path}")
    return 0


def _cmd_resolve_object(args: argparse.Namespace, config: ExtractorConfig) -> int:
    cfg = _config_from_args(args, config)
    paths = get_asset_paths(resolve_assets_root(cfg.assets_dir_candidates()), cfg)

    object_path = resolve_object_path(paths.objects, args.hash)
    print(f"object_path={object_path}")
    print(f"object_exists={object_path.is_file()}")
    return 0


def _cmd_print_config(args: argparse.Namespace, config: ExtractorConfig) -> int:
    if args.format == "repr":
        print(config)
        return 0

    print(config.to_json())
    return 0


def _add_assets_dir_argument(parser: argparse.ArgumentParser, cfg: ExtractorConfig) -> None:
    parser.add_argument(
        "--assets-dir",
        type=Path,
        default=None,
        help=f"Assets root containing indexes/ and objects/ (default: {cfg.assets_dir}).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-materializer",
        description="Rebuild package file trees from asset indexes and a content-addressed object store.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO).",
    )

    cfg = default_config()
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Materialize every index under indexes/ into files/<package>/.",
    )
    _add_assets_dir_argument(extract_parser, cfg)
    extract_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not draw progress bars.",
    )
    extract_parser.set_defaults(handler=_cmd_extract)

    list_indexes_parser = subparsers.add_parser(
        "list-indexes",
        help="List discovered index files and the package id derived from each.",
    )
    _add_assets_dir_argument(list_indexes_parser, cfg)
    list_indexes_parser.set_defaults(handler=_cmd_list_indexes)

    resolve_object_parser = subparsers.add_parser(
        "resolve-object",
        help="Print the object store path for a blob hash.",
    )
    resolve_object_parser.add_argument("hash", help="Blob hash, e.g. deadbeef.")
    _add_assets_dir_argument(resolve_object_parser, cfg)
    resolve_object_parser.set_defaults(handler=_cmd_resolve_object)

    print_config_parser = subparsers.add_parser(
        "print-config",
        help="Print the default extractor configuration.",
    )
    print_config_parser.add_argument(
        "--format",
        choices=("json", "repr"),
        default="json",
        help="Output format.",
    )
    print_config_parser.set_defaults(handler=_cmd_print_config)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, progress_aware=args.command == "extract")
    config = default_config()
    handler: Callable[[argparse.Namespace, ExtractorConfig], int] = args.handler
    try:
        return handler(args, config)
    except AssetExtractionError as exc:
        print(f"error={exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
