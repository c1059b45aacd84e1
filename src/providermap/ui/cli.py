from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from providermap.adapters.filesystem import ModuleMapError
from providermap.adapters.metadata import ManifestError
from providermap.app import build_registry_from_files, remove_registry
from providermap.config import (
    ConfigurationError,
    configure_logging,
    get_generation_config,
    get_manifest_path,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from providermap.config import GenerationConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    parser = argparse.ArgumentParser(description="Generate the service provider registry")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", parents=[common], help="Generate and publish the registry module"
    )
    generate.add_argument(
        "--manifest",
        type=Path,
        help="Installed package listing in dependency order (default: $PROVIDERMAP_MANIFEST)",
    )
    generate.add_argument(
        "--root-pyproject",
        type=Path,
        help="pyproject.toml of the root package (overrides the manifest's root entry)",
    )
    generate.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the generated module (defaults to config)",
    )
    generate.add_argument(
        "--source-path",
        type=Path,
        action="append",
        default=[],
        help="Source root made importable while checking availability (repeatable)",
    )
    generate.add_argument(
        "--module-map",
        type=Path,
        help="JSON module map to register the generated module in",
    )

    remove = subparsers.add_parser(
        "remove", parents=[common], help="Remove the generated registry module"
    )
    remove.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory holding the generated module (defaults to config)",
    )
    remove.add_argument(
        "--module-map",
        type=Path,
        help="JSON module map to unregister the generated module from",
    )

    return parser.parse_args(list(argv))


def _build_config(args: argparse.Namespace) -> GenerationConfig:
    config = get_generation_config()
    if args.output_dir is not None:
        config = config.with_output_dir(args.output_dir)
    return config


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        config = _build_config(parsed_args)
        if (
            parsed_args.command == "generate"
            and parsed_args.manifest is None
            and parsed_args.root_pyproject is None
        ):
            parsed_args.manifest = get_manifest_path()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        if parsed_args.command == "generate":
            build_registry_from_files(
                manifest=parsed_args.manifest,
                root_pyproject=parsed_args.root_pyproject,
                config=config,
                source_paths=parsed_args.source_path,
                module_map=parsed_args.module_map,
            )
        elif parsed_args.command == "remove":
            remove_registry(config=config, module_map=parsed_args.module_map)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ManifestError, ModuleMapError):
        log.exception("Invalid build input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during registry generation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
