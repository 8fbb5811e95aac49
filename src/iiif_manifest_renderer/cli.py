"""Command-line interface for iiif-manifest-renderer."""

import argparse
import logging
import sys
from pathlib import Path

from iiif_manifest_renderer.adapters import ExportRepository, SchemeFileLocator, load_export
from iiif_manifest_renderer.assembler import ManifestAssembler
from iiif_manifest_renderer.config import load_settings
from iiif_manifest_renderer.exceptions import RendererError
from iiif_manifest_renderer.options import tile_field_options

USER_AGENT = "iiif-manifest-renderer/1.0"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def render_manifest(args: argparse.Namespace) -> int:
    """Execute the render command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    export_path = args.export.resolve()
    if not export_path.exists():
        logger.error(f"Export file not found: {export_path}")
        return 1

    try:
        settings = load_settings(
            args.settings,
            iiif_server=args.iiif_server,
            tile_fields=args.tile_field,
        )
        if "User-Agent" not in settings.headers:
            settings.headers["User-Agent"] = USER_AGENT

        export = load_export(export_path)
        repository = ExportRepository(export)
        assembler = ManifestAssembler(
            settings,
            resolver=repository,
            transcript_source=repository,
            file_locator=SchemeFileLocator(export.file_roots),
        )
        output = assembler.render_json(
            args.url, repository.rows(), view_title=args.title, indent=2
        )

    except RendererError as e:
        logger.error(f"Failed to render manifest: {e.message}")
        for error in getattr(e, "errors", []):
            logger.error(f"  - {error}")
        return 1
    except Exception as e:
        logger.error(f"Failed to render manifest: {e}")
        return 1

    if args.output is None:
        sys.stdout.write(output + "\n")
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output + "\n")
        logger.info(f"Wrote manifest to {args.output}")

    return 0


def list_tile_fields(args: argparse.Namespace) -> int:
    """Execute the tile-fields command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        export = load_export(args.export.resolve())
    except RendererError as e:
        logger.error(e.message)
        return 1

    options = tile_field_options(export.view_fields)
    if not options:
        return 1

    for name, label in options.items():
        sys.stdout.write(f"{name}\t{label}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="iiif-manifest",
        description="Render IIIF Presentation 3.0 manifests from content exports",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render a IIIF manifest for an export",
        description="Render the rows of a content export as a IIIF Presentation 3.0 manifest.",
    )
    render_parser.add_argument(
        "--export",
        type=Path,
        required=True,
        help="Path to the content export JSON file",
    )
    render_parser.add_argument(
        "--url",
        type=str,
        required=True,
        help="Manifest request URL (e.g. https://example.org/node/1/manifest.json)",
    )
    render_parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to a settings JSON file",
    )
    render_parser.add_argument(
        "--iiif-server",
        type=str,
        default=None,
        help="IIIF image server base URL (overrides settings)",
    )
    render_parser.add_argument(
        "--tile-field",
        action="append",
        default=None,
        help="Field holding page images; repeat for several (overrides settings)",
    )
    render_parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="View title to use as the manifest label",
    )
    render_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the manifest to this file instead of stdout",
    )
    render_parser.set_defaults(func=render_manifest)

    fields_parser = subparsers.add_parser(
        "tile-fields",
        help="List fields that can supply page images",
        description="List the view fields of a content export that can be used as tile sources.",
    )
    fields_parser.add_argument(
        "--export",
        type=Path,
        required=True,
        help="Path to the content export JSON file",
    )
    fields_parser.set_defaults(func=list_tile_fields)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
