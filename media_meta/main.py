#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main CLI entry point for the Media Metadata Tool.
"""

import argparse
import sys
import logging
from pathlib import Path

from .config import default_workers
from .commands.extract import cmd_extract
from .errors import PathError
from .jsonio import enable_json_logging
from .models.media_record import MediaKind


def setup_logging(verbose: bool):
    """Configure logging for the CLI tool."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.debug("Verbose logging enabled (DEBUG level).")


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Media Metadata Tool - write img_/vid_ sidecar metadata files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Image metadata for every file in a directory
  %(prog)s image --input ./media/img --output ./media/md

  # Re-extract videos even if sidecars exist, with 4 workers
  %(prog)s video --input ./media/video --output ./media/md --overwrite --workers 4

  # Machine-readable summary
  %(prog)s --json image --input photo.png --output ./media/md
        """
    )

    # Global options
    parser.add_argument("--verbose", "-v", action="store_true",
                       help="Enable verbose (DEBUG) output")
    parser.add_argument("--json", action="store_true",
                       help="Output results as JSON instead of human-readable text")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")
    _add_extract_parser(subparsers, MediaKind.IMAGE, "Extract image metadata (any decodable file)")
    _add_extract_parser(subparsers, MediaKind.VIDEO, "Extract video metadata (avi, swf, asf, flv, mp4)")

    return parser


def _add_extract_parser(subparsers, kind: MediaKind, help_text: str):
    """Add an extraction command parser for one media kind."""
    p = subparsers.add_parser(kind.value, help=help_text)
    p.add_argument("--input", "-i", required=True,
                   help="Input file or directory (directories are not recursed)")
    p.add_argument("--output", "-o", required=True,
                   help="Existing output directory for sidecar files")
    p.add_argument("--overwrite", action="store_true",
                   help="Re-extract even when a sidecar file already exists")
    p.add_argument("--workers", type=int, default=default_workers(),
                   help="Number of worker threads (default: 1, or $MEDIA_META_WORKERS)")
    p.add_argument("--progress", action="store_true",
                   help="Show a progress bar")


def main(argv=None):
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging based on --verbose (but suppress if JSON output requested)
    if args.json:
        enable_json_logging()
    else:
        setup_logging(args.verbose)

    logging.debug("Parsed arguments: %s", args)

    try:
        logging.info("Starting %s extraction.", args.command)
        return cmd_extract(
            MediaKind(args.command),
            Path(args.input),
            Path(args.output),
            overwrite=args.overwrite,
            workers=max(1, args.workers),
            show_progress=args.progress,
            as_json=args.json,
        )

    except PathError as e:
        if args.json:
            from .jsonio import error
            return error(args.command, str(e), debug={"path": str(e.path)}, code=2)
        logging.error("%s", e)
        return 2
    except KeyboardInterrupt:
        if args.json:
            from .jsonio import error
            return error(args.command, "Operation interrupted by user", code=130)
        logging.warning("Operation interrupted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
