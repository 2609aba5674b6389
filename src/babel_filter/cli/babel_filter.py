#!/usr/bin/env python3
"""
babel-filter - Keep only the Babel nodes that appear in a node list.

Usage:
    babel-filter -b BABEL_DIR -f NODES.jsonl -o OUTPUT_DIR [options]

Example:
    babel-filter -b data/babel/compendia \\
                 -f data/nodes.jsonl.gz \\
                 -o data/filtered \\
                 -e biolink:OrganismTaxon biolink:Publication \\
                 --output-format gzip

Environment:
    BABEL_FILTER_OUTPUT_FORMAT  default for --output-format (plaintext|gzip)
    BABEL_FILTER_BUFFER_SIZE    default for --buffer-size
"""

import argparse
import logging
import os
import sys
import zlib
from pathlib import Path
from typing import List, Optional

from babel_filter.config import ConfigError, FilterConfig
from babel_filter.line_io import DEFAULT_BUFFER_SIZE
from babel_filter.pipeline import run
from babel_filter.processor import OutputFormat

logger = logging.getLogger(__name__)


OUTPUT_FORMAT_CHOICES = [OutputFormat.PLAINTEXT.value, OutputFormat.GZIP.value]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='babel-filter',
        description='Filter a directory of Babel JSONL files down to the nodes in a filter file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-b', '--babel-directory', type=Path, required=True,
                        help='Directory of Babel JSONL files (.gz files are decompressed)')
    parser.add_argument('-f', '--filter-file', type=Path, required=True,
                        help='JSONL node list whose ids select the Babel nodes to keep')
    parser.add_argument('-o', '--output-directory', type=Path, required=True,
                        help='Existing directory for the filtered files and NonBabelNodes.txt.gz')
    parser.add_argument('-e', '--exclude-category', action='extend', nargs='+', default=[],
                        metavar='CATEGORY',
                        help='Drop filter nodes with this category (repeatable)')
    parser.add_argument('--output-format', choices=OUTPUT_FORMAT_CHOICES,
                        default=os.environ.get('BABEL_FILTER_OUTPUT_FORMAT') or None,
                        help='Force plaintext or gzip output (default: same as each input file)')
    parser.add_argument('--buffer-size', type=int,
                        default=os.environ.get('BABEL_FILTER_BUFFER_SIZE', DEFAULT_BUFFER_SIZE),
                        help=f'Read/write buffer size in bytes (default: {DEFAULT_BUFFER_SIZE})')
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the live progress panel')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for babel-filter CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if args.output_format is not None and args.output_format not in OUTPUT_FORMAT_CHOICES:
        # Only reachable through BABEL_FILTER_OUTPUT_FORMAT; argparse validates the flag
        logger.error(f"Invalid output format: {args.output_format}")
        return 1

    config = FilterConfig(
        babel_directory=args.babel_directory,
        filter_file=args.filter_file,
        output_directory=args.output_directory,
        exclude_categories=args.exclude_category,
        output_format=OutputFormat(args.output_format) if args.output_format else OutputFormat.UNSPECIFIED,
        buffer_size=args.buffer_size,
        show_progress=not args.no_progress and sys.stderr.isatty(),
    )

    try:
        run(config)
    except ConfigError as e:
        logger.error(str(e))
        return 1
    except (OSError, EOFError, zlib.error) as e:
        # Open/write failures and truncated or corrupt gzip input end the whole run
        logger.error(f"Fatal I/O error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
