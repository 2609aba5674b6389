"""
pipeline.py - Filter a Babel directory against a node list, end to end.

Stages:
  1. Build the filter set from the filter file (category exclusion applied)
  2. Filter each Babel file into the output directory, popping matched ids
  3. Write the ids left over to NonBabelNodes.txt.gz

Statistics go to stdout; warnings and errors go through logging (stderr).
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List

from babel_filter.config import FilterConfig
from babel_filter.filter_set import build_filter_set
from babel_filter.processor import FileStats, filter_directory
from babel_filter.reconcile import NON_BABEL_NODES_FILENAME, write_non_babel_nodes

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    num_filter_nodes: int = 0
    num_excluded: int = 0
    num_non_babel: int = 0
    files: List[FileStats] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def num_kept(self) -> int:
        return sum(stats.num_kept for stats in self.files)


def run(config: FilterConfig) -> RunSummary:
    """
    Run all three stages for ``config``.

    Raises ConfigError before any I/O if a path is invalid, and OSError if a
    file cannot be opened or written.
    """
    start = time.monotonic()
    config.validate()

    logger.info(f"Babel directory:  {config.babel_directory}")
    logger.info(f"Filter file:      {config.filter_file}")
    logger.info(f"Output directory: {config.output_directory}")
    if config.exclude_categories:
        logger.info(f"Excluding categories: {', '.join(config.exclude_categories)}")

    result = build_filter_set(
        config.filter_file,
        config.exclude_categories,
        buffer_size=config.buffer_size,
        show_progress=config.show_progress,
    )
    summary = RunSummary(
        num_filter_nodes=len(result.filter_set),
        num_excluded=result.num_excluded,
    )
    print(f"Creating filter set took {result.elapsed:.2f}s")
    print(f"{result.num_excluded:,} nodes excluded")
    if result.num_duplicates:
        logger.warning(f"{result.num_duplicates:,} duplicate ids in filter file (last occurrence kept)")

    summary.files = filter_directory(
        config.babel_directory,
        result.filter_set,
        config.output_directory,
        config.output_format,
        buffer_size=config.buffer_size,
        show_progress=config.show_progress,
    )

    summary.num_non_babel = write_non_babel_nodes(
        result.filter_set,
        config.output_directory,
        buffer_size=config.buffer_size,
    )
    print(f"Wrote an extra {summary.num_non_babel:,} nodes to {NON_BABEL_NODES_FILENAME}")

    summary.elapsed = time.monotonic() - start
    print(f"Program took {summary.elapsed:.2f}s")
    return summary
