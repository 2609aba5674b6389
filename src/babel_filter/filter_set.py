"""
filter_set.py - Build the identifier -> FilterRecord map from a node list.

The filter file is one FilterRecord per line. Records whose category list
shares a tag with the exclusion list are dropped (and counted); everything else
goes into a plain dict keyed by ``id``. When the same id appears on several
lines the last one wins.

The resulting dict is handed to the directory pass, which pops entries as it
finds them, and then to reconciliation, which drains whatever is left.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from babel_filter.line_io import DEFAULT_BUFFER_SIZE, open_reader
from babel_filter.progress_display import ProgressDisplay
from babel_filter.records import DecodeError, FilterRecord, decode_filter_record

logger = logging.getLogger(__name__)


FilterSet = Dict[str, FilterRecord]


@dataclass
class FilterSetResult:
    filter_set: FilterSet
    num_excluded: int
    num_errors: int
    num_duplicates: int
    elapsed: float


def has_excluded_category(categories: Iterable[str], exclude: Optional[Sequence[str]]) -> bool:
    """True if any of ``categories`` is exactly one of the ``exclude`` tags."""
    # Most runs exclude nothing; skip the scan entirely
    if not exclude:
        return False
    return any(category in exclude for category in categories)


def build_filter_set(
    filter_file: Path,
    exclude_categories: Optional[Sequence[str]] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    show_progress: bool = False,
) -> FilterSetResult:
    """
    Read ``filter_file`` into a FilterSet.

    Lines that fail to decode are logged with their line number and skipped.
    Raises OSError if the file cannot be opened.
    """
    t0 = time.monotonic()
    filter_set: FilterSet = {}
    num_excluded = 0
    num_errors = 0
    num_duplicates = 0

    with open_reader(filter_file, buffer_size=buffer_size) as reader, \
            ProgressDisplay(f"Loading {Path(filter_file).name}", enabled=show_progress) as progress:
        for line in reader:
            line_num = reader.line_num
            progress.update(Lines=line_num, Nodes=len(filter_set), Excluded=num_excluded)
            try:
                node = decode_filter_record(line)
            except DecodeError as e:
                num_errors += 1
                logger.warning(f"Parse error in filter file line {line_num}: {e}")
                continue

            if has_excluded_category(node.category, exclude_categories):
                num_excluded += 1
            else:
                if node.id in filter_set:
                    num_duplicates += 1
                    logger.debug(f"Duplicate filter id {node.id!r} on line {line_num} replaces earlier entry")
                filter_set[node.id] = node

        num_errors += reader.read_errors

    return FilterSetResult(
        filter_set=filter_set,
        num_excluded=num_excluded,
        num_errors=num_errors,
        num_duplicates=num_duplicates,
        elapsed=time.monotonic() - t0,
    )
