"""
processor.py - Stream every Babel file in a directory through the filter set.

For each regular file in the Babel directory (directory iteration order,
subdirectories skipped) an output file of the same base name is written to the
output directory, holding only the lines whose ``curie`` is still in the
filter set. Matched lines are copied verbatim, never re-serialized, so key
order, formatting and fields this tool does not know about survive untouched.

Every match pops its id from the filter set. Once the whole directory has been
processed the filter set holds exactly the ids that no Babel file contained,
which is what reconciliation consumes.

Output compression follows the input file name unless overridden:
  - OutputFormat.PLAINTEXT strips a trailing ``.gz``
  - OutputFormat.GZIP appends ``.gz`` unless it is already there
"""

import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from babel_filter.filter_set import FilterSet
from babel_filter.line_io import DEFAULT_BUFFER_SIZE, GZIP_SUFFIX, open_reader, open_writer
from babel_filter.progress_display import ProgressDisplay
from babel_filter.records import DecodeError, decode_babel_record

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    UNSPECIFIED = 'unspecified'
    PLAINTEXT = 'plaintext'
    GZIP = 'gzip'


@dataclass
class FileStats:
    """Counts for one filtered Babel file."""
    input_path: Path
    output_path: Path
    num_processed: int = 0
    num_kept: int = 0
    num_errors: int = 0
    elapsed: float = 0.0

    @property
    def kept_percentage(self) -> Optional[float]:
        """Kept lines as a percentage of processed lines; None for an empty file."""
        if self.num_processed == 0:
            return None
        return self.num_kept / self.num_processed * 100

    def summary(self) -> str:
        pct = self.kept_percentage
        pct_text = 'n/a' if pct is None else f"{pct:.2f}%"
        return (
            f"Writing {self.output_path.name} took {self.elapsed:.2f}s, "
            f"kept {self.num_kept:,}/{self.num_processed:,} nodes ({pct_text})"
        )


def output_path_for(
    input_path: Path,
    output_directory: Path,
    output_format: OutputFormat = OutputFormat.UNSPECIFIED,
) -> Path:
    """Mirror ``input_path`` into ``output_directory``, applying the compression override."""
    name = Path(input_path).name

    if output_format is OutputFormat.PLAINTEXT and name.endswith(GZIP_SUFFIX):
        name = name[:-len(GZIP_SUFFIX)]
    elif output_format is OutputFormat.GZIP and not name.endswith(GZIP_SUFFIX):
        name = name + GZIP_SUFFIX

    return Path(output_directory) / name


def filter_file(
    input_path: Path,
    output_path: Path,
    filter_set: FilterSet,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    show_progress: bool = False,
) -> FileStats:
    """
    Copy the lines of ``input_path`` whose curie is in ``filter_set`` to ``output_path``.

    Matched ids are removed from ``filter_set``. Undecodable lines are logged
    and skipped. OSError from opening either file or from a write propagates;
    both files are closed before it does.
    """
    stats = FileStats(input_path=Path(input_path), output_path=Path(output_path))
    t0 = time.monotonic()

    with open_reader(input_path, buffer_size=buffer_size) as reader, \
            open_writer(output_path, buffer_size=buffer_size) as writer, \
            ProgressDisplay(f"Filtering {stats.input_path.name}", enabled=show_progress) as progress:
        for line in reader:
            progress.update(Processed=reader.line_num, Kept=stats.num_kept)
            try:
                node = decode_babel_record(line)
            except DecodeError as e:
                stats.num_errors += 1
                logger.warning(f"Parse error in {stats.input_path} line {reader.line_num}: {e}")
                continue

            if filter_set.pop(node.curie, None) is not None:
                stats.num_kept += 1
                writer.write_line(line)

        # Unreadable lines still count as processed
        stats.num_processed = reader.line_num
        stats.num_errors += reader.read_errors

    stats.elapsed = time.monotonic() - t0
    return stats


def filter_directory(
    babel_directory: Path,
    filter_set: FilterSet,
    output_directory: Path,
    output_format: OutputFormat = OutputFormat.UNSPECIFIED,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    show_progress: bool = False,
) -> List[FileStats]:
    """
    Filter every regular file in ``babel_directory`` into ``output_directory``.

    Prints one summary line per file. Entries whose type cannot be determined
    are logged and skipped; any other OSError ends the run.
    """
    results: List[FileStats] = []

    with os.scandir(babel_directory) as entries:
        for entry in entries:
            try:
                is_file = entry.is_file()
            except OSError as e:
                logger.error(f"Error opening file in Babel directory: {e}")
                continue
            if not is_file:
                continue

            input_path = Path(entry.path)
            output_path = output_path_for(input_path, output_directory, output_format)
            stats = filter_file(
                input_path,
                output_path,
                filter_set,
                buffer_size=buffer_size,
                show_progress=show_progress,
            )
            print(stats.summary())
            results.append(stats)

    return results
