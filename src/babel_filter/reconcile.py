"""
reconcile.py - Write filter nodes that no Babel file contained.

After the directory pass the filter set only holds ids that never matched a
Babel curie. Each one is converted to the Babel line format and appended to
NonBabelNodes.txt.gz in the output directory, so every filter id ends up in
exactly one output file: as its original Babel line, or here.

Conversion:
  curie                 <- id
  names                 <- [name]
  types                 <- category, with "biolink:" removed from each tag
  preferred_name        <- name
  shortest_name_length  <- len(name) in UTF-8 bytes
  taxa                  <- []
"""

import logging
from pathlib import Path

from babel_filter.filter_set import FilterSet
from babel_filter.line_io import DEFAULT_BUFFER_SIZE, open_writer
from babel_filter.records import BabelRecord, EncodeError, FilterRecord, encode_babel_record

logger = logging.getLogger(__name__)


NON_BABEL_NODES_FILENAME = 'NonBabelNodes.txt.gz'

BIOLINK_PREFIX = 'biolink:'


def to_babel_record(curie: str, node: FilterRecord) -> BabelRecord:
    """Synthesize a Babel node from a filter node. Raises EncodeError for a name that is not valid UTF-8."""
    try:
        name_length = len(node.name.encode('utf-8'))
    except UnicodeEncodeError as e:
        raise EncodeError(f"cannot encode name of {curie!r}: {e}") from e

    return BabelRecord(
        curie=curie,
        names=[node.name],
        types=[category.replace(BIOLINK_PREFIX, '') for category in node.category],
        preferred_name=node.name,
        shortest_name_length=name_length,
        taxa=[],
    )


def write_non_babel_nodes(
    filter_set: FilterSet,
    output_directory: Path,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """
    Drain ``filter_set`` into NonBabelNodes.txt.gz and return the number of lines written.

    A node that fails to encode is logged and skipped. OSError on open or
    write propagates.
    """
    output_path = Path(output_directory) / NON_BABEL_NODES_FILENAME

    with open_writer(output_path, buffer_size=buffer_size) as writer:
        for curie, node in filter_set.items():
            try:
                line = encode_babel_record(to_babel_record(curie, node))
            except EncodeError as e:
                logger.warning(f"Error converting a non-Babel node to a JSON line: {e}")
                continue
            writer.write_line(line)

    filter_set.clear()
    return writer.lines_written
