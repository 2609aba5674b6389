"""
babel-filter: keep only the Babel compendium nodes named in a node list.

Modules:
- line_io: plain/gzip line readers and writers
- records: FilterRecord and BabelRecord codecs
- filter_set: build the id -> FilterRecord map (category exclusion)
- processor: filter each Babel file, echoing matched lines verbatim
- reconcile: write unmatched filter nodes to NonBabelNodes.txt.gz
- pipeline: run all stages for a FilterConfig
"""

from babel_filter.config import ConfigError, FilterConfig
from babel_filter.filter_set import FilterSetResult, build_filter_set, has_excluded_category
from babel_filter.line_io import open_reader, open_writer
from babel_filter.pipeline import RunSummary, run
from babel_filter.processor import FileStats, OutputFormat, filter_directory, filter_file, output_path_for
from babel_filter.reconcile import NON_BABEL_NODES_FILENAME, to_babel_record, write_non_babel_nodes
from babel_filter.records import (
    BabelRecord,
    DecodeError,
    EncodeError,
    FilterRecord,
    decode_babel_record,
    decode_filter_record,
    encode_babel_record,
)

__all__ = [
    "BabelRecord",
    "ConfigError",
    "DecodeError",
    "EncodeError",
    "FileStats",
    "FilterConfig",
    "FilterRecord",
    "FilterSetResult",
    "NON_BABEL_NODES_FILENAME",
    "OutputFormat",
    "RunSummary",
    "build_filter_set",
    "decode_babel_record",
    "decode_filter_record",
    "encode_babel_record",
    "filter_directory",
    "filter_file",
    "has_excluded_category",
    "open_reader",
    "open_writer",
    "output_path_for",
    "run",
    "to_babel_record",
    "write_non_babel_nodes",
]
