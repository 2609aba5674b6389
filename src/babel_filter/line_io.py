"""
line_io.py - Line-oriented readers and writers with transparent gzip.

The compression variant is picked once, when the stream is opened, from the
path suffix: anything ending in ``.gz`` is read through gunzip and written
through gzip, everything else is plain UTF-8 text. Callers only ever see
``LineReader`` (an iterator of lines without terminators) and ``LineWriter``
(``write_line``), never the file objects underneath.

Usage:
    with open_reader(path) as reader:
        for line in reader:
            ...

    with open_writer(out_path) as writer:
        writer.write_line(line)
"""

import gzip
import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Union

logger = logging.getLogger(__name__)


GZIP_SUFFIX = '.gz'

# Read/write buffer in bytes; Babel files are large, so keep syscalls coarse
DEFAULT_BUFFER_SIZE = 32_000

# zlib's own default level, rather than gzip.open's compresslevel=9
GZIP_COMPRESS_LEVEL = 6

PathLike = Union[str, Path]


def is_gzip_path(path: PathLike) -> bool:
    """Return True when the file name ends in the gzip suffix."""
    return Path(path).name.endswith(GZIP_SUFFIX)


class LineReader:
    """
    Lazy iterator over the text lines of a (possibly gzipped) file.

    Line terminators (``\\n`` or ``\\r\\n``) are stripped. A line that is not
    valid UTF-8 is logged, counted in ``read_errors`` and skipped; it never
    ends the stream. The reader is single-pass: open a new one to re-read.
    """

    def __init__(self, path: PathLike, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.path = Path(path)
        self.compressed = is_gzip_path(self.path)
        self.read_errors = 0
        self.line_num = 0
        self._stream: BinaryIO = self._open(buffer_size)

    def _open(self, buffer_size: int) -> BinaryIO:
        if self.compressed:
            raw = gzip.open(self.path, 'rb')
            return io.BufferedReader(raw, buffer_size=buffer_size)
        return open(self.path, 'rb', buffering=buffer_size)

    def __iter__(self) -> Iterator[str]:
        for raw in self._stream:
            self.line_num += 1
            if raw.endswith(b'\n'):
                raw = raw[:-1]
                if raw.endswith(b'\r'):
                    raw = raw[:-1]
            try:
                yield raw.decode('utf-8')
            except UnicodeDecodeError as e:
                self.read_errors += 1
                logger.warning(f"Read error in {self.path} line {self.line_num}: {e}")

    def close(self):
        self._stream.close()

    def __enter__(self) -> 'LineReader':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class LineWriter:
    """
    Appends newline-terminated lines to a (possibly gzipped) file.

    Output is buffered; ``close()`` flushes the buffer and, for gzip output,
    writes the gzip trailer. Write failures surface as ``OSError``.
    """

    def __init__(self, path: PathLike, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.path = Path(path)
        self.compressed = is_gzip_path(self.path)
        self.lines_written = 0
        self._stream: BinaryIO = self._open(buffer_size)

    def _open(self, buffer_size: int) -> BinaryIO:
        if self.compressed:
            raw = gzip.open(self.path, 'wb', compresslevel=GZIP_COMPRESS_LEVEL)
            return io.BufferedWriter(raw, buffer_size=buffer_size)
        return open(self.path, 'wb', buffering=buffer_size)

    def write_line(self, line: str):
        """Append ``line`` followed by ``\\n``."""
        self._stream.write(line.encode('utf-8'))
        self._stream.write(b'\n')
        self.lines_written += 1

    def close(self):
        self._stream.close()

    def __enter__(self) -> 'LineWriter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def open_reader(path: PathLike, buffer_size: int = DEFAULT_BUFFER_SIZE) -> LineReader:
    """Open ``path`` for line reading; raises ``OSError`` if it cannot be opened."""
    return LineReader(path, buffer_size=buffer_size)


def open_writer(path: PathLike, buffer_size: int = DEFAULT_BUFFER_SIZE) -> LineWriter:
    """Create (or truncate) ``path`` for line writing; raises ``OSError`` on failure."""
    return LineWriter(path, buffer_size=buffer_size)
