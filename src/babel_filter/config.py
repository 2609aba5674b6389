"""
Run configuration and the up-front path checks.

All three paths are checked before anything is opened, so a typo in the
output directory cannot leave a half-written run behind.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from babel_filter.line_io import DEFAULT_BUFFER_SIZE
from babel_filter.processor import OutputFormat


class ConfigError(ValueError):
    """A required path is missing or of the wrong type."""


@dataclass
class FilterConfig:
    babel_directory: Path
    filter_file: Path
    output_directory: Path
    exclude_categories: List[str] = field(default_factory=list)
    output_format: OutputFormat = OutputFormat.UNSPECIFIED
    buffer_size: int = DEFAULT_BUFFER_SIZE
    show_progress: bool = False

    def __post_init__(self):
        self.babel_directory = Path(self.babel_directory)
        self.filter_file = Path(self.filter_file)
        self.output_directory = Path(self.output_directory)

    def validate(self):
        """Raise ConfigError for the first path that fails its check."""
        if not self.babel_directory.is_dir():
            raise ConfigError(
                f"The path provided to the Babel directory isn't a directory or doesn't exist: "
                f"{self.babel_directory}"
            )
        if not self.filter_file.is_file():
            raise ConfigError(
                f"The path provided to the filter file isn't a file or doesn't exist: "
                f"{self.filter_file}"
            )
        if not self.output_directory.is_dir():
            raise ConfigError(
                f"The path provided to the output directory isn't a directory or doesn't exist: "
                f"{self.output_directory}"
            )
        if self.buffer_size <= 0:
            raise ConfigError(f"Buffer size must be positive, got {self.buffer_size}")
