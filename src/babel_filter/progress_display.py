"""
Live progress panel for streaming passes over large JSONL files.

Babel compendia run to tens of millions of lines, so the filter pass shows a
small Rich panel with line counts, elapsed time and throughput instead of
printing a log line every N records. The panel is transient: once the block
exits it disappears and the caller prints its own one-line summary.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager for a live-updating metrics panel.

    Usage:
        with ProgressDisplay(f"Filtering {path.name}") as progress:
            for num_processed, line in enumerate(reader, 1):
                progress.update(Processed=num_processed, Kept=num_kept)

    The first metric passed to ``update`` drives the Rate figure. With
    ``enabled=False`` every method is a no-op, which keeps tests and piped
    output quiet without branching at call sites.
    """

    def __init__(
        self,
        title: str,
        update_interval: int = 10_000,
        enabled: bool = True,
        console: Optional[Console] = None,
    ):
        self.title = title
        self.update_interval = max(1, update_interval)
        self.enabled = enabled
        self.console = console

        self.metrics: Dict[str, Any] = {}
        self.live: Optional[Live] = None
        self.start_time = 0.0
        self.iteration_count = 0
        self._primary_metric: Optional[str] = None

    def __enter__(self) -> 'ProgressDisplay':
        self.start_time = time.monotonic()
        if self.enabled:
            self.live = Live(
                self._make_panel(),
                console=self.console or Console(stderr=True),
                refresh_per_second=4,
                transient=True,
            )
            self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.__exit__(exc_type, exc_val, exc_tb)
            self.live = None
        return False

    def update(self, **metrics):
        self.iteration_count += 1
        if not self.enabled:
            return

        self.metrics.update(metrics)
        if self._primary_metric is None and metrics:
            self._primary_metric = next(iter(metrics))

        # Rebuilding the panel per line would dominate the runtime
        if self.iteration_count % self.update_interval == 0 and self.live:
            self.live.update(self._make_panel())

    def _make_panel(self) -> Panel:
        elapsed = time.monotonic() - self.start_time
        rows = dict(self.metrics)
        rows['Elapsed'] = elapsed
        if self._primary_metric and elapsed > 0:
            count = self.metrics.get(self._primary_metric)
            if isinstance(count, (int, float)):
                rows['Rate'] = count / elapsed

        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)
        for key, value in rows.items():
            grid.add_row(
                Text(f"{key}:", style="bold grey50"),
                Text(format_metric(key, value), style="bright_cyan"),
            )

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def format_metric(key: str, value: Any) -> str:
    """Format one panel value: MM:SS for Elapsed, lines/s for Rate, thousands separators otherwise."""
    if isinstance(value, float):
        if key == "Elapsed":
            minutes, seconds = divmod(int(value), 60)
            if minutes >= 60:
                hours, minutes = divmod(minutes, 60)
                return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
            return f"{minutes:02d}:{seconds:02d}"
        if key == "Rate":
            return f"{value:,.1f}/s"
        return f"{value:,.2f}"
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)
