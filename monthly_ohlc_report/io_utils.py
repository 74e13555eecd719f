"""Sinks for the console table, the CSV export and the chart image."""
from __future__ import annotations

import os
from typing import Iterable, Optional, Sequence, TextIO

import pandas as pd
from PIL import Image
from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

from .config import CSV_COLUMNS, TABLE_COLUMNS
from .errors import SinkError


def ensure_parent_dir(path: str) -> None:
    """Create the directory holding ``path`` if it has one."""

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_image(image: Image.Image, path: str) -> None:
    """Persist the PIL image to disk as PNG."""

    ensure_parent_dir(path)
    image.save(path, format="PNG")


class TableSink:
    """Print one month group as a header line followed by a Rich table."""

    def __init__(self, console: Optional[Console] = None, no_color: bool = False) -> None:
        self.no_color = no_color
        self.console = console or Console(
            color_system=None if no_color else "auto", no_color=no_color
        )

    def _create_table(self) -> Table:
        table = Table(box=SIMPLE, show_lines=False)
        header_style = "" if self.no_color else "bold"
        for column in TABLE_COLUMNS:
            table.add_column(column, header_style=header_style)
        return table

    def write_group(self, label: str, rows: Sequence[Sequence[str]]) -> None:
        table = self._create_table()
        for row in rows:
            table.add_row(*row)
        try:
            self.console.print()
            self.console.print(label, markup=False, highlight=False)
            self.console.print()
            self.console.print(table)
        except OSError as exc:
            raise SinkError(f"Failed to print table for {label}: {exc}") from exc


class CsvSink:
    """Append formatted rows to an already open CSV handle."""

    def __init__(self, handle: TextIO) -> None:
        self._handle = handle
        self.rows_written = 0

    def write_header(self) -> None:
        try:
            pd.DataFrame(columns=CSV_COLUMNS).to_csv(self._handle, index=False)
        except OSError as exc:
            raise SinkError(f"Failed to write CSV header: {exc}") from exc

    def write_rows(self, rows: Iterable[Sequence[str]]) -> int:
        rows = list(rows)
        if not rows:
            return 0
        frame = pd.DataFrame(rows, columns=CSV_COLUMNS)
        try:
            frame.to_csv(self._handle, header=False, index=False)
        except OSError as exc:
            raise SinkError(f"Failed to write {len(rows)} CSV row(s): {exc}") from exc
        self.rows_written += len(rows)
        return len(rows)
