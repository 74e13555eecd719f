"""Configuration objects and shared constants for the monthly OHLC report."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, List

TABLE_COLUMNS: Final[List[str]] = [
    "Date",
    "Open",
    "High",
    "Low",
    "Volume",
    "Close",
    "AdjClose",
]
CSV_COLUMNS: Final[List[str]] = list(TABLE_COLUMNS)

DEFAULT_CSV_PATH: Final[str] = "stock_data.csv"
DEFAULT_CHART_PATH: Final[str] = "candlestick_chart.png"

INVALID_DATE_LABEL: Final[str] = "Invalid Date"


@dataclass(frozen=True)
class ChartConfig:
    """Container for chart rendering configuration."""

    width: int = 1920
    height: int = 1080
    dpi: int = 100
    bg: str = "white"
    up_color: str = "green"
    down_color: str = "red"
    # Body width in days on the calendar axis; wick width in points.
    candle_width: float = 0.6
    wick_width: float = 1.0
    x_labels: int = 10
    caption_size: int = 30


@dataclass(frozen=True)
class ReportConfig:
    """Where the report branch writes and how."""

    csv_path: str = DEFAULT_CSV_PATH
    chart_path: str = DEFAULT_CHART_PATH
    csv_header: bool = False
    render_chart: bool = True
