"""Month-by-month OHLC reports, CSV exports and candlestick charts."""
from .config import CSV_COLUMNS, TABLE_COLUMNS, ChartConfig, ReportConfig
from .data import QuoteSource, YahooQuoteSource, parse_start_date, quotes_from_frame
from .errors import (
    FetchError,
    InputParseError,
    QuoteExtractionError,
    RenderError,
    SinkError,
    StockReportError,
)
from .formatting import csv_fields, month_label, table_cells
from .geometry import ChartGeometry, compute_chart_geometry, is_bullish, local_tick_label
from .models import ChartSeries, MonthGroup, Quote
from .pipeline import PipelineResult, run_pipeline
from .render import render_chart
from .segmentation import iter_month_groups, segment_by_month

__all__ = [
    "CSV_COLUMNS",
    "TABLE_COLUMNS",
    "ChartConfig",
    "ReportConfig",
    "QuoteSource",
    "YahooQuoteSource",
    "parse_start_date",
    "quotes_from_frame",
    "StockReportError",
    "InputParseError",
    "FetchError",
    "QuoteExtractionError",
    "SinkError",
    "RenderError",
    "csv_fields",
    "month_label",
    "table_cells",
    "ChartGeometry",
    "compute_chart_geometry",
    "is_bullish",
    "local_tick_label",
    "ChartSeries",
    "MonthGroup",
    "Quote",
    "PipelineResult",
    "run_pipeline",
    "render_chart",
    "iter_month_groups",
    "segment_by_month",
]
