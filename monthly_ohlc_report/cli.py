"""Command line interface for the monthly stock report.

Example usage
-------------

* Report, CSV export and chart for Microsoft since 2023::

    python make_stock_report.py --symbol MSFT --start 2023-01-01

* Prompt for symbol and start date, write the CSV with a header row::

    python make_stock_report.py --csv-header --csv-path ./out/stock_data.csv
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich.prompt import Prompt

from .config import DEFAULT_CHART_PATH, DEFAULT_CSV_PATH, ChartConfig, ReportConfig
from .data import YahooQuoteSource, parse_start_date, parse_symbol
from .errors import InputParseError
from .io_utils import TableSink
from .pipeline import LOGGER_NAME, PipelineResult, run_pipeline


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Print a month-by-month OHLC report, export it to CSV and chart it."
    )
    parser.add_argument("--symbol", help="Stock symbol (e.g. MSFT). Prompted when omitted.")
    parser.add_argument(
        "--start", help="Start date (YYYY-MM-DD, inclusive). Prompted when omitted."
    )
    parser.add_argument("--csv-path", default=DEFAULT_CSV_PATH, help="CSV export path.")
    parser.add_argument("--chart-path", default=DEFAULT_CHART_PATH, help="Chart PNG path.")
    parser.add_argument(
        "--csv-header",
        action="store_true",
        help="Write a Date,Open,High,Low,Volume,Close,AdjClose header row.",
    )
    parser.add_argument("--no-chart", action="store_true", help="Skip the candlestick chart.")
    parser.add_argument("--no-color", action="store_true", help="Plain console output.")
    parser.add_argument("--up-color", default="green", help="Colour for up candles.")
    parser.add_argument("--down-color", default="red", help="Colour for down candles.")
    parser.add_argument("--width", type=int, default=1920, help="Chart width in pixels.")
    parser.add_argument("--height", type=int, default=1080, help="Chart height in pixels.")
    parser.add_argument("--dpi", type=int, default=100, help="Figure DPI.")
    parser.add_argument(
        "--x-labels", type=int, default=10, help="Number of date labels on the time axis."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser.parse_args(argv)


def _resolve_inputs(args: argparse.Namespace):
    symbol = args.symbol
    if symbol is None:
        symbol = Prompt.ask("Enter the stock symbol (e.g., MSFT)")
    start = args.start
    if start is None:
        start = Prompt.ask("Enter the start date (YYYY-MM-DD)")
    return parse_symbol(symbol), parse_start_date(start)


def run(argv: Optional[List[str]] = None) -> PipelineResult:
    """Parse arguments, resolve inputs and run the pipeline once."""

    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    logger = logging.getLogger(LOGGER_NAME)

    try:
        symbol, start = _resolve_inputs(args)
    except InputParseError as exc:
        raise SystemExit(f"Invalid input: {exc}")

    report_cfg = ReportConfig(
        csv_path=args.csv_path,
        chart_path=args.chart_path,
        csv_header=args.csv_header,
        render_chart=not args.no_chart,
    )
    chart_cfg = ChartConfig(
        width=args.width,
        height=args.height,
        dpi=args.dpi,
        up_color=args.up_color,
        down_color=args.down_color,
        x_labels=args.x_labels,
    )

    result = run_pipeline(
        symbol,
        start,
        YahooQuoteSource(),
        report_cfg=report_cfg,
        chart_cfg=chart_cfg,
        table_sink=TableSink(no_color=args.no_color),
        logger=logger,
    )

    logger.info(
        "Processed %d quote(s) in %d month group(s) with %d error(s).",
        result.quotes,
        result.groups,
        len(result.errors),
    )
    return result


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI utility."""

    run(argv)
