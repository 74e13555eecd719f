"""Orchestration of the report and chart branches for one symbol."""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO

from .config import ChartConfig, ReportConfig
from .data import QuoteSource
from .errors import FetchError, QuoteExtractionError, RenderError, SinkError
from .formatting import csv_fields, month_label, table_cells
from .geometry import compute_chart_geometry
from .io_utils import CsvSink, TableSink, ensure_parent_dir, save_image
from .models import ChartSeries, Quote
from .render import render_chart
from .segmentation import iter_month_groups

LOGGER_NAME = "stock_report"


@dataclass
class PipelineResult:
    """Summary of one run."""

    symbol: str
    quotes: int = 0
    groups: int = 0
    rows_written: int = 0
    chart_path: Optional[str] = None
    errors: List[str] = field(default_factory=list)


def load_quotes(
    source: QuoteSource,
    symbol: str,
    start: dt.date,
    logger: logging.Logger,
    result: PipelineResult,
) -> List[Quote]:
    """Fetch quotes, degrading to an empty series on provider failures."""

    try:
        return list(source.fetch(symbol, start))
    except FetchError as exc:
        logger.error("Error fetching stock data: %s", exc)
        result.errors.append(str(exc))
    except QuoteExtractionError as exc:
        logger.error("Error getting quotes: %s", exc)
        result.errors.append(str(exc))
    return []


def _open_csv(path: str, logger: logging.Logger, result: PipelineResult) -> Optional[TextIO]:
    try:
        ensure_parent_dir(path)
        return open(path, "w", newline="", encoding="utf-8")
    except OSError as exc:
        logger.error("Error creating CSV file %s: %s", path, exc)
        result.errors.append(str(exc))
        return None


def write_report(
    quotes: Sequence[Quote],
    report_cfg: ReportConfig,
    table_sink: TableSink,
    logger: logging.Logger,
    result: PipelineResult,
) -> None:
    """Print one table per month group and append every quote to the CSV file."""

    handle = _open_csv(report_cfg.csv_path, logger, result)
    try:
        csv_sink = CsvSink(handle) if handle is not None else None
        if csv_sink is not None and report_cfg.csv_header:
            try:
                csv_sink.write_header()
            except SinkError as exc:
                logger.error("%s", exc)
                result.errors.append(str(exc))

        for group in iter_month_groups(quotes):
            result.groups += 1
            label = month_label(group)
            logger.debug("Month group %s with %d quote(s).", label, len(group))

            try:
                table_sink.write_group(label, [table_cells(q) for q in group.members])
            except SinkError as exc:
                logger.error("%s", exc)
                result.errors.append(str(exc))

            if csv_sink is None:
                continue
            try:
                result.rows_written += csv_sink.write_rows(csv_fields(q) for q in group.members)
            except SinkError as exc:
                logger.error("%s", exc)
                result.errors.append(str(exc))
    finally:
        if handle is not None:
            handle.close()

    if handle is not None:
        logger.info("Wrote %d row(s) to %s", result.rows_written, report_cfg.csv_path)


def draw_chart(
    symbol: str,
    quotes: Sequence[Quote],
    chart_cfg: ChartConfig,
    path: str,
    logger: logging.Logger,
) -> Optional[str]:
    """Render the full quote sequence as a candlestick chart.

    Returns the image path, or ``None`` when there was nothing to draw.

    Raises:
        RenderError: If drawing or saving the image fails.
    """

    series = ChartSeries.from_quotes(quotes)
    geometry = compute_chart_geometry(series, chart_cfg)
    if geometry.is_degenerate:
        logger.info("No chartable quotes for %s; skipping %s.", symbol, path)
        return None

    image = render_chart(geometry, chart_cfg, title=f"{symbol} Stock Chart")
    try:
        save_image(image, path)
    except (OSError, ValueError) as exc:
        raise RenderError(f"Failed to save chart to {path}: {exc}") from exc
    logger.info("Saved chart %s", path)
    return path


def run_pipeline(
    symbol: str,
    start: dt.date,
    source: QuoteSource,
    report_cfg: Optional[ReportConfig] = None,
    chart_cfg: Optional[ChartConfig] = None,
    table_sink: Optional[TableSink] = None,
    logger: Optional[logging.Logger] = None,
) -> PipelineResult:
    """Fetch quotes for ``symbol`` and produce the report, CSV export and chart."""

    report_cfg = report_cfg or ReportConfig()
    chart_cfg = chart_cfg or ChartConfig()
    table_sink = table_sink or TableSink()
    logger = logger or logging.getLogger(LOGGER_NAME)
    result = PipelineResult(symbol=symbol)

    logger.info("Fetching data for %s from %s", symbol, start.isoformat())
    quotes = load_quotes(source, symbol, start, logger, result)
    result.quotes = len(quotes)
    if not quotes:
        logger.warning("No quotes available for %s.", symbol)

    write_report(quotes, report_cfg, table_sink, logger, result)

    if not report_cfg.render_chart:
        return result
    try:
        result.chart_path = draw_chart(symbol, quotes, chart_cfg, report_cfg.chart_path, logger)
    except RenderError as exc:
        logger.error("Error plotting candlestick chart: %s", exc)
        result.errors.append(str(exc))

    return result
