"""Display formatting for report rows.

Table cells and CSV fields are built by separate calls on purpose: the table
shows volume as a grouped integer while the CSV keeps the two-decimal form.
"""
from __future__ import annotations

import calendar
import datetime as dt
from typing import Tuple

from dateutil import tz

from .models import MonthGroup, Quote

Row = Tuple[str, str, str, str, str, str, str]


def format_price(value: float) -> str:
    """Two fixed decimals, ties rounded to even on the exact binary value."""

    return format(value, ".2f")


def format_date_utc(timestamp: int) -> str:
    """Render an epoch timestamp as ``MM-DD-YYYY`` on the UTC calendar."""

    return dt.datetime.fromtimestamp(timestamp, tz=tz.UTC).strftime("%m-%d-%Y")


def format_grouped_volume(volume: int) -> str:
    """Integer volume with comma thousands separators."""

    return format(int(volume), ",")


def format_csv_volume(volume: int) -> str:
    """Volume as two-decimal text for the CSV export."""

    return format(float(volume), ".2f")


def month_name(month: int) -> str:
    """English month name, or an empty string outside 1..12."""

    if 1 <= month <= 12:
        return calendar.month_name[month]
    return ""


def month_label(group: MonthGroup) -> str:
    """Header line for a group, e.g. ``January 2023``."""

    return f"{month_name(group.month)} {group.year}"


def table_cells(quote: Quote) -> Row:
    """Cells for one console table row: date, open, high, low, volume, close, adjclose."""

    return (
        format_date_utc(quote.timestamp),
        format_price(quote.open),
        format_price(quote.high),
        format_price(quote.low),
        format_grouped_volume(quote.volume),
        format_price(quote.close),
        format_price(quote.adjclose),
    )


def csv_fields(quote: Quote) -> Row:
    """Fields for one CSV record, same column order as :func:`table_cells`."""

    return (
        format_date_utc(quote.timestamp),
        format_price(quote.open),
        format_price(quote.high),
        format_price(quote.low),
        format_csv_volume(quote.volume),
        format_price(quote.close),
        format_price(quote.adjclose),
    )
