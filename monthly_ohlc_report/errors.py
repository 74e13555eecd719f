"""Exception types raised by the report pipeline."""
from __future__ import annotations


class StockReportError(Exception):
    """Base class for every recoverable pipeline failure."""


class InputParseError(StockReportError, ValueError):
    """The user supplied a symbol or date that cannot be used."""


class FetchError(StockReportError):
    """The quote source could not be reached or returned an error."""


class QuoteExtractionError(StockReportError):
    """The quote source answered but carried no usable quotes."""


class SinkError(StockReportError):
    """Writing rows to the console table or the CSV file failed."""


class RenderError(StockReportError):
    """Drawing or encoding the chart image failed."""
