"""Quote acquisition and user input parsing."""
from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Final, List, Optional, Protocol

import pandas as pd
from dateutil import tz
import yfinance as yf

from .errors import FetchError, InputParseError, QuoteExtractionError
from .models import Quote

PRICE_COLUMNS: Final[List[str]] = ["Open", "High", "Low", "Close"]
REQUIRED_COLUMNS: Final[List[str]] = PRICE_COLUMNS + ["Volume"]
ADJ_CLOSE_COLUMN: Final[str] = "Adj Close"

logger = logging.getLogger(__name__)


class QuoteSource(Protocol):
    """Anything that can supply daily quotes for a symbol."""

    def fetch(self, symbol: str, start: dt.date) -> List[Quote]:
        """Return quotes from ``start`` onwards, ascending by timestamp.

        Raises:
            FetchError: The provider could not be queried.
            QuoteExtractionError: The provider answered without usable quotes.
        """
        ...


def parse_start_date(value: str) -> dt.date:
    """Parse a ``YYYY-MM-DD`` start date."""

    try:
        return dt.datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise InputParseError(f"Invalid start date {value!r}, expected YYYY-MM-DD") from exc


def parse_symbol(value: str) -> str:
    """Strip the symbol and reject an empty one."""

    symbol = (value or "").strip()
    if not symbol:
        raise InputParseError("Stock symbol must not be empty")
    return symbol


def _volume(value: object) -> int:
    """Share count as an int, with a missing volume counted as zero."""

    volume = float(value)
    if math.isnan(volume):
        return 0
    return int(volume)


def quotes_from_frame(df: Optional[pd.DataFrame]) -> List[Quote]:
    """Convert a Yahoo Finance style OHLCV frame into quotes.

    The index is normalised to UTC, duplicate bars are dropped and rows missing
    any OHLC price are skipped. ``Adj Close`` falls back to ``Close`` when the
    provider omits it.
    """

    if df is None or df.empty:
        raise QuoteExtractionError("Response carried no quotes.")

    df = df.copy()
    # Flatten MultiIndex columns (yfinance wraps cols for multi-ticker support)
    if isinstance(df.columns, pd.MultiIndex):
        df.columns = df.columns.get_level_values(0)

    missing_cols = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_cols:
        raise QuoteExtractionError(f"Response missing required columns: {missing_cols}")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise QuoteExtractionError("Expected a DatetimeIndex on the quote frame.")

    if ADJ_CLOSE_COLUMN not in df.columns:
        logger.debug("No %r column in response, using Close.", ADJ_CLOSE_COLUMN)
        df[ADJ_CLOSE_COLUMN] = df["Close"]

    if df.index.tz is None:
        df.index = df.index.tz_localize(tz.UTC)
    else:
        df.index = df.index.tz_convert(tz.UTC)
    df = df[~df.index.duplicated(keep="first")]
    df = df.sort_index()
    # NaN prices are dropped on purpose here at the source. Quotes built by
    # other sources still carry NaN through formatting and charting unchecked.
    df = df.dropna(subset=PRICE_COLUMNS)

    if df.empty:
        raise QuoteExtractionError("Response carried no complete OHLC rows.")

    quotes = [
        Quote(
            timestamp=int(ts.timestamp()),
            open=float(row["Open"]),
            high=float(row["High"]),
            low=float(row["Low"]),
            close=float(row["Close"]),
            adjclose=float(row[ADJ_CLOSE_COLUMN]),
            volume=_volume(row["Volume"]),
        )
        for ts, row in df.iterrows()
    ]
    return quotes


class YahooQuoteSource:
    """Daily quotes from Yahoo Finance through ``yfinance``."""

    def __init__(self, interval: str = "1d") -> None:
        self.interval = interval

    def fetch(self, symbol: str, start: dt.date) -> List[Quote]:
        try:
            df = yf.download(
                symbol,
                start=start.isoformat(),
                interval=self.interval,
                auto_adjust=False,
                actions=False,
                prepost=False,
                progress=False,
            )
        except Exception as exc:
            raise FetchError(f"Failed to download data for {symbol!r}: {exc}") from exc

        quotes = quotes_from_frame(df)
        logger.info("Downloaded %d quote(s) for %s.", len(quotes), symbol)
        return quotes
