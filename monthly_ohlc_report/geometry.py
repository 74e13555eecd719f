"""Chart geometry for candlestick rendering.

Everything a renderer needs is computed here: the axis domains, one primitive
per candle and the labelled x ticks. No drawing happens in this module.
"""
from __future__ import annotations

import datetime as dt
import math
import warnings
from dataclasses import dataclass
from datetime import tzinfo
from typing import List, Optional, Tuple

import numpy as np
from dateutil import tz

from .config import INVALID_DATE_LABEL, ChartConfig
from .models import ChartSeries


@dataclass(frozen=True)
class AxisDomain:
    """Closed numeric range an axis must span."""

    lower: float
    upper: float

    @property
    def is_degenerate(self) -> bool:
        return math.isnan(self.lower) or math.isnan(self.upper)

    def as_tuple(self) -> Tuple[float, float]:
        return self.lower, self.upper


@dataclass(frozen=True)
class Candle:
    x: float
    open: float
    high: float
    low: float
    close: float
    bullish: bool
    color: str


@dataclass(frozen=True)
class ChartGeometry:
    x_domain: AxisDomain
    y_domain: AxisDomain
    candles: Tuple[Candle, ...]
    candle_width: float
    wick_width: float
    x_ticks: Tuple[Tuple[float, str], ...]

    @property
    def is_empty(self) -> bool:
        return not self.candles

    @property
    def is_degenerate(self) -> bool:
        return self.is_empty or self.x_domain.is_degenerate or self.y_domain.is_degenerate


def is_bullish(open_price: float, close_price: float) -> bool:
    """A candle is bullish when it closes at or above its open."""

    return close_price >= open_price


def _nan_extreme(values: np.ndarray, reducer) -> float:
    if values.size == 0:
        return float("nan")
    # All-NaN input yields NaN, which marks the domain degenerate.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        return float(reducer(values))


def x_domain(series: ChartSeries) -> AxisDomain:
    """Linear time domain in raw epoch seconds, gaps included."""

    timestamps = series.timestamps.astype(float)
    return AxisDomain(_nan_extreme(timestamps, np.nanmin), _nan_extreme(timestamps, np.nanmax))


def y_domain(series: ChartSeries) -> AxisDomain:
    """Price domain from the lowest low to the highest high."""

    return AxisDomain(_nan_extreme(series.lows, np.nanmin), _nan_extreme(series.highs, np.nanmax))


def local_tick_label(timestamp: float, local_tz: Optional[tzinfo] = None) -> str:
    """Label an x tick as ``YYYY-MM-DD`` on the local calendar.

    The UTC wall-clock time of ``timestamp`` is read as a local time. Wall
    times that the local zone skips or repeats around a DST change, and
    timestamps outside the platform's range, produce ``INVALID_DATE_LABEL``.
    """

    zone = local_tz if local_tz is not None else tz.tzlocal()
    try:
        wall = dt.datetime.fromtimestamp(int(timestamp), tz=tz.UTC).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE_LABEL

    if not tz.datetime_exists(wall, tz=zone) or tz.datetime_ambiguous(wall, tz=zone):
        return INVALID_DATE_LABEL
    return wall.replace(tzinfo=zone).strftime("%Y-%m-%d")


def tick_positions(domain: AxisDomain, count: int) -> List[float]:
    """Evenly spaced tick values across ``domain``."""

    if domain.is_degenerate or count <= 0:
        return []
    if domain.lower == domain.upper or count == 1:
        return [domain.lower]
    return [float(v) for v in np.linspace(domain.lower, domain.upper, count)]


def compute_chart_geometry(
    series: ChartSeries,
    cfg: ChartConfig,
    local_tz: Optional[tzinfo] = None,
) -> ChartGeometry:
    """Map a chart series to axis domains, candles and x tick labels."""

    candles = []
    for ts, open_, high, low, close in zip(
        series.timestamps, series.opens, series.highs, series.lows, series.closes
    ):
        bullish = is_bullish(float(open_), float(close))
        candles.append(
            Candle(
                x=float(ts),
                open=float(open_),
                high=float(high),
                low=float(low),
                close=float(close),
                bullish=bullish,
                color=cfg.up_color if bullish else cfg.down_color,
            )
        )

    x_dom = x_domain(series)
    ticks = tuple(
        (value, local_tick_label(value, local_tz))
        for value in tick_positions(x_dom, cfg.x_labels)
    )

    return ChartGeometry(
        x_domain=x_dom,
        y_domain=y_domain(series),
        candles=tuple(candles),
        candle_width=cfg.candle_width,
        wick_width=cfg.wick_width,
        x_ticks=ticks,
    )
