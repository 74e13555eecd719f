"""Value objects shared by the segmentation, formatting and chart stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

import numpy as np


@dataclass(frozen=True)
class Quote:
    """One trading day of OHLC data keyed by its UTC epoch timestamp."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    adjclose: float
    volume: int


@dataclass(frozen=True)
class MonthGroup:
    """A contiguous run of quotes that share one (month, year) key."""

    month: int
    year: int
    members: Tuple[Quote, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class ChartSeries:
    """Parallel arrays of the full quote sequence used for chart geometry."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray

    @classmethod
    def from_quotes(cls, quotes: Iterable[Quote]) -> "ChartSeries":
        quotes = list(quotes)
        return cls(
            timestamps=np.array([q.timestamp for q in quotes], dtype=np.int64),
            opens=np.array([q.open for q in quotes], dtype=float),
            highs=np.array([q.high for q in quotes], dtype=float),
            lows=np.array([q.low for q in quotes], dtype=float),
            closes=np.array([q.close for q in quotes], dtype=float),
        )

    def __len__(self) -> int:
        return int(self.timestamps.shape[0])
