from __future__ import annotations

import calendar
from typing import List

import pytest

from monthly_ohlc_report.models import Quote


def _utc_ts(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    return calendar.timegm((year, month, day, hour, minute, 0))


def _make_quote(year: int, month: int, day: int, open_=10.0, close=11.0, volume=1000) -> Quote:
    return Quote(
        timestamp=_utc_ts(year, month, day),
        open=open_,
        high=max(open_, close) + 1.0,
        low=min(open_, close) - 1.0,
        close=close,
        adjclose=close,
        volume=volume,
    )


@pytest.fixture
def quarter_quotes() -> List[Quote]:
    """Three quotes in each of Jan, Feb and Mar 2023."""
    days = [(1, 3), (1, 4), (1, 31), (2, 1), (2, 14), (2, 28), (3, 1), (3, 2), (3, 31)]
    return [_make_quote(2023, m, d, open_=10.0 + i, close=10.5 + i) for i, (m, d) in enumerate(days)]
