"""Calendar-month segmentation of an ordered quote sequence.

Groups are formed by detecting changes of the UTC (month, year) key while
walking the sequence once. A key that reappears after a different key opens a
new group with the same label instead of being merged into the earlier one,
so the output mirrors the input order exactly.
"""
from __future__ import annotations

import datetime as dt
from typing import Generator, Iterable, List, Optional, Tuple

from dateutil import tz

from .models import MonthGroup, Quote

MonthKey = Tuple[int, int]

# (0, 0) never matches a real calendar date.
SENTINEL_KEY: MonthKey = (0, 0)


def utc_month_key(timestamp: int) -> MonthKey:
    """Return the (month, year) of an epoch timestamp on the UTC calendar."""

    moment = dt.datetime.fromtimestamp(timestamp, tz=tz.UTC)
    return moment.month, moment.year


class MonthCursor:
    """Tracks the month currently being collected during one segmentation pass."""

    def __init__(self) -> None:
        self.key: MonthKey = SENTINEL_KEY
        self._members: List[Quote] = []

    @property
    def is_open(self) -> bool:
        return self.key != SENTINEL_KEY

    def advance(self, quote: Quote) -> Optional[MonthGroup]:
        """Consume ``quote`` and return the group it closed, if any."""

        key = utc_month_key(quote.timestamp)
        if key == self.key:
            self._members.append(quote)
            return None

        closed = self.flush()
        self.key = key
        self._members = [quote]
        return closed

    def flush(self) -> Optional[MonthGroup]:
        """Close the open group and hand it back."""

        if not self.is_open:
            return None
        month, year = self.key
        group = MonthGroup(month=month, year=year, members=tuple(self._members))
        self.key = SENTINEL_KEY
        self._members = []
        return group


def iter_month_groups(quotes: Iterable[Quote]) -> Generator[MonthGroup, None, None]:
    """Yield month groups lazily in input order."""

    cursor = MonthCursor()
    for quote in quotes:
        closed = cursor.advance(quote)
        if closed is not None:
            yield closed

    last = cursor.flush()
    if last is not None:
        yield last


def segment_by_month(quotes: Iterable[Quote]) -> List[MonthGroup]:
    """Partition ``quotes`` into contiguous calendar-month groups.

    Args:
        quotes: Quotes sorted ascending by timestamp. The order is trusted and
            never re-sorted here.

    Returns:
        Month groups in the order their first member appears.
    """

    return list(iter_month_groups(quotes))
