"""Tests for calendar-month segmentation."""
from __future__ import annotations

import calendar
import itertools

from monthly_ohlc_report.formatting import month_label
from monthly_ohlc_report.models import Quote
from monthly_ohlc_report.segmentation import (
    SENTINEL_KEY,
    MonthCursor,
    iter_month_groups,
    segment_by_month,
    utc_month_key,
)


def utc_ts(year, month, day, hour=0, minute=0):
    return calendar.timegm((year, month, day, hour, minute, 0))


def make_quote(year, month, day, open_=10.0, close=11.0, volume=1000):
    return Quote(
        timestamp=calendar.timegm((year, month, day, 0, 0, 0)),
        open=open_,
        high=max(open_, close) + 1.0,
        low=min(open_, close) - 1.0,
        close=close,
        adjclose=close,
        volume=volume,
    )


class TestUtcMonthKey:
    def test_first_second_of_month(self):
        assert utc_month_key(utc_ts(2023, 2, 1)) == (2, 2023)

    def test_last_second_of_month_stays_in_month(self):
        assert utc_month_key(utc_ts(2023, 2, 1) - 1) == (1, 2023)

    def test_epoch(self):
        assert utc_month_key(0) == (1, 1970)


def test_empty_input_yields_no_groups():
    assert segment_by_month([]) == []


def test_single_quote_yields_singleton_group():
    quote = make_quote(2023, 5, 17)
    groups = segment_by_month([quote])
    assert len(groups) == 1
    assert groups[0].month == 5
    assert groups[0].year == 2023
    assert groups[0].members == (quote,)


def test_single_month_yields_one_group_with_all_quotes():
    quotes = [make_quote(2023, 7, d) for d in (3, 5, 6, 7, 31)]
    groups = segment_by_month(quotes)
    assert len(groups) == 1
    assert list(groups[0].members) == quotes


def test_concatenated_members_reproduce_input(quarter_quotes):
    groups = segment_by_month(quarter_quotes)
    assert [(g.month, g.year) for g in groups] == [(1, 2023), (2, 2023), (3, 2023)]
    flattened = list(itertools.chain.from_iterable(g.members for g in groups))
    assert flattened == quarter_quotes


def test_same_month_number_in_different_years_is_split():
    quotes = [make_quote(2022, 12, 30), make_quote(2023, 1, 3), make_quote(2024, 1, 2)]
    groups = segment_by_month(quotes)
    assert [month_label(g) for g in groups] == ["December 2022", "January 2023", "January 2024"]


def test_non_contiguous_repeat_starts_a_new_group():
    quotes = [
        make_quote(2023, 1, 3),
        make_quote(2023, 1, 4),
        make_quote(2023, 2, 1),
        make_quote(2023, 1, 5),
    ]
    groups = segment_by_month(quotes)

    assert [month_label(g) for g in groups] == ["January 2023", "February 2023", "January 2023"]
    assert [len(g) for g in groups] == [2, 1, 1]
    assert groups[2].members == (quotes[3],)


def test_iter_month_groups_is_lazy(quarter_quotes):
    gen = iter_month_groups(iter(quarter_quotes))
    first = next(gen)
    assert (first.month, first.year) == (1, 2023)
    assert len(list(gen)) == 2


class TestMonthCursor:
    def test_starts_at_sentinel(self):
        cursor = MonthCursor()
        assert cursor.key == SENTINEL_KEY
        assert not cursor.is_open
        assert cursor.flush() is None

    def test_advance_returns_closed_group_on_boundary(self):
        cursor = MonthCursor()
        jan = make_quote(2023, 1, 31)
        feb = make_quote(2023, 2, 1)

        assert cursor.advance(jan) is None
        closed = cursor.advance(feb)

        assert closed is not None
        assert closed.members == (jan,)
        assert cursor.key == (2, 2023)

    def test_flush_resets_to_sentinel(self):
        cursor = MonthCursor()
        cursor.advance(make_quote(2023, 1, 31))
        group = cursor.flush()
        assert group is not None and len(group) == 1
        assert cursor.key == SENTINEL_KEY
