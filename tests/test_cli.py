import calendar

import pytest

from monthly_ohlc_report import cli
from monthly_ohlc_report.models import Quote


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


class StubSource:
    def fetch(self, symbol, start):
        return [make_quote(2023, 1, 3), make_quote(2023, 2, 1)]


@pytest.fixture
def stub_source(monkeypatch):
    monkeypatch.setattr(cli, "YahooQuoteSource", StubSource)


def test_run_with_flags(stub_source, tmp_path):
    csv_path = tmp_path / "stock_data.csv"
    result = cli.run(
        [
            "--symbol", "MSFT",
            "--start", "2023-01-01",
            "--csv-path", str(csv_path),
            "--no-chart",
            "--no-color",
        ]
    )
    assert result.symbol == "MSFT"
    assert result.groups == 2
    assert len(csv_path.read_text().splitlines()) == 2


def test_missing_flags_are_prompted(stub_source, monkeypatch, tmp_path):
    answers = iter(["AAPL", "2023-01-01"])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(answers))
    result = cli.run(["--csv-path", str(tmp_path / "d.csv"), "--no-chart"])
    assert result.symbol == "AAPL"


def test_invalid_start_date_exits(stub_source):
    with pytest.raises(SystemExit):
        cli.run(["--symbol", "MSFT", "--start", "01/02/2023", "--no-chart"])


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert args.csv_path == "stock_data.csv"
    assert args.chart_path == "candlestick_chart.png"
    assert args.width == 1920 and args.height == 1080
    assert args.csv_header is False
