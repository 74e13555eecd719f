#!/usr/bin/env python3
"""make_stock_report.py
=================================

Entry-point script that downloads daily quotes for one symbol from Yahoo
Finance, prints them as one table per calendar month, exports every quote to
``stock_data.csv`` and draws ``candlestick_chart.png``. The logic lives in the
``monthly_ohlc_report`` package.

Example usage
-------------

    python make_stock_report.py --symbol MSFT --start 2023-01-01

The script requires the following packages: ``yfinance``, ``pandas``, ``numpy``,
``matplotlib``, ``pillow``, ``python-dateutil`` and ``rich``.
"""
from __future__ import annotations

from monthly_ohlc_report.cli import main


if __name__ == "__main__":
    main()
