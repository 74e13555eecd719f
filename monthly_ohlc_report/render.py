"""Rendering of precomputed chart geometry into a fixed-size PIL image."""
from __future__ import annotations

import io
from typing import Sequence, Tuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import mplfinance as mpf
import pandas as pd
from PIL import Image

from .config import ChartConfig
from .errors import RenderError
from .geometry import AxisDomain, ChartGeometry


def _limits(domain: AxisDomain, pad: float) -> Tuple[float, float]:
    """Axis limits, widened when the domain collapses to a single value."""

    lower, upper = domain.as_tuple()
    if lower == upper:
        return lower - pad, upper + pad
    return lower, upper


def _epoch_to_mdate(seconds: float) -> float:
    """Convert raw epoch seconds to a matplotlib date number."""

    return float(mdates.date2num(pd.to_datetime(seconds, unit="s").to_pydatetime()))


def _candles_frame(geometry: ChartGeometry) -> pd.DataFrame:
    """Rebuild an OHLC frame with a DatetimeIndex from the candle primitives."""

    candles = geometry.candles
    index = pd.DatetimeIndex(pd.to_datetime([c.x for c in candles], unit="s"), name="Date")
    return pd.DataFrame(
        {
            "Open": [c.open for c in candles],
            "High": [c.high for c in candles],
            "Low": [c.low for c in candles],
            "Close": [c.close for c in candles],
        },
        index=index,
    )


def _draw(geometry: ChartGeometry, cfg: ChartConfig, title: str) -> bytes:
    market_colors = mpf.make_marketcolors(
        up=cfg.up_color,
        down=cfg.down_color,
        edge="inherit",
        wick="inherit",
    )
    rc = {
        "axes.facecolor": cfg.bg,
        "figure.facecolor": cfg.bg,
        "savefig.facecolor": cfg.bg,
    }
    style = mpf.make_mpf_style(marketcolors=market_colors, rc=rc)
    df = _candles_frame(geometry)

    fig, axes = mpf.plot(
        df,
        type="candle",
        style=style,
        show_nontrading=True,
        # Colours come from the bullish rule in the geometry, candle by candle.
        marketcolor_overrides=[c.color for c in geometry.candles],
        figsize=(cfg.width / cfg.dpi, cfg.height / cfg.dpi),
        ylim=_limits(geometry.y_domain, 0.5),
        update_width_config={
            "candle_width": geometry.candle_width,
            "candle_linewidth": geometry.wick_width,
        },
        warn_too_much_data=len(df) + 1,
        returnfig=True,
    )
    try:
        axes_iter: Sequence = axes if isinstance(axes, Sequence) else [axes]
        ax = axes_iter[0]
        fig.suptitle(title, fontsize=cfg.caption_size)

        lower, upper = _limits(geometry.x_domain, 86400.0)
        ax.set_xlim(_epoch_to_mdate(lower), _epoch_to_mdate(upper))
        ax.set_xticks([_epoch_to_mdate(value) for value, _ in geometry.x_ticks])
        ax.set_xticklabels([label for _, label in geometry.x_ticks])

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=cfg.dpi, facecolor=cfg.bg)
        return buf.getvalue()
    finally:
        plt.close(fig)


def render_chart(geometry: ChartGeometry, cfg: ChartConfig, title: str) -> Image.Image:
    """Render candlestick geometry into an RGB image of ``cfg.width`` x ``cfg.height``.

    Raises:
        RenderError: If the geometry has nothing to draw or the backend fails.
    """

    if geometry.is_degenerate:
        raise RenderError("Chart geometry is degenerate; nothing to draw.")

    try:
        png = _draw(geometry, cfg, title)
        image = Image.open(io.BytesIO(png)).convert("RGB")
    except Exception as exc:
        raise RenderError(f"Failed to render chart {title!r}: {exc}") from exc

    if image.size != (cfg.width, cfg.height):
        image = image.resize((cfg.width, cfg.height), Image.Resampling.BICUBIC)
    return image
