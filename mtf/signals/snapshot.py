"""
Per-timeframe indicator snapshots.

A snapshot reduces one close series (daily, weekly or monthly) to the
discrete signals the scorer consumes, read at the latest bar.
"""
from dataclasses import dataclass
from typing import Optional, Union

import pandas as pd

from ..indicators.technical import TechnicalIndicators
from ..shared.types import MacdSignal, RsiSignal, Timeframe, Trend
from .config import IndicatorConfig


@dataclass(frozen=True)
class TimeframeSnapshot:
    """Indicator state of one timeframe at its latest bar."""
    timeframe: Timeframe
    price: float
    trend: Trend
    macd_signal: MacdSignal
    rsi_value: Optional[float]  # None while RSI is warming up
    rsi_signal: RsiSignal
    bar_count: int

    @property
    def label(self) -> str:
        return self.timeframe.value.capitalize()


def classify_trend(fast, slow) -> Trend:
    """UP if fast SMA > slow SMA, DOWN otherwise; NEUTRAL if either is undefined."""
    if fast is None or slow is None or pd.isna(fast) or pd.isna(slow):
        return Trend.NEUTRAL
    return Trend.UP if fast > slow else Trend.DOWN


def classify_macd(histogram: float) -> MacdSignal:
    return MacdSignal.BULLISH if histogram > 0 else MacdSignal.BEARISH


def classify_rsi(value: Optional[float], oversold: float, overbought: float) -> RsiSignal:
    """Undefined RSI is NEUTRAL, never oversold."""
    if value is None:
        return RsiSignal.NEUTRAL
    if value < oversold:
        return RsiSignal.OVERSOLD
    if value > overbought:
        return RsiSignal.OVERBOUGHT
    return RsiSignal.NEUTRAL


def analyze_timeframe(
    bars: Union[pd.DataFrame, pd.Series],
    timeframe: Timeframe,
    config: Optional[IndicatorConfig] = None,
) -> TimeframeSnapshot:
    """
    Build the snapshot for one timeframe.

    The slow SMA window is capped at a quarter of the available bars; the
    fast window is never changed. On sparse series (e.g. a few years of
    monthly bars) the slow window can end up shorter than the fast one, and
    with fewer bars than the fast window the trend is NEUTRAL.

    Args:
        bars: DataFrame with a Close column, or a close Series
        timeframe: Which timeframe these bars represent
        config: Indicator parameters (default: IndicatorConfig())

    Raises:
        ValueError: If there are no bars
    """
    config = config or IndicatorConfig()
    closes = bars["Close"] if isinstance(bars, pd.DataFrame) else bars
    if len(closes) == 0:
        raise ValueError(f"Cannot analyze {timeframe.value} timeframe: no bars")

    slow_period = min(config.sma_slow_period, len(closes) // 4)
    indicators = TechnicalIndicators(
        rsi_period=config.rsi_period,
        rsi_oversold=config.rsi_oversold,
        rsi_overbought=config.rsi_overbought,
        sma_fast_period=config.sma_fast_period,
        sma_slow_period=max(1, slow_period),
        macd_fast=config.macd_fast,
        macd_slow=config.macd_slow,
        macd_signal=config.macd_signal,
    )
    row = indicators.calculate_all(closes).iloc[-1]

    rsi_value = None if pd.isna(row["rsi"]) else float(row["rsi"])
    # Fewer than 4 bars: no slow window at all
    slow_sma = row["sma_slow"] if slow_period >= 1 else None
    return TimeframeSnapshot(
        timeframe=timeframe,
        price=float(row["price"]),
        trend=classify_trend(row["sma_fast"], slow_sma),
        macd_signal=classify_macd(row["macd_histogram"]),
        rsi_value=rsi_value,
        rsi_signal=classify_rsi(rsi_value, config.rsi_oversold, config.rsi_overbought),
        bar_count=len(closes),
    )
