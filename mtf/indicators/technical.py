"""
Technical indicators for multi-timeframe scoring.

Provides SMA, EMA, RSI and MACD as pure functions over an ordered price
sequence, plus a small calculator that bundles them into one DataFrame.

Warm-up entries are ``pd.NA`` in a nullable ``Float64`` series (SMA, RSI).
EMA and MACD are seeded at the first price and are defined everywhere.
"""
from typing import NamedTuple, Sequence, Union

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from ..shared.defaults import (
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    SMA_FAST_PERIOD, SMA_SLOW_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
)

PriceInput = Union[pd.Series, np.ndarray, Sequence[float]]

# RS used when a window has no losses (gives RSI = 100 - 100/101, not 100)
ZERO_LOSS_RS = 100.0


class MacdResult(NamedTuple):
    """MACD line, signal line and histogram, all aligned with the input."""
    line: pd.Series
    signal: pd.Series
    histogram: pd.Series


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def _as_series(prices: PriceInput) -> pd.Series:
    """Copy input into a float64 Series (keeps the index of a Series)."""
    if isinstance(prices, pd.Series):
        return prices.astype(np.float64)
    return pd.Series(np.asarray(prices, dtype=np.float64))


def sma(prices: PriceInput, period: int) -> pd.Series:
    """
    Simple Moving Average.

    Returns:
        Float64 series; ``<NA>`` for the first ``period - 1`` entries
    """
    _check_period(period)
    series = _as_series(prices)
    out = series.rolling(window=period, min_periods=period).mean()
    return out.astype("Float64").rename(f"sma_{period}")


def ema(prices: PriceInput, period: int) -> pd.Series:
    """
    Exponential Moving Average seeded with the first price.

    multiplier = 2 / (period + 1); out[0] = prices[0]. The seed biases early
    values toward the first price; there is no warm-up gap.
    """
    _check_period(period)
    series = _as_series(prices)
    return series.ewm(span=period, adjust=False).mean().rename(f"ema_{period}")


def rsi(prices: PriceInput, period: int = RSI_PERIOD) -> pd.Series:
    """
    Calculate Relative Strength Index (RSI).

    Gains and losses are summed over the trailing ``period`` deltas at every
    index (no Wilder smoothing). RS = gains / losses, or 100 when the window
    has no losses.

    RSI = 100 - (100 / (1 + RS))

    Returns:
        Float64 series; ``<NA>`` for the first ``period`` entries
    """
    _check_period(period)
    series = _as_series(prices)
    values = series.to_numpy(dtype=np.float64)
    out = np.full(len(values), np.nan)

    if len(values) > period:
        deltas = np.diff(values)
        windows = sliding_window_view(deltas, period)
        gains = np.where(windows > 0, windows, 0.0).sum(axis=1)
        losses = np.where(windows < 0, -windows, 0.0).sum(axis=1)
        rs = np.full(len(gains), ZERO_LOSS_RS)
        np.divide(gains, losses, out=rs, where=losses != 0)
        out[period:] = 100.0 - 100.0 / (1.0 + rs)

    return pd.Series(out, index=series.index, name="rsi").astype("Float64")


def macd(
    prices: PriceInput,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> MacdResult:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    Returns:
        MacdResult of (line, signal, histogram)
    """
    series = _as_series(prices)
    line = ema(series, fast) - ema(series, slow)
    signal_line = ema(line, signal)
    histogram = line - signal_line
    return MacdResult(
        line=line.rename("macd_line"),
        signal=signal_line.rename("macd_signal"),
        histogram=histogram.rename("macd_histogram"),
    )


class TechnicalIndicators:
    """Calculates the indicator set used by timeframe snapshots."""

    def __init__(
        self,
        rsi_period: int = RSI_PERIOD,
        rsi_oversold: float = RSI_OVERSOLD,
        rsi_overbought: float = RSI_OVERBOUGHT,
        sma_fast_period: int = SMA_FAST_PERIOD,
        sma_slow_period: int = SMA_SLOW_PERIOD,
        macd_fast: int = MACD_FAST,
        macd_slow: int = MACD_SLOW,
        macd_signal: int = MACD_SIGNAL,
    ):
        self.rsi_period = rsi_period
        self.rsi_oversold = rsi_oversold
        self.rsi_overbought = rsi_overbought
        self.sma_fast_period = sma_fast_period
        self.sma_slow_period = sma_slow_period
        self.macd_fast = macd_fast
        self.macd_slow = macd_slow
        self.macd_signal = macd_signal

    def calculate_all(self, prices: PriceInput) -> pd.DataFrame:
        """
        Calculate all indicators and return as DataFrame.

        Columns: price, sma_fast, sma_slow, rsi, macd_line, macd_signal,
        macd_histogram. ``rsi_oversold`` / ``rsi_overbought`` are nullable
        booleans that stay ``<NA>`` while RSI is warming up.
        """
        series = _as_series(prices)
        macd_result = macd(series, self.macd_fast, self.macd_slow, self.macd_signal)
        rsi_values = rsi(series, self.rsi_period)

        df = pd.DataFrame(index=series.index)
        df["price"] = series
        df["sma_fast"] = sma(series, self.sma_fast_period)
        df["sma_slow"] = sma(series, self.sma_slow_period)
        df["rsi"] = rsi_values
        df["rsi_oversold"] = rsi_values < self.rsi_oversold
        df["rsi_overbought"] = rsi_values > self.rsi_overbought
        df["macd_line"] = macd_result.line
        df["macd_signal"] = macd_result.signal
        df["macd_histogram"] = macd_result.histogram
        return df
