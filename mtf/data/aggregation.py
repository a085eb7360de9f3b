"""
Weekly and monthly aggregation of daily bars.

Buckets are built from closes only: a new bucket is seeded with the close of
its first bar (open = high = low = close), then high/low track the running
max/min close and close tracks the latest close. The intraday open of the
daily bars is not used.

The last bucket is kept even when the period is still incomplete.
"""
import logging
from typing import Callable, Dict, List, Union

import pandas as pd

from ..shared.types import Timeframe

logger = logging.getLogger(__name__)

AGGREGATED_COLUMNS = ["period_key", "Open", "High", "Low", "Close", "bar_count"]


def weekly_key(timestamp: pd.Timestamp) -> str:
    """ISO week key, e.g. '2024-W07'. Uses the ISO year, so Jan 1 can be '2020-W53'."""
    iso = timestamp.isocalendar()
    return f"{iso[0]}-W{iso[1]:02d}"


def monthly_key(timestamp: pd.Timestamp) -> str:
    """Calendar month key, e.g. '2024-03'."""
    return f"{timestamp.year}-{timestamp.month:02d}"


PERIOD_KEYS: Dict[Timeframe, Callable[[pd.Timestamp], str]] = {
    Timeframe.WEEKLY: weekly_key,
    Timeframe.MONTHLY: monthly_key,
}


def _closes(bars: Union[pd.DataFrame, pd.Series]) -> pd.Series:
    if isinstance(bars, pd.DataFrame):
        if "Close" not in bars.columns:
            raise ValueError(f"Column 'Close' not found. Available: {list(bars.columns)}")
        closes = bars["Close"]
    else:
        closes = bars
    if not isinstance(closes.index, pd.DatetimeIndex):
        raise ValueError("Bars must have a DatetimeIndex")
    if not closes.index.is_monotonic_increasing:
        raise ValueError("Bars must be sorted by ascending timestamp")
    return closes


class BarAggregator:
    """Folds ascending daily bars into weekly or monthly buckets."""

    def __init__(self, timeframe: Timeframe):
        if timeframe not in PERIOD_KEYS:
            raise ValueError(
                f"Cannot aggregate to {timeframe.value}; choose one of "
                f"{[t.value for t in PERIOD_KEYS]}"
            )
        self.timeframe = timeframe
        self._key = PERIOD_KEYS[timeframe]

    def aggregate(self, bars: Union[pd.DataFrame, pd.Series]) -> pd.DataFrame:
        """
        Aggregate daily bars.

        Args:
            bars: OHLCV DataFrame (uses Close) or a close Series, DatetimeIndex ascending

        Returns:
            DataFrame indexed by the first timestamp of each bucket with columns
            period_key, Open, High, Low, Close, bar_count
        """
        closes = _closes(bars)
        rows: List[dict] = []
        starts: List[pd.Timestamp] = []
        bucket = None

        for timestamp, close in closes.items():
            key = self._key(timestamp)
            if bucket is None or bucket["period_key"] != key:
                if bucket is not None:
                    rows.append(bucket)
                starts.append(timestamp)
                bucket = {
                    "period_key": key,
                    "Open": close,
                    "High": close,
                    "Low": close,
                    "Close": close,
                    "bar_count": 1,
                }
            else:
                bucket["High"] = max(bucket["High"], close)
                bucket["Low"] = min(bucket["Low"], close)
                bucket["Close"] = close
                bucket["bar_count"] += 1

        if bucket is not None:
            rows.append(bucket)

        out = pd.DataFrame(rows, columns=AGGREGATED_COLUMNS, index=pd.DatetimeIndex(starts, name="Date"))
        logger.debug(f"Aggregated {len(closes)} daily bars into {len(out)} {self.timeframe.value} bars")
        return out


def aggregate_to_weekly(bars: Union[pd.DataFrame, pd.Series]) -> pd.DataFrame:
    """Aggregate daily bars into ISO-week buckets."""
    return BarAggregator(Timeframe.WEEKLY).aggregate(bars)


def aggregate_to_monthly(bars: Union[pd.DataFrame, pd.Series]) -> pd.DataFrame:
    """Aggregate daily bars into calendar-month buckets."""
    return BarAggregator(Timeframe.MONTHLY).aggregate(bars)
