"""
Tests for the top-down analysis pipeline.
"""
import pytest
import numpy as np
import pandas as pd
from mtf.data.validation import BarValidationError
from mtf.evaluation.analysis import MultiTimeframeAnalyzer
from mtf.shared.types import Action, RsiSignal, Timeframe, Trend


@pytest.fixture
def growing_bars():
    """300 daily OHLCV bars compounding 1% per bar."""
    dates = pd.date_range('2020-01-01', periods=300, freq='D')
    close = 100 * 1.01 ** np.arange(300)
    return pd.DataFrame(
        {
            'Open': close,
            'High': close * 1.005,
            'Low': close * 0.995,
            'Close': close,
            'Volume': 1000.0,
        },
        index=dates,
    )


class TestMultiTimeframeAnalyzer:
    """Test the full analysis."""

    def test_bar_counts(self, growing_bars):
        report = MultiTimeframeAnalyzer().analyze(growing_bars, run_backtest=False)

        assert report.bar_counts[Timeframe.DAILY] == 300
        assert report.bar_counts[Timeframe.MONTHLY] == 10
        assert report.bar_counts[Timeframe.WEEKLY] == report.weekly.bar_count
        assert 43 <= report.bar_counts[Timeframe.WEEKLY] <= 44

    def test_snapshots_are_top_down(self, growing_bars):
        report = MultiTimeframeAnalyzer().analyze(growing_bars, run_backtest=False)

        assert [s.timeframe for s in report.snapshots] == [
            Timeframe.MONTHLY, Timeframe.WEEKLY, Timeframe.DAILY,
        ]

    def test_sparse_higher_timeframes_weigh_against_uptrend(self, growing_bars):
        # 10 monthly bars: no SMA20 -> NEUTRAL; 44 weekly bars: SMA20 vs SMA11 -> DOWN
        report = MultiTimeframeAnalyzer().analyze(growing_bars, run_backtest=False)

        assert report.monthly.trend is Trend.NEUTRAL
        assert report.weekly.trend is Trend.DOWN
        assert report.daily.trend is Trend.UP
        assert report.daily.rsi_signal is RsiSignal.OVERBOUGHT
        assert report.score.bull_score == 3
        assert report.score.bear_score == 6
        assert report.score.action is Action.SELL
        assert report.score.reasons == (
            'Monthly DOWN',
            'Weekly DOWN',
            'Weekly MACD BULLISH',
            'Daily UP',
            'Daily MACD BULLISH',
            'Daily Overbought',
        )

    def test_backtests_optional(self, growing_bars):
        analyzer = MultiTimeframeAnalyzer()

        without = analyzer.analyze(growing_bars, run_backtest=False)
        assert without.backtest is None
        assert without.baseline is None

        report = analyzer.analyze(growing_bars)
        assert report.backtest is not None
        assert report.baseline is not None
        assert report.backtest.start_index == 100
        assert report.baseline.start_index == 50

    def test_accepts_bar_records(self):
        records = [
            {'date': f'2024-01-{d:02d}', 'open': 10 + d, 'high': 11 + d,
             'low': 9 + d, 'close': 10 + d, 'volume': 100}
            for d in range(1, 31)
        ]

        report = MultiTimeframeAnalyzer().analyze(records, run_backtest=False)

        assert report.bar_counts[Timeframe.DAILY] == 30
        assert report.bar_counts[Timeframe.MONTHLY] == 1
        assert report.daily.price == 40.0

    def test_malformed_bar_rejected_before_indicators(self):
        records = [
            {'date': '2024-01-01', 'open': 1, 'high': 1, 'low': 1, 'close': 1, 'volume': 1},
            {'date': '2024-01-02', 'open': 1, 'high': 1, 'low': 1, 'close': 'NaN', 'volume': 1},
        ]
        with pytest.raises(BarValidationError, match="Row 1: field 'close'"):
            MultiTimeframeAnalyzer().analyze(records)

    def test_empty_input(self):
        with pytest.raises(ValueError, match='No bars to analyze'):
            MultiTimeframeAnalyzer().analyze([])
