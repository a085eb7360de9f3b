"""
Tests for multi-timeframe scoring.
"""
import pytest
from mtf.signals.config import ScoringWeights
from mtf.signals.scorer import ScoreTally, SignalScorer, classify_score
from mtf.signals.snapshot import TimeframeSnapshot
from mtf.shared.types import (
    Action,
    Confidence,
    MacdSignal,
    RsiSignal,
    Timeframe,
    Trend,
)


def snapshot(timeframe, trend=Trend.UP, macd=MacdSignal.BULLISH, rsi_signal=RsiSignal.NEUTRAL):
    return TimeframeSnapshot(
        timeframe=timeframe,
        price=100.0,
        trend=trend,
        macd_signal=macd,
        rsi_value=50.0,
        rsi_signal=rsi_signal,
        bar_count=100,
    )


def score(monthly=None, weekly=None, daily=None, weights=None):
    return SignalScorer(weights).score(
        monthly or snapshot(Timeframe.MONTHLY),
        weekly or snapshot(Timeframe.WEEKLY),
        daily or snapshot(Timeframe.DAILY),
    )


class TestSignalScorer:
    """Test scoring of snapshot triples."""

    def test_all_bullish(self):
        result = score()

        assert result.bull_score == 8
        assert result.bear_score == 0
        assert result.action is Action.STRONG_BUY
        assert result.confidence is Confidence.HIGH
        assert result.reasons == (
            'Monthly UP',
            'Weekly UP',
            'Weekly MACD BULLISH',
            'Daily UP',
            'Daily MACD BULLISH',
        )

    def test_all_bearish_with_overbought(self):
        result = score(
            snapshot(Timeframe.MONTHLY, Trend.DOWN, MacdSignal.BEARISH),
            snapshot(Timeframe.WEEKLY, Trend.DOWN, MacdSignal.BEARISH),
            snapshot(Timeframe.DAILY, Trend.DOWN, MacdSignal.BEARISH, RsiSignal.OVERBOUGHT),
        )

        assert result.bull_score == 0
        assert result.bear_score == 9
        assert result.net_score == -9
        assert result.action is Action.STRONG_SELL
        assert result.reasons[-1] == 'Daily Overbought'

    def test_oversold_adds_bull_point(self):
        result = score(daily=snapshot(Timeframe.DAILY, rsi_signal=RsiSignal.OVERSOLD))
        assert result.bull_score == 9
        assert result.reasons[-1] == 'Daily Oversold'

    def test_neutral_rsi_contributes_nothing(self):
        assert len(score().reasons) == 5

    def test_neutral_trend_counts_and_tags_as_down(self):
        result = score(monthly=snapshot(Timeframe.MONTHLY, trend=Trend.NEUTRAL))
        assert result.bear_score == 3
        assert result.reasons[0] == 'Monthly DOWN'

    def test_monthly_outweighs_weekly(self):
        # Monthly DOWN (-3), everything else bullish (+5): net 2 -> BUY
        result = score(monthly=snapshot(Timeframe.MONTHLY, trend=Trend.DOWN))
        assert result.net_score == 2
        assert result.action is Action.BUY
        assert result.confidence is Confidence.MEDIUM

    def test_mixed_is_hold(self):
        # +3 monthly, -2 weekly trend, -1 weekly MACD, -1 daily trend, +1 daily MACD
        result = score(
            weekly=snapshot(Timeframe.WEEKLY, Trend.DOWN, MacdSignal.BEARISH),
            daily=snapshot(Timeframe.DAILY, trend=Trend.DOWN),
        )
        assert result.net_score == 0
        assert result.action is Action.HOLD
        assert result.confidence is Confidence.LOW

    def test_zero_weight_is_skipped(self):
        weights = ScoringWeights(weekly_macd=0)
        result = score(weights=weights)
        assert result.bull_score == 7
        assert 'Weekly MACD BULLISH' not in result.reasons

    def test_scores_are_bounded_by_weights(self):
        result = score()
        w = ScoringWeights()
        total = (w.monthly_trend + w.weekly_trend + w.weekly_macd
                 + w.daily_trend + w.daily_macd + w.daily_rsi)
        assert 0 <= result.bull_score <= total
        assert 0 <= result.bear_score <= total


class TestClassifyScore:
    """Test net score -> action mapping."""

    @pytest.mark.parametrize('net,action,confidence', [
        (8, Action.STRONG_BUY, Confidence.HIGH),
        (5, Action.STRONG_BUY, Confidence.HIGH),
        (4, Action.BUY, Confidence.MEDIUM),
        (2, Action.BUY, Confidence.MEDIUM),
        (1, Action.HOLD, Confidence.LOW),
        (0, Action.HOLD, Confidence.LOW),
        (-1, Action.HOLD, Confidence.LOW),
        (-2, Action.SELL, Confidence.MEDIUM),
        (-4, Action.SELL, Confidence.MEDIUM),
        (-5, Action.STRONG_SELL, Confidence.HIGH),
        (-9, Action.STRONG_SELL, Confidence.HIGH),
    ])
    def test_thresholds(self, net, action, confidence):
        assert classify_score(net, ScoringWeights()) == (action, confidence)

    def test_action_labels(self):
        assert Action.STRONG_BUY.value == 'STRONG BUY'
        assert Action.STRONG_SELL.value == 'STRONG SELL'


class TestScoreTally:
    """Test the accumulator shared with the backtest."""

    def test_accumulates_in_order(self):
        tally = ScoreTally()
        tally.add_trend('Daily', Trend.UP, 1)
        tally.add_macd('Daily', MacdSignal.BEARISH, 1)
        tally.add(True, 2, 'custom')

        assert (tally.bull, tally.bear, tally.net) == (3, 1, 2)
        assert tally.reasons == ['Daily UP', 'Daily MACD BEARISH', 'custom']
