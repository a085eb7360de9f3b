"""
Multi-timeframe signal scoring.

Combines monthly, weekly and daily snapshots into a weighted bull/bear
score. Higher timeframes set the direction (monthly 3, weekly 2), the daily
timeframe times the entry. Signals are evaluated in a fixed order and each
contributing signal leaves one reason tag.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..shared.types import Action, Confidence, MacdSignal, RsiSignal, Trend
from .config import ScoringWeights
from .snapshot import TimeframeSnapshot


@dataclass(frozen=True)
class ScoreResult:
    """Composite score and the discrete decision derived from it."""
    bull_score: int
    bear_score: int
    action: Action
    confidence: Confidence
    reasons: Tuple[str, ...] = ()

    @property
    def net_score(self) -> int:
        return self.bull_score - self.bear_score


def classify_score(net_score: int, weights: ScoringWeights) -> Tuple[Action, Confidence]:
    """Map a net score onto (action, confidence) using the configured thresholds."""
    if net_score >= weights.strong_action_score:
        return Action.STRONG_BUY, Confidence.HIGH
    if net_score >= weights.action_score:
        return Action.BUY, Confidence.MEDIUM
    if net_score <= -weights.strong_action_score:
        return Action.STRONG_SELL, Confidence.HIGH
    if net_score <= -weights.action_score:
        return Action.SELL, Confidence.MEDIUM
    return Action.HOLD, Confidence.LOW


class ScoreTally:
    """Accumulates bull/bear points and reason tags in evaluation order."""

    def __init__(self):
        self.bull = 0
        self.bear = 0
        self.reasons: List[str] = []

    def add(self, bullish: bool, weight: int, reason: str) -> None:
        """Add ``weight`` to the bull side if ``bullish``, else to the bear side."""
        if weight == 0:
            return
        if bullish:
            self.bull += weight
        else:
            self.bear += weight
        self.reasons.append(reason)

    def add_trend(self, label: str, trend: Trend, weight: int) -> None:
        # NEUTRAL counts against the trend and is tagged as DOWN
        bullish = trend is Trend.UP
        tag = Trend.UP.value if bullish else Trend.DOWN.value
        self.add(bullish, weight, f"{label} {tag}")

    def add_macd(self, label: str, signal: MacdSignal, weight: int) -> None:
        self.add(signal is MacdSignal.BULLISH, weight, f"{label} MACD {signal.value}")

    @property
    def net(self) -> int:
        return self.bull - self.bear

    def result(self, weights: ScoringWeights) -> ScoreResult:
        action, confidence = classify_score(self.net, weights)
        return ScoreResult(
            bull_score=self.bull,
            bear_score=self.bear,
            action=action,
            confidence=confidence,
            reasons=tuple(self.reasons),
        )


class SignalScorer:
    """Scores one (monthly, weekly, daily) snapshot triple."""

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights()

    def score(
        self,
        monthly: TimeframeSnapshot,
        weekly: TimeframeSnapshot,
        daily: TimeframeSnapshot,
    ) -> ScoreResult:
        """
        Score the three timeframes.

        Order: monthly trend, weekly trend, weekly MACD, daily trend,
        daily MACD, daily RSI oversold (bull only), daily RSI overbought
        (bear only).
        """
        w = self.weights
        tally = ScoreTally()
        tally.add_trend("Monthly", monthly.trend, w.monthly_trend)
        tally.add_trend("Weekly", weekly.trend, w.weekly_trend)
        tally.add_macd("Weekly", weekly.macd_signal, w.weekly_macd)
        tally.add_trend("Daily", daily.trend, w.daily_trend)
        tally.add_macd("Daily", daily.macd_signal, w.daily_macd)
        if daily.rsi_signal is RsiSignal.OVERSOLD:
            tally.add(True, w.daily_rsi, "Daily Oversold")
        if daily.rsi_signal is RsiSignal.OVERBOUGHT:
            tally.add(False, w.daily_rsi, "Daily Overbought")
        return tally.result(w)
