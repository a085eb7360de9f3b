"""
Multi-timeframe analysis pipeline.

daily bars -> validation -> weekly / monthly aggregation -> per-timeframe
snapshots -> composite score, optionally followed by the MTF backtest and
the single-timeframe baseline on the same daily bars.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..data.aggregation import aggregate_to_monthly, aggregate_to_weekly
from ..data.validation import validate_bars
from ..shared.types import Timeframe
from ..signals.config import BASELINE_CONFIG, StrategyConfig
from ..signals.scorer import ScoreResult, SignalScorer
from ..signals.snapshot import TimeframeSnapshot, analyze_timeframe
from .backtest import BacktestSimulator
from .backtest_types import BacktestResult
from .baseline import run_single_timeframe_baseline

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Snapshots, score and (optionally) backtests for one bar series."""
    monthly: TimeframeSnapshot
    weekly: TimeframeSnapshot
    daily: TimeframeSnapshot
    score: ScoreResult
    bar_counts: Dict[Timeframe, int]
    backtest: Optional[BacktestResult] = None
    baseline: Optional[BacktestResult] = None

    @property
    def snapshots(self) -> Tuple[TimeframeSnapshot, TimeframeSnapshot, TimeframeSnapshot]:
        """Monthly, weekly, daily (top-down order)."""
        return self.monthly, self.weekly, self.daily


class MultiTimeframeAnalyzer:
    """Runs the full top-down analysis with one explicit config."""

    def __init__(self, config: Optional[StrategyConfig] = None):
        self.config = config or BASELINE_CONFIG
        self.scorer = SignalScorer(self.config.weights)

    def timeframes(self, daily: pd.DataFrame) -> Dict[Timeframe, pd.DataFrame]:
        """Validated daily bars plus their weekly and monthly aggregates."""
        return {
            Timeframe.DAILY: daily,
            Timeframe.WEEKLY: aggregate_to_weekly(daily),
            Timeframe.MONTHLY: aggregate_to_monthly(daily),
        }

    def analyze(self, bars: Any, run_backtest: bool = True) -> AnalysisReport:
        """
        Analyze a daily bar series.

        Args:
            bars: OHLCV DataFrame or sequence of bar records (validated here)
            run_backtest: Also run the MTF backtest and the baseline

        Raises:
            BarValidationError: If any bar is malformed (before indicators run)
            ValueError: If there are no bars
        """
        daily = validate_bars(bars)
        if daily.empty:
            raise ValueError("No bars to analyze")

        frames = self.timeframes(daily)
        snapshots = {
            timeframe: analyze_timeframe(frame, timeframe, self.config.indicators)
            for timeframe, frame in frames.items()
        }
        score = self.scorer.score(
            snapshots[Timeframe.MONTHLY],
            snapshots[Timeframe.WEEKLY],
            snapshots[Timeframe.DAILY],
        )
        logger.info(
            f"Analyzed {len(daily)} daily bars: {score.action.value} "
            f"(bull {score.bull_score}, bear {score.bear_score})"
        )

        report = AnalysisReport(
            monthly=snapshots[Timeframe.MONTHLY],
            weekly=snapshots[Timeframe.WEEKLY],
            daily=snapshots[Timeframe.DAILY],
            score=score,
            bar_counts={timeframe: len(frame) for timeframe, frame in frames.items()},
        )
        if run_backtest:
            report.backtest = BacktestSimulator(self.config).run(daily)
            report.baseline = run_single_timeframe_baseline(daily, self.config)
        return report
