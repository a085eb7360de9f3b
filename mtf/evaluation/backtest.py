"""
Multi-timeframe backtest simulator.

Walks the daily closes bar by bar with a single long-only position:

- FLAT -> LONG when the composite score reaches the entry threshold and
  daily RSI is below the entry ceiling
- LONG -> FLAT when the score falls to the exit threshold or the position
  hits the stop-loss / take-profit band

Weekly and monthly trend are approximated by longer SMAs on the daily
series (25/50 and 40/100 by default), not by the aggregated series. This
keeps the loop single-pass; it is not reconciled with BarAggregator.

Each bar is evaluated exactly once using only data up to that bar. The exit
check runs before the entry check, so a position closed on a bar can be
reopened on the same bar.
"""
import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..indicators.technical import macd, rsi, sma
from ..shared.types import ExitReason
from ..signals.config import BASELINE_CONFIG, StrategyConfig
from ..signals.scorer import ScoreResult, ScoreTally
from ..signals.snapshot import classify_macd, classify_trend
from .backtest_types import EQUITY_COLUMNS, BacktestResult, BacktestState, Trade

logger = logging.getLogger(__name__)

BarsInput = Union[pd.DataFrame, pd.Series, Sequence[float]]


def as_close_series(bars: BarsInput) -> pd.Series:
    """
    Extract closes as a float64 Series.

    Raises:
        ValueError: If closes are missing, non-finite or not strictly positive
    """
    if isinstance(bars, pd.DataFrame):
        if "Close" not in bars.columns:
            raise ValueError(f"Column 'Close' not found. Available: {list(bars.columns)}")
        closes = bars["Close"].astype(np.float64)
    elif isinstance(bars, pd.Series):
        closes = bars.astype(np.float64)
    else:
        closes = pd.Series(np.asarray(bars, dtype=np.float64))
    values = closes.to_numpy()
    if not np.all(np.isfinite(values)):
        raise ValueError("Close prices must be finite")
    if np.any(values <= 0):
        raise ValueError("Close prices must be > 0")
    return closes


def optional_values(series: pd.Series) -> List[Optional[float]]:
    """Nullable series -> list with None for undefined entries."""
    return [None if pd.isna(v) else float(v) for v in series]


def timestamp_at(index: pd.Index, i: int) -> Optional[pd.Timestamp]:
    """Timestamp label for position ``i`` (None when bars carry no dates)."""
    label = index[i]
    return label if isinstance(label, pd.Timestamp) else None


def build_result(
    state: BacktestState,
    trades: List[Trade],
    prices: np.ndarray,
    initial_capital: float,
    start_index: int,
    equity_rows: List[Tuple],
    equity_index: List,
) -> BacktestResult:
    """Close out the state at the last price and summarize the run."""
    open_at_end = state.is_long
    if len(prices) > start_index:
        state.mark_to_market(prices[-1])
        buy_and_hold = (prices[-1] - prices[start_index]) / prices[start_index] * 100
    else:
        buy_and_hold = 0.0

    final_capital = state.cash
    return BacktestResult(
        initial_capital=initial_capital,
        final_capital=final_capital,
        total_return_percent=(final_capital - initial_capital) / initial_capital * 100,
        buy_and_hold_percent=buy_and_hold,
        trade_count=state.trade_count,
        win_count=state.win_count,
        win_rate=state.win_count / state.trade_count if state.trade_count > 0 else 0.0,
        trades=trades,
        signal_history=list(state.signal_history),
        equity=pd.DataFrame(equity_rows, columns=EQUITY_COLUMNS, index=equity_index),
        open_at_end=open_at_end,
        start_index=start_index,
    )


class BacktestSimulator:
    """
    Single-position backtest driven by the multi-timeframe score.

    Re-running with identical bars and config yields identical results.
    """

    def __init__(self, config: Optional[StrategyConfig] = None):
        self.config = config or BASELINE_CONFIG

    def _proxy_series(self, closes: pd.Series) -> dict:
        ind = self.config.indicators
        bt = self.config.backtest
        histogram = macd(closes, ind.macd_fast, ind.macd_slow, ind.macd_signal).histogram
        return {
            "monthly_fast": optional_values(sma(closes, bt.monthly_proxy_fast)),
            "monthly_slow": optional_values(sma(closes, bt.monthly_proxy_slow)),
            "weekly_fast": optional_values(sma(closes, bt.weekly_proxy_fast)),
            "weekly_slow": optional_values(sma(closes, bt.weekly_proxy_slow)),
            "daily_fast": optional_values(sma(closes, ind.sma_fast_period)),
            "daily_slow": optional_values(sma(closes, ind.sma_slow_period)),
            "histogram": histogram.to_numpy(),
            "rsi": optional_values(rsi(closes, ind.rsi_period)),
        }

    def score_at(self, series: dict, i: int) -> ScoreResult:
        """
        Composite score at bar ``i`` from daily-series proxies.

        A trend pair with an undefined SMA is skipped, not scored as DOWN.
        """
        w = self.config.weights
        tally = ScoreTally()
        for label, fast_key, slow_key, weight in (
            ("Monthly", "monthly_fast", "monthly_slow", w.monthly_trend),
            ("Weekly", "weekly_fast", "weekly_slow", w.weekly_trend),
            ("Daily", "daily_fast", "daily_slow", w.daily_trend),
        ):
            fast, slow = series[fast_key][i], series[slow_key][i]
            if fast is None or slow is None:
                continue
            tally.add_trend(label, classify_trend(fast, slow), weight)
        tally.add_macd("Daily", classify_macd(series["histogram"][i]), w.daily_macd)
        return tally.result(w)

    def _exit_reason(self, score: int, pnl_percent: float) -> Optional[ExitReason]:
        bt = self.config.backtest
        if pnl_percent <= -bt.stop_loss_pct:
            return ExitReason.STOP_LOSS
        if pnl_percent >= bt.take_profit_pct:
            return ExitReason.TAKE_PROFIT
        if score <= bt.exit_score_threshold:
            return ExitReason.SCORE
        return None

    def _can_enter(self, score: int, rsi_value: Optional[float]) -> bool:
        bt = self.config.backtest
        if score < bt.entry_score_threshold:
            return False
        # RSI still warming up: cannot confirm the entry
        if rsi_value is None:
            return False
        return rsi_value < bt.entry_rsi_max

    def run(self, bars: BarsInput) -> BacktestResult:
        """
        Run the backtest over daily bars.

        Args:
            bars: Validated OHLCV DataFrame (uses Close), close Series, or plain closes

        Returns:
            BacktestResult; empty (zero return, no trades) when there are no
            more bars than the warm-up offset
        """
        bt = self.config.backtest
        closes = as_close_series(bars)
        prices = closes.to_numpy()
        start = bt.warmup_bars

        state = BacktestState(cash=bt.initial_capital)
        trades: List[Trade] = []
        equity_rows: List[Tuple] = []
        equity_index: List = []

        if len(prices) <= start:
            logger.warning(
                f"Backtest needs more than {start} bars, got {len(prices)}; nothing evaluated"
            )
            return build_result(state, trades, prices, bt.initial_capital, start, equity_rows, equity_index)

        series = self._proxy_series(closes)

        for i in range(start, len(prices)):
            price = prices[i]
            timestamp = timestamp_at(closes.index, i)
            result = self.score_at(series, i)
            score = result.net_score

            if state.is_long:
                reason = self._exit_reason(score, state.pnl_percent(price))
                if reason is not None:
                    trade = state.exit(i, timestamp, price, reason)
                    trades.append(trade)
                    logger.debug(
                        f"Exit at {i} ({reason.value}): {trade.pnl_percent:+.2f}% {trade.outcome.value}"
                    )

            if not state.is_long and self._can_enter(score, series["rsi"][i]):
                state.enter(i, timestamp, price, score, result.reasons)
                logger.debug(f"Enter at {i}: price={price:.2f} score={score}")

            equity_rows.append((price, score, state.cash, state.shares_held, state.value(price)))
            equity_index.append(closes.index[i])

        backtest = build_result(state, trades, prices, bt.initial_capital, start, equity_rows, equity_index)
        logger.info(
            f"MTF backtest: {backtest.total_return_percent:+.1f}% vs buy & hold "
            f"{backtest.buy_and_hold_percent:+.1f}%, {backtest.trade_count} trades"
        )
        return backtest


def run_backtest(bars: BarsInput, config: Optional[StrategyConfig] = None) -> BacktestResult:
    """Convenience wrapper: ``BacktestSimulator(config).run(bars)``."""
    return BacktestSimulator(config).run(bars)
