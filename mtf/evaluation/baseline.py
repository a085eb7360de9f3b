"""
Single-timeframe baseline backtest.

Daily-only comparison strategy for the multi-timeframe backtest:
enter when the MACD histogram crosses above zero while price is above its
50-day SMA, exit when the histogram turns negative or the position hits the
same stop-loss / take-profit band as the MTF strategy.
"""
import logging
from typing import List, Optional, Tuple

from ..indicators.technical import macd, sma
from ..shared.defaults import BASELINE_TREND_SMA, BASELINE_WARMUP_BARS
from ..shared.types import ExitReason
from ..signals.config import BASELINE_CONFIG, StrategyConfig
from .backtest import BarsInput, as_close_series, build_result, optional_values, timestamp_at
from .backtest_types import BacktestResult, BacktestState, Trade

logger = logging.getLogger(__name__)


def run_single_timeframe_baseline(
    bars: BarsInput,
    config: Optional[StrategyConfig] = None,
    warmup_bars: int = BASELINE_WARMUP_BARS,
    trend_period: int = BASELINE_TREND_SMA,
) -> BacktestResult:
    """
    Run the daily-only MACD-cross baseline.

    Args:
        bars: Validated OHLCV DataFrame (uses Close), close Series, or plain closes
        config: Supplies capital, MACD periods and the stop-loss / take-profit band
        warmup_bars: First evaluated index (must be >= 1 to see the previous histogram)
        trend_period: SMA period price must be above to enter

    Returns:
        BacktestResult (entry events carry score 0)
    """
    if warmup_bars < 1:
        raise ValueError(f"warmup_bars must be >= 1, got {warmup_bars}")
    config = config or BASELINE_CONFIG
    ind = config.indicators
    bt = config.backtest

    closes = as_close_series(bars)
    prices = closes.to_numpy()
    state = BacktestState(cash=bt.initial_capital)
    trades: List[Trade] = []
    equity_rows: List[Tuple] = []
    equity_index: List = []

    if len(prices) <= warmup_bars:
        return build_result(state, trades, prices, bt.initial_capital, warmup_bars, equity_rows, equity_index)

    histogram = macd(closes, ind.macd_fast, ind.macd_slow, ind.macd_signal).histogram.to_numpy()
    trend = optional_values(sma(closes, trend_period))

    for i in range(warmup_bars, len(prices)):
        price = prices[i]
        timestamp = timestamp_at(closes.index, i)

        if state.is_long:
            pnl = state.pnl_percent(price)
            reason = None
            if pnl <= -bt.stop_loss_pct:
                reason = ExitReason.STOP_LOSS
            elif pnl >= bt.take_profit_pct:
                reason = ExitReason.TAKE_PROFIT
            elif histogram[i] < 0:
                reason = ExitReason.SIGNAL
            if reason is not None:
                trades.append(state.exit(i, timestamp, price, reason))

        crossed_up = histogram[i] > 0 and histogram[i - 1] <= 0
        above_trend = trend[i] is not None and price > trend[i]
        if not state.is_long and crossed_up and above_trend:
            state.enter(i, timestamp, price, score=0, reasons=("Daily MACD cross up",))

        equity_rows.append((price, 0, state.cash, state.shares_held, state.value(price)))
        equity_index.append(closes.index[i])

    result = build_result(state, trades, prices, bt.initial_capital, warmup_bars, equity_rows, equity_index)
    logger.info(
        f"Single-timeframe baseline: {result.total_return_percent:+.1f}%, {result.trade_count} trades"
    )
    return result
