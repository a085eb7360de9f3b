"""
Shared types and defaults for the analysis pipeline.

This module provides:
- Enums for trend, MACD, RSI, action, confidence and trade outcomes
- Centralized default values for all parameters
"""
from .types import (
    Timeframe,
    Trend,
    MacdSignal,
    RsiSignal,
    Action,
    Confidence,
    TradeOutcome,
    ExitReason,
)
from .defaults import (
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    SMA_FAST_PERIOD, SMA_SLOW_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    INITIAL_CAPITAL, WARMUP_BARS,
    ENTRY_SCORE_THRESHOLD, EXIT_SCORE_THRESHOLD, ENTRY_RSI_MAX,
    STOP_LOSS_PCT, TAKE_PROFIT_PCT,
)

__all__ = [
    'Timeframe',
    'Trend',
    'MacdSignal',
    'RsiSignal',
    'Action',
    'Confidence',
    'TradeOutcome',
    'ExitReason',
    'RSI_PERIOD', 'RSI_OVERSOLD', 'RSI_OVERBOUGHT',
    'SMA_FAST_PERIOD', 'SMA_SLOW_PERIOD',
    'MACD_FAST', 'MACD_SLOW', 'MACD_SIGNAL',
    'INITIAL_CAPITAL', 'WARMUP_BARS',
    'ENTRY_SCORE_THRESHOLD', 'EXIT_SCORE_THRESHOLD', 'ENTRY_RSI_MAX',
    'STOP_LOSS_PCT', 'TAKE_PROFIT_PCT',
]
