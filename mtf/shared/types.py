"""
Shared enums for timeframe analysis, scoring and backtesting.

Snapshots, the scorer and the simulator all compare against these members.
"""
from enum import Enum


class Timeframe(Enum):
    """Bar granularity."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Trend(Enum):
    """Fast SMA vs slow SMA direction."""
    UP = "UP"
    DOWN = "DOWN"
    NEUTRAL = "NEUTRAL"  # One of the SMAs is still warming up


class MacdSignal(Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"


class RsiSignal(Enum):
    OVERSOLD = "OVERSOLD"
    OVERBOUGHT = "OVERBOUGHT"
    NEUTRAL = "NEUTRAL"


class Action(Enum):
    """Discrete trading decision derived from the net score."""
    STRONG_BUY = "STRONG BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    STRONG_SELL = "STRONG SELL"


class Confidence(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class TradeOutcome(Enum):
    WIN = "WIN"
    LOSS = "LOSS"


class ExitReason(Enum):
    """Why a long position was closed."""
    SCORE = "score"  # Composite score fell to the exit threshold
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    SIGNAL = "signal"  # Baseline only: MACD histogram turned negative
