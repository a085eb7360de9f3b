"""
Backtest types: entry events, trades, position state and results.

The MTF backtest and the single-timeframe baseline share this state machine
and result shape.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pandas as pd

from ..shared.types import ExitReason, TradeOutcome

EQUITY_COLUMNS = ["price", "score", "cash", "shares", "value"]


@dataclass(frozen=True)
class EntryEvent:
    """A FLAT -> LONG transition."""
    index: int
    timestamp: Optional[pd.Timestamp]
    price: float
    score: int
    reasons: Tuple[str, ...] = ()
    action: str = "ENTER"


@dataclass(frozen=True)
class Trade:
    """A closed round trip (LONG -> FLAT)."""
    entry_index: int
    exit_index: int
    entry_timestamp: Optional[pd.Timestamp]
    exit_timestamp: Optional[pd.Timestamp]
    entry_price: float
    exit_price: float
    pnl_percent: float
    outcome: TradeOutcome
    exit_reason: ExitReason

    @property
    def bars_held(self) -> int:
        return self.exit_index - self.entry_index


@dataclass
class BacktestState:
    """
    Single-position state: fully in cash (FLAT) or fully invested (LONG).

    Exactly one of ``cash`` and ``shares_held`` is non-zero at any time.
    """
    cash: float
    shares_held: float = 0.0
    entry_price: Optional[float] = None
    entry_index: Optional[int] = None
    entry_timestamp: Optional[pd.Timestamp] = None
    trade_count: int = 0
    win_count: int = 0
    signal_history: List[EntryEvent] = field(default_factory=list)

    @property
    def is_long(self) -> bool:
        return self.shares_held > 0

    def pnl_percent(self, price: float) -> float:
        if self.entry_price is None:
            raise ValueError("No open position")
        return (price - self.entry_price) / self.entry_price * 100

    def value(self, price: float) -> float:
        return self.cash + self.shares_held * price

    def enter(
        self,
        index: int,
        timestamp: Optional[pd.Timestamp],
        price: float,
        score: int,
        reasons: Tuple[str, ...] = (),
    ) -> EntryEvent:
        """Convert all cash to shares at ``price``."""
        if self.is_long:
            raise ValueError(f"Already long since index {self.entry_index}")
        self.shares_held = self.cash / price
        self.cash = 0.0
        self.entry_price = price
        self.entry_index = index
        self.entry_timestamp = timestamp
        event = EntryEvent(index=index, timestamp=timestamp, price=price, score=score, reasons=reasons)
        self.signal_history.append(event)
        return event

    def exit(
        self,
        index: int,
        timestamp: Optional[pd.Timestamp],
        price: float,
        reason: ExitReason,
    ) -> Trade:
        """Convert all shares to cash at ``price`` and record the trade."""
        if not self.is_long:
            raise ValueError("No open position to exit")
        pnl = self.pnl_percent(price)
        trade = Trade(
            entry_index=self.entry_index,
            exit_index=index,
            entry_timestamp=self.entry_timestamp,
            exit_timestamp=timestamp,
            entry_price=self.entry_price,
            exit_price=price,
            pnl_percent=pnl,
            outcome=TradeOutcome.WIN if pnl > 0 else TradeOutcome.LOSS,
            exit_reason=reason,
        )
        self.cash = self.shares_held * price
        self.shares_held = 0.0
        self.entry_price = None
        self.entry_index = None
        self.entry_timestamp = None
        self.trade_count += 1
        if pnl > 0:
            self.win_count += 1
        return trade

    def mark_to_market(self, price: float) -> None:
        """Value an open position at ``price`` without recording a trade."""
        if self.is_long:
            self.cash = self.shares_held * price
            self.shares_held = 0.0
            self.entry_price = None
            self.entry_index = None
            self.entry_timestamp = None


@dataclass
class BacktestResult:
    """Results from a single-position backtest."""
    initial_capital: float
    final_capital: float
    total_return_percent: float
    buy_and_hold_percent: float

    trade_count: int
    win_count: int
    win_rate: float  # Fraction in [0, 1]; 0.0 when no trades

    trades: List[Trade]
    signal_history: List[EntryEvent]  # Entries only, chronological

    # Per evaluated bar: price, score, cash, shares, value
    equity: pd.DataFrame

    open_at_end: bool = False  # Position was marked to market at the last close
    start_index: int = 0

    def recent_signals(self, count: int) -> List[EntryEvent]:
        return self.signal_history[-count:] if count > 0 else []
