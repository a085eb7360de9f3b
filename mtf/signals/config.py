"""
Strategy configuration for multi-timeframe scoring and backtesting.

All config values are frozen dataclasses passed explicitly to the snapshot
builder, the scorer and the simulator; nothing reads process-wide state.
Config validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import dataclass, field, replace
from typing import Dict

from ..shared.defaults import (
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    SMA_FAST_PERIOD, SMA_SLOW_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    WEIGHT_MONTHLY_TREND, WEIGHT_WEEKLY_TREND, WEIGHT_WEEKLY_MACD,
    WEIGHT_DAILY_TREND, WEIGHT_DAILY_MACD, WEIGHT_DAILY_RSI,
    STRONG_ACTION_SCORE, ACTION_SCORE,
    WEEKLY_PROXY_FAST, WEEKLY_PROXY_SLOW,
    MONTHLY_PROXY_FAST, MONTHLY_PROXY_SLOW,
    INITIAL_CAPITAL, WARMUP_BARS,
    ENTRY_SCORE_THRESHOLD, EXIT_SCORE_THRESHOLD, ENTRY_RSI_MAX,
    STOP_LOSS_PCT, TAKE_PROFIT_PCT,
)


def _require_period(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


def _require_fast_below_slow(label: str, fast: int, slow: int) -> None:
    if fast >= slow:
        raise ValueError(
            f"{label} fast period ({fast}) must be less than slow period ({slow})"
        )


@dataclass(frozen=True)
class IndicatorConfig:
    """Indicator parameters shared by every timeframe."""
    rsi_period: int = RSI_PERIOD
    rsi_oversold: float = RSI_OVERSOLD
    rsi_overbought: float = RSI_OVERBOUGHT
    sma_fast_period: int = SMA_FAST_PERIOD
    sma_slow_period: int = SMA_SLOW_PERIOD
    macd_fast: int = MACD_FAST
    macd_slow: int = MACD_SLOW
    macd_signal: int = MACD_SIGNAL

    def __post_init__(self) -> None:
        for name in ("rsi_period", "sma_fast_period", "sma_slow_period",
                     "macd_fast", "macd_slow", "macd_signal"):
            _require_period(name, getattr(self, name))
        _require_fast_below_slow("SMA", self.sma_fast_period, self.sma_slow_period)
        _require_fast_below_slow("MACD", self.macd_fast, self.macd_slow)
        if not (0 <= self.rsi_oversold < self.rsi_overbought <= 100):
            raise ValueError(
                f"RSI oversold ({self.rsi_oversold}) must be less than overbought "
                f"({self.rsi_overbought}), both within [0, 100]"
            )


@dataclass(frozen=True)
class ScoringWeights:
    """Additive weights per signal and the net-score thresholds for actions."""
    monthly_trend: int = WEIGHT_MONTHLY_TREND
    weekly_trend: int = WEIGHT_WEEKLY_TREND
    weekly_macd: int = WEIGHT_WEEKLY_MACD
    daily_trend: int = WEIGHT_DAILY_TREND
    daily_macd: int = WEIGHT_DAILY_MACD
    daily_rsi: int = WEIGHT_DAILY_RSI
    strong_action_score: int = STRONG_ACTION_SCORE  # |net| >= this -> STRONG_BUY / STRONG_SELL
    action_score: int = ACTION_SCORE  # |net| >= this -> BUY / SELL

    def __post_init__(self) -> None:
        for name in ("monthly_trend", "weekly_trend", "weekly_macd",
                     "daily_trend", "daily_macd", "daily_rsi"):
            if getattr(self, name) < 0:
                raise ValueError(f"weight {name} must be >= 0, got {getattr(self, name)}")
        if not (0 < self.action_score <= self.strong_action_score):
            raise ValueError(
                f"action_score ({self.action_score}) must be > 0 and <= "
                f"strong_action_score ({self.strong_action_score})"
            )


@dataclass(frozen=True)
class BacktestConfig:
    """Risk and entry/exit parameters for the single-position simulator."""
    initial_capital: float = INITIAL_CAPITAL
    warmup_bars: int = WARMUP_BARS
    entry_score_threshold: int = ENTRY_SCORE_THRESHOLD
    exit_score_threshold: int = EXIT_SCORE_THRESHOLD
    entry_rsi_max: float = ENTRY_RSI_MAX  # Enter only while daily RSI is below this
    stop_loss_pct: float = STOP_LOSS_PCT
    take_profit_pct: float = TAKE_PROFIT_PCT

    # Longer daily SMAs standing in for weekly / monthly trend
    weekly_proxy_fast: int = WEEKLY_PROXY_FAST
    weekly_proxy_slow: int = WEEKLY_PROXY_SLOW
    monthly_proxy_fast: int = MONTHLY_PROXY_FAST
    monthly_proxy_slow: int = MONTHLY_PROXY_SLOW

    def __post_init__(self) -> None:
        if self.initial_capital <= 0:
            raise ValueError(f"initial_capital must be > 0, got {self.initial_capital}")
        if self.warmup_bars < 1:
            raise ValueError(f"warmup_bars must be >= 1, got {self.warmup_bars}")
        if self.entry_score_threshold <= self.exit_score_threshold:
            raise ValueError(
                f"entry_score_threshold ({self.entry_score_threshold}) must be greater than "
                f"exit_score_threshold ({self.exit_score_threshold})"
            )
        if self.stop_loss_pct <= 0:
            raise ValueError(f"stop_loss_pct must be > 0, got {self.stop_loss_pct}")
        if self.take_profit_pct <= 0:
            raise ValueError(f"take_profit_pct must be > 0, got {self.take_profit_pct}")
        for name in ("weekly_proxy_fast", "weekly_proxy_slow",
                     "monthly_proxy_fast", "monthly_proxy_slow"):
            _require_period(name, getattr(self, name))
        _require_fast_below_slow("Weekly proxy", self.weekly_proxy_fast, self.weekly_proxy_slow)
        _require_fast_below_slow("Monthly proxy", self.monthly_proxy_fast, self.monthly_proxy_slow)


@dataclass(frozen=True)
class StrategyConfig:
    """Complete configuration: indicators, scoring weights and backtest rules."""
    name: str = "baseline"
    description: str = ""
    indicators: IndicatorConfig = field(default_factory=IndicatorConfig)
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    backtest: BacktestConfig = field(default_factory=BacktestConfig)

    def __post_init__(self) -> None:
        if self.backtest.warmup_bars < self.longest_window:
            raise ValueError(
                f"warmup_bars ({self.backtest.warmup_bars}) must cover the longest "
                f"SMA window ({self.longest_window})"
            )

    @property
    def longest_window(self) -> int:
        """Longest SMA window the backtest reads on the daily series."""
        return max(
            self.indicators.sma_slow_period,
            self.backtest.weekly_proxy_slow,
            self.backtest.monthly_proxy_slow,
        )


BASELINE_CONFIG = StrategyConfig(
    name="baseline",
    description="Default weights: monthly 3, weekly 2, daily 1; 5% stop, 15% target",
)

PRESET_CONFIGS: Dict[str, StrategyConfig] = {
    "baseline": BASELINE_CONFIG,
    "conservative": StrategyConfig(
        name="conservative",
        description="Requires near-full alignment, tighter stop and target",
        backtest=replace(
            BacktestConfig(),
            entry_score_threshold=5,
            entry_rsi_max=60.0,
            stop_loss_pct=3.0,
            take_profit_pct=10.0,
        ),
    ),
    "aggressive": StrategyConfig(
        name="aggressive",
        description="Enters on weaker alignment, wider stop and target",
        backtest=replace(
            BacktestConfig(),
            entry_score_threshold=3,
            exit_score_threshold=-3,
            entry_rsi_max=70.0,
            stop_loss_pct=8.0,
            take_profit_pct=25.0,
        ),
    ),
}
