"""
Centralized default values for indicator, scoring and backtest parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
Config dataclasses read from here; nothing reads these at run time.
"""

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70

# Trend SMAs (per timeframe snapshot and daily proxy in the backtest)
SMA_FAST_PERIOD = 20
SMA_SLOW_PERIOD = 50

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# Scoring weights (monthly outweighs weekly outweighs daily)
WEIGHT_MONTHLY_TREND = 3
WEIGHT_WEEKLY_TREND = 2
WEIGHT_WEEKLY_MACD = 1
WEIGHT_DAILY_TREND = 1
WEIGHT_DAILY_MACD = 1
WEIGHT_DAILY_RSI = 1

# Net score thresholds for the discrete action
STRONG_ACTION_SCORE = 5
ACTION_SCORE = 2

# Higher-timeframe proxies on the daily series (backtest only)
WEEKLY_PROXY_FAST = 25  # ~5 weeks
WEEKLY_PROXY_SLOW = 50  # ~10 weeks
MONTHLY_PROXY_FAST = 40  # ~2 months
MONTHLY_PROXY_SLOW = 100  # ~5 months

# Backtest defaults
INITIAL_CAPITAL = 10000.0
WARMUP_BARS = 100  # Must cover the longest proxy SMA
ENTRY_SCORE_THRESHOLD = 4
EXIT_SCORE_THRESHOLD = -2
ENTRY_RSI_MAX = 65.0
STOP_LOSS_PCT = 5.0
TAKE_PROFIT_PCT = 15.0

# Single-timeframe baseline
BASELINE_WARMUP_BARS = 50
BASELINE_TREND_SMA = 50

# Reporting
RECENT_SIGNALS = 5
