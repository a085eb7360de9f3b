"""
Indicator calculation module.

Provides all trading indicators:
- Simple and exponential moving averages
- RSI with full-window recomputation
- MACD line, signal and histogram

All indicators are pure: they never mutate their input and return series
aligned with it.
"""
from .technical import (
    TechnicalIndicators,
    MacdResult,
    sma,
    ema,
    rsi,
    macd,
)

__all__ = [
    'TechnicalIndicators',
    'MacdResult',
    'sma',
    'ema',
    'rsi',
    'macd',
]
