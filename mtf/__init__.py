"""
Multi-timeframe trading analysis.

Provides unified interfaces for:
- Bar ingestion and validation (records, CSV, JSON)
- Weekly / monthly aggregation of daily bars
- Indicator calculations (SMA, EMA, RSI, MACD)
- Multi-timeframe scoring
- Single-position backtesting
"""
