"""
Command-line entry points.

Provides command-line interfaces for:
- Multi-timeframe snapshot analysis (python -m cli.analyze)
- Multi-timeframe backtesting (python -m cli.backtest)
"""
