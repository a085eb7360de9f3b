"""
Backtest evaluation module.

Provides bar-by-bar evaluation that never has access to future data:
the multi-timeframe backtest, the single-timeframe baseline, and the
top-down analysis pipeline that combines them.
"""
from .backtest import BacktestSimulator, run_backtest
from .backtest_types import BacktestResult, BacktestState, EntryEvent, Trade
from .baseline import run_single_timeframe_baseline
from .analysis import MultiTimeframeAnalyzer, AnalysisReport

__all__ = [
    'BacktestSimulator',
    'run_backtest',
    'BacktestResult',
    'BacktestState',
    'EntryEvent',
    'Trade',
    'run_single_timeframe_baseline',
    'MultiTimeframeAnalyzer',
    'AnalysisReport',
]
