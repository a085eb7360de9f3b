"""
Signal generation module.

Turns indicator values into per-timeframe snapshots and combines the
monthly, weekly and daily snapshots into one weighted score and action.
"""
from .config import (
    IndicatorConfig,
    ScoringWeights,
    BacktestConfig,
    StrategyConfig,
    BASELINE_CONFIG,
    PRESET_CONFIGS,
)
from .config_loader import load_config_from_yaml, config_from_dict
from .snapshot import (
    TimeframeSnapshot,
    analyze_timeframe,
    classify_trend,
    classify_macd,
    classify_rsi,
)
from .scorer import SignalScorer, ScoreResult, ScoreTally, classify_score

__all__ = [
    'IndicatorConfig',
    'ScoringWeights',
    'BacktestConfig',
    'StrategyConfig',
    'BASELINE_CONFIG',
    'PRESET_CONFIGS',
    'load_config_from_yaml',
    'config_from_dict',
    'TimeframeSnapshot',
    'analyze_timeframe',
    'classify_trend',
    'classify_macd',
    'classify_rsi',
    'SignalScorer',
    'ScoreResult',
    'ScoreTally',
    'classify_score',
]
