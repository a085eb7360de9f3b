"""
Data loading, validation and aggregation module.

Provides a unified interface for loading daily bars from disk, validating
bar records at the ingestion boundary, and folding daily bars into weekly
and monthly buckets.
"""
from .loader import DataLoader
from .validation import (
    BarValidationError,
    bars_from_records,
    validate_ohlcv,
    validate_bars,
    OHLCV_COLUMNS,
)
from .aggregation import (
    BarAggregator,
    aggregate_to_weekly,
    aggregate_to_monthly,
    weekly_key,
    monthly_key,
)

__all__ = [
    'DataLoader',
    'BarValidationError',
    'bars_from_records',
    'validate_ohlcv',
    'validate_bars',
    'OHLCV_COLUMNS',
    'BarAggregator',
    'aggregate_to_weekly',
    'aggregate_to_monthly',
    'weekly_key',
    'monthly_key',
]
