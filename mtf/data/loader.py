"""
Data loader for daily bar files.

Loads bars from disk with support for:
- CSV files (first column = date, OHLCV columns in any case)
- JSON files (list of {date, open, high, low, close, volume} records)
- Date range filtering

Every load goes through validation, so callers always get float64 OHLCV
with a strictly increasing DatetimeIndex.
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .validation import bars_from_records, validate_ohlcv

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".json")


class DataLoader:
    """
    Loads daily bars from a CSV or JSON file.

    Supports date range filtering and single-column access.
    """

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize the data loader.

        Args:
            data_path: Path to the CSV or JSON file containing the bars
        """
        self.data_path = Path(data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")
        if self.data_path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise ValueError(
                f"Unsupported data format '{self.data_path.suffix}'. "
                f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
            )

    def _read(self) -> pd.DataFrame:
        if self.data_path.suffix.lower() == ".json":
            with open(self.data_path, "r") as f:
                records = json.load(f)
            if not isinstance(records, list):
                raise ValueError(
                    f"Expected a JSON list of bar records in {self.data_path}, "
                    f"got {type(records).__name__}"
                )
            return bars_from_records(records)

        # Keep raw cells so validation sees malformed values instead of NaN
        raw = pd.read_csv(self.data_path, index_col=0, dtype=str, keep_default_na=False)
        return validate_ohlcv(raw)

    def load(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        column: Optional[str] = None,
    ) -> Union[pd.DataFrame, pd.Series]:
        """
        Load and validate bars with optional filtering.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.
            column: If specified, return Series for this column instead of DataFrame.

        Returns:
            DataFrame (or Series) with DatetimeIndex and float64 OHLCV columns

        Raises:
            BarValidationError: If any row is malformed
        """
        df = self._read()

        if start_date is not None:
            df = df[df.index >= pd.to_datetime(start_date)]
        if end_date is not None:
            df = df[df.index <= pd.to_datetime(end_date)]

        logger.info(f"Loaded {len(df)} bars from {self.data_path.name}")

        if column is not None:
            if column not in df.columns:
                raise ValueError(f"Column '{column}' not found. Available: {list(df.columns)}")
            return df[column]

        return df
