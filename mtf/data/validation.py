"""
Bar ingestion and validation.

Every bar sequence entering the pipeline passes through here first. Numeric
fields may arrive as numbers or numeric strings; both are normalized to
float64. Anything else (booleans, empty or non-numeric strings, NaN, +/-inf,
missing fields, unordered or duplicate timestamps) raises BarValidationError
before any indicator runs.
"""
from __future__ import annotations

import math
import numbers
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Mapping

import pandas as pd

OHLCV_COLUMNS = ("Open", "High", "Low", "Close", "Volume")
TIMESTAMP_KEYS = ("timestamp", "date", "Date", "Timestamp")


class BarValidationError(ValueError):
    """Raised when bar input is malformed; names the offending row and field."""
    pass


def parse_number(value: Any, field: str, row: Any) -> float:
    """
    Normalize one numeric field to a finite float.

    Args:
        value: Raw value (int, float, Decimal or numeric string)
        field: Field name (for the error message)
        row: Row label (for the error message)

    Raises:
        BarValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise BarValidationError(f"Row {row}: field '{field}' is a boolean ({value!r})")
    if isinstance(value, (numbers.Real, Decimal)):
        result = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise BarValidationError(f"Row {row}: field '{field}' is empty")
        try:
            result = float(text)
        except ValueError:
            raise BarValidationError(
                f"Row {row}: field '{field}' is not numeric ({value!r})"
            ) from None
    else:
        raise BarValidationError(
            f"Row {row}: field '{field}' has unsupported type {type(value).__name__}"
        )
    if not math.isfinite(result):
        raise BarValidationError(f"Row {row}: field '{field}' is not finite ({value!r})")
    return result


def parse_timestamp(value: Any, row: Any) -> pd.Timestamp:
    """Parse an ISO-8601 string, date/datetime, or epoch seconds into a Timestamp."""
    if value is None or isinstance(value, bool):
        raise BarValidationError(f"Row {row}: missing or invalid timestamp ({value!r})")
    if not isinstance(value, (pd.Timestamp, datetime, date, str, numbers.Real)):
        raise BarValidationError(
            f"Row {row}: timestamp has unsupported type {type(value).__name__}"
        )
    try:
        if isinstance(value, numbers.Real):
            ts = pd.Timestamp(float(value), unit="s")
        else:
            ts = pd.Timestamp(value)
    except (ValueError, OverflowError) as e:
        raise BarValidationError(f"Row {row}: unparseable timestamp {value!r}: {e}") from e
    if pd.isna(ts):
        raise BarValidationError(f"Row {row}: timestamp is missing")
    return ts


def _check_ordering(index: pd.Index) -> None:
    """Timestamps must be strictly increasing (which also rules out duplicates)."""
    for i in range(1, len(index)):
        if not index[i] > index[i - 1]:
            raise BarValidationError(
                f"Row {i}: timestamp {index[i]} is not after previous timestamp {index[i - 1]}"
            )


def bars_from_records(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Build a validated OHLCV DataFrame from bar records.

    Each record needs a timestamp (``timestamp`` or ``date``) and the fields
    ``open``, ``high``, ``low``, ``close``, ``volume`` (case-insensitive).

    Returns:
        DataFrame with DatetimeIndex named "Date" and float64 OHLCV columns
    """
    timestamps: List[pd.Timestamp] = []
    rows: List[List[float]] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise BarValidationError(f"Row {i}: expected a mapping, got {type(record).__name__}")
        lowered = {str(k).lower(): v for k, v in record.items()}
        ts_value = next((record[k] for k in TIMESTAMP_KEYS if k in record), None)
        timestamps.append(parse_timestamp(ts_value, i))
        values = []
        for column in OHLCV_COLUMNS:
            key = column.lower()
            if key not in lowered:
                raise BarValidationError(f"Row {i}: missing field '{key}'")
            values.append(parse_number(lowered[key], key, i))
        rows.append(values)

    index = pd.DatetimeIndex(timestamps, name="Date")
    _check_ordering(index)
    return pd.DataFrame(rows, index=index, columns=list(OHLCV_COLUMNS), dtype="float64")


def validate_ohlcv(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate an OHLCV DataFrame (e.g. freshly read from CSV).

    Column names are matched case-insensitively; extra columns are dropped.
    Object columns holding numeric strings are converted cell by cell.

    Returns:
        New DataFrame with DatetimeIndex and float64 OHLCV columns
    """
    by_lower = {str(c).lower(): c for c in df.columns}
    missing = [c for c in OHLCV_COLUMNS if c.lower() not in by_lower]
    if missing:
        raise BarValidationError(
            f"Missing columns {missing}. Available: {list(df.columns)}"
        )

    index = pd.DatetimeIndex(
        [parse_timestamp(v, i) for i, v in enumerate(df.index)], name="Date"
    )
    _check_ordering(index)

    out = pd.DataFrame(index=index)
    for column in OHLCV_COLUMNS:
        source = df[by_lower[column.lower()]]
        out[column] = [
            parse_number(value, column, i) for i, value in enumerate(source.tolist())
        ]
    return out.astype("float64")


def validate_bars(bars: Any) -> pd.DataFrame:
    """
    Validate any supported bar input: a DataFrame or an iterable of records.

    Raises:
        BarValidationError: On the first malformed row or field
    """
    if isinstance(bars, pd.DataFrame):
        return validate_ohlcv(bars)
    if isinstance(bars, (str, bytes, pd.Series)):
        raise BarValidationError(
            f"Expected a DataFrame or a sequence of bar records, got {type(bars).__name__}"
        )
    return bars_from_records(bars)
