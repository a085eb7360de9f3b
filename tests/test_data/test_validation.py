"""
Tests for bar validation at the ingestion boundary.
"""
from decimal import Decimal

import pytest
import numpy as np
import pandas as pd
from mtf.data.validation import (
    BarValidationError,
    bars_from_records,
    parse_number,
    parse_timestamp,
    validate_bars,
    validate_ohlcv,
)


def make_record(date, close=100.0, **overrides):
    record = {
        'date': date,
        'open': close,
        'high': close + 1,
        'low': close - 1,
        'close': close,
        'volume': 1000,
    }
    record.update(overrides)
    return record


class TestParseNumber:
    """Test numeric field normalization."""

    def test_numbers_and_numeric_strings(self):
        assert parse_number(5, 'close', 0) == 5.0
        assert parse_number(' 101.25 ', 'close', 0) == 101.25
        assert parse_number(Decimal('3.5'), 'close', 0) == 3.5
        assert parse_number(np.float64(2.0), 'close', 0) == 2.0

    @pytest.mark.parametrize('value,message', [
        (True, 'boolean'),
        ('', 'empty'),
        ('abc', 'not numeric'),
        (None, 'unsupported type'),
        ([1], 'unsupported type'),
        (float('nan'), 'not finite'),
        (float('inf'), 'not finite'),
        ('-inf', 'not finite'),
    ])
    def test_rejects_malformed_values(self, value, message):
        with pytest.raises(BarValidationError, match=message):
            parse_number(value, 'close', 3)

    def test_error_names_row_and_field(self):
        with pytest.raises(BarValidationError, match="Row 7: field 'high'"):
            parse_number('x', 'high', 7)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_number('x', 'close', 0)


class TestParseTimestamp:
    """Test timestamp parsing."""

    def test_iso_string(self):
        assert parse_timestamp('2024-03-01', 0) == pd.Timestamp('2024-03-01')

    def test_epoch_seconds(self):
        assert parse_timestamp(86400, 0) == pd.Timestamp('1970-01-02')

    @pytest.mark.parametrize('value', [None, True, 'not a date', ''])
    def test_rejects_invalid(self, value):
        with pytest.raises(BarValidationError, match='Row 2'):
            parse_timestamp(value, 2)


class TestBarsFromRecords:
    """Test building a DataFrame from bar records."""

    def test_valid_records(self):
        bars = bars_from_records([
            make_record('2024-01-01', 100),
            make_record('2024-01-02', '101.5'),
        ])

        assert list(bars.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
        assert isinstance(bars.index, pd.DatetimeIndex)
        assert bars.index.name == 'Date'
        assert (bars.dtypes == np.float64).all()
        assert bars['Close'].tolist() == [100.0, 101.5]

    def test_keys_are_case_insensitive(self):
        bars = bars_from_records([
            {'Date': '2024-01-01', 'Open': 1, 'HIGH': 2, 'low': 0.5, 'Close': 1.5, 'Volume': 10},
        ])
        assert bars['High'].iloc[0] == 2.0

    def test_empty_records(self):
        bars = bars_from_records([])
        assert bars.empty
        assert list(bars.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']

    def test_missing_field(self):
        record = make_record('2024-01-02')
        del record['volume']
        with pytest.raises(BarValidationError, match="Row 1: missing field 'volume'"):
            bars_from_records([make_record('2024-01-01'), record])

    def test_missing_timestamp(self):
        record = make_record('2024-01-01')
        del record['date']
        with pytest.raises(BarValidationError, match='Row 0'):
            bars_from_records([record])

    def test_non_finite_close(self):
        with pytest.raises(BarValidationError, match="field 'close' is not finite"):
            bars_from_records([make_record('2024-01-01', close=float('nan'))])

    def test_non_numeric_string(self):
        with pytest.raises(BarValidationError, match="field 'open' is not numeric"):
            bars_from_records([make_record('2024-01-01', open='n/a')])

    def test_duplicate_timestamp(self):
        with pytest.raises(BarValidationError, match='Row 1: timestamp .* is not after'):
            bars_from_records([make_record('2024-01-01'), make_record('2024-01-01')])

    def test_out_of_order(self):
        with pytest.raises(BarValidationError, match='Row 2'):
            bars_from_records([
                make_record('2024-01-01'),
                make_record('2024-01-03'),
                make_record('2024-01-02'),
            ])

    def test_non_mapping_record(self):
        with pytest.raises(BarValidationError, match='expected a mapping'):
            bars_from_records([make_record('2024-01-01'), [1, 2, 3]])


class TestValidateOhlcv:
    """Test DataFrame validation."""

    def test_string_cells_converted(self):
        raw = pd.DataFrame(
            {
                'open': ['1', '2'], 'high': ['2', '3'], 'low': ['0.5', '1.5'],
                'close': ['1.5', '2.5'], 'volume': ['10', '20'], 'extra': ['a', 'b'],
            },
            index=['2024-01-01', '2024-01-02'],
        )

        bars = validate_ohlcv(raw)

        assert list(bars.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
        assert bars['Close'].tolist() == [1.5, 2.5]
        assert isinstance(bars.index, pd.DatetimeIndex)

    def test_missing_column(self):
        raw = pd.DataFrame({'Close': [1.0]}, index=['2024-01-01'])
        with pytest.raises(BarValidationError, match='Missing columns'):
            validate_ohlcv(raw)

    def test_empty_cell(self):
        raw = pd.DataFrame(
            {'Open': ['1'], 'High': ['1'], 'Low': ['1'], 'Close': [''], 'Volume': ['1']},
            index=['2024-01-01'],
        )
        with pytest.raises(BarValidationError, match="Row 0: field 'Close' is empty"):
            validate_ohlcv(raw)


class TestValidateBars:
    """Test input dispatch."""

    def test_accepts_dataframe(self):
        dates = pd.date_range('2024-01-01', periods=3, freq='D')
        df = pd.DataFrame(
            {c: [1.0, 2.0, 3.0] for c in ['Open', 'High', 'Low', 'Close', 'Volume']},
            index=dates,
        )
        assert validate_bars(df)['Close'].tolist() == [1.0, 2.0, 3.0]

    def test_accepts_records(self):
        assert len(validate_bars([make_record('2024-01-01')])) == 1

    @pytest.mark.parametrize('value', ['bars.csv', b'raw', pd.Series([1.0, 2.0])])
    def test_rejects_non_bar_input(self, value):
        with pytest.raises(BarValidationError, match='Expected a DataFrame'):
            validate_bars(value)
