"""
Tests for weekly and monthly bar aggregation.
"""
import pytest
import pandas as pd
from mtf.data.aggregation import (
    BarAggregator,
    aggregate_to_weekly,
    aggregate_to_monthly,
    weekly_key,
    monthly_key,
)
from mtf.shared.types import Timeframe


@pytest.fixture
def two_weeks():
    """14 daily closes starting Monday 2024-01-01."""
    closes = [10, 12, 9, 11, 13, 8, 10, 20, 25, 18, 22, 21, 19, 24]
    dates = pd.date_range('2024-01-01', periods=14, freq='D')
    return pd.DataFrame({'Close': [float(c) for c in closes]}, index=dates)


class TestPeriodKeys:
    """Test bucket key formatting."""

    def test_weekly_key_is_zero_padded(self):
        assert weekly_key(pd.Timestamp('2024-02-14')) == '2024-W07'

    def test_weekly_key_uses_iso_year(self):
        # Jan 1 2021 belongs to the last ISO week of 2020
        assert weekly_key(pd.Timestamp('2021-01-01')) == '2020-W53'

    def test_monthly_key(self):
        assert monthly_key(pd.Timestamp('2024-03-31')) == '2024-03'


class TestWeeklyAggregation:
    """Test weekly buckets."""

    def test_two_full_weeks(self, two_weeks):
        weekly = aggregate_to_weekly(two_weeks)

        assert list(weekly['period_key']) == ['2024-W01', '2024-W02']
        assert list(weekly['Open']) == [10.0, 20.0]
        assert list(weekly['High']) == [13.0, 25.0]
        assert list(weekly['Low']) == [8.0, 18.0]
        assert list(weekly['Close']) == [10.0, 24.0]
        assert list(weekly['bar_count']) == [7, 7]

    def test_indexed_by_first_bar_of_bucket(self, two_weeks):
        weekly = aggregate_to_weekly(two_weeks)
        assert list(weekly.index) == [pd.Timestamp('2024-01-01'), pd.Timestamp('2024-01-08')]

    def test_accepts_close_series(self, two_weeks):
        weekly = aggregate_to_weekly(two_weeks['Close'])
        assert len(weekly) == 2

    def test_year_boundary_stays_in_one_bucket(self):
        dates = pd.DatetimeIndex(['2020-12-31', '2021-01-01'])
        bars = pd.DataFrame({'Close': [1.0, 2.0]}, index=dates)

        weekly = aggregate_to_weekly(bars)

        assert list(weekly['period_key']) == ['2020-W53']
        assert weekly['bar_count'].iloc[0] == 2

    def test_incomplete_last_week_is_kept(self, two_weeks):
        weekly = aggregate_to_weekly(two_weeks.iloc[:10])
        assert list(weekly['bar_count']) == [7, 3]
        assert weekly['Close'].iloc[-1] == 18.0

    def test_high_low_bound_open_and_close(self, two_weeks):
        weekly = aggregate_to_weekly(two_weeks)
        assert (weekly['High'] >= weekly[['Open', 'Close']].max(axis=1)).all()
        assert (weekly['Low'] <= weekly[['Open', 'Close']].min(axis=1)).all()

    def test_bar_counts_sum_to_input(self, two_weeks):
        weekly = aggregate_to_weekly(two_weeks)
        assert weekly['bar_count'].sum() == len(two_weeks)


class TestMonthlyAggregation:
    """Test monthly buckets."""

    def test_splits_at_month_boundary(self):
        dates = pd.date_range('2024-01-30', periods=4, freq='D')
        bars = pd.DataFrame({'Close': [1.0, 2.0, 3.0, 4.0]}, index=dates)

        monthly = aggregate_to_monthly(bars)

        assert list(monthly['period_key']) == ['2024-01', '2024-02']
        assert list(monthly['bar_count']) == [2, 2]
        assert list(monthly['Open']) == [1.0, 3.0]
        assert list(monthly['Close']) == [2.0, 4.0]

    def test_full_year(self):
        dates = pd.date_range('2023-01-01', '2023-12-31', freq='D')
        bars = pd.DataFrame({'Close': range(1, len(dates) + 1)}, index=dates, dtype=float)

        monthly = aggregate_to_monthly(bars)

        assert len(monthly) == 12
        assert monthly['period_key'].is_unique
        assert monthly['bar_count'].sum() == len(dates)


class TestEdgeCases:
    """Test empty input and invalid arguments."""

    def test_empty_input_gives_no_buckets(self):
        bars = pd.DataFrame({'Close': []}, index=pd.DatetimeIndex([]), dtype=float)
        assert len(aggregate_to_weekly(bars)) == 0
        assert len(aggregate_to_monthly(bars)) == 0

    def test_single_bar(self):
        bars = pd.DataFrame({'Close': [42.0]}, index=pd.DatetimeIndex(['2024-05-15']))
        weekly = aggregate_to_weekly(bars)

        assert len(weekly) == 1
        row = weekly.iloc[0]
        assert row['Open'] == row['High'] == row['Low'] == row['Close'] == 42.0
        assert row['bar_count'] == 1

    def test_daily_timeframe_rejected(self):
        with pytest.raises(ValueError, match="Cannot aggregate to daily"):
            BarAggregator(Timeframe.DAILY)

    def test_unsorted_input_rejected(self):
        dates = pd.DatetimeIndex(['2024-01-02', '2024-01-01'])
        bars = pd.DataFrame({'Close': [1.0, 2.0]}, index=dates)
        with pytest.raises(ValueError, match="ascending"):
            aggregate_to_weekly(bars)

    def test_requires_datetime_index(self):
        bars = pd.DataFrame({'Close': [1.0, 2.0]})
        with pytest.raises(ValueError, match="DatetimeIndex"):
            aggregate_to_monthly(bars)

    def test_missing_close_column(self, two_weeks):
        with pytest.raises(ValueError, match="Column 'Close' not found"):
            aggregate_to_weekly(two_weeks.rename(columns={'Close': 'Price'}))
