"""
Unit tests for MACD, RSI and KDJ.
"""

import numpy as np
import pandas as pd

from chart_indicators import MACDResult, KDJResult, ema, kdj, macd, macd_hist, macd_signal, rsi


class TestMACD:
    """Tests for MACD."""

    def test_result_shape(self, sample_ohlcv_df):
        close = sample_ohlcv_df["close"].to_numpy()
        result = macd(close)

        assert isinstance(result, MACDResult)
        for line in result:
            assert len(line) == len(close)
            assert np.isfinite(line).all()

    def test_zero_until_slow_ema_is_seeded(self, sample_ohlcv_df):
        close = sample_ohlcv_df["close"].to_numpy()
        result = macd(close)

        assert np.all(result.macd[:25] == 0)
        assert result.macd[25] != 0

    def test_line_is_fast_minus_slow(self, sample_ohlcv_df):
        close = sample_ohlcv_df["close"].to_numpy()
        result = macd(close)

        expected = ema(close, 12) - ema(close, 26)
        np.testing.assert_allclose(result.macd[25:], expected[25:])

    def test_histogram(self, sample_ohlcv_df):
        result = macd(sample_ohlcv_df["close"].to_numpy())
        np.testing.assert_allclose(result.histogram, result.macd - result.signal)

    def test_short_input_is_all_zero(self):
        result = macd(list(range(1, 26)))

        for line in result:
            assert len(line) == 25
            assert np.all(line == 0)

    def test_no_usable_data_is_all_zero(self):
        result = macd([None] * 40)

        for line in result:
            assert len(line) == 40
            assert np.all(line == 0)

    def test_gaps_stay_finite(self, close_with_gaps):
        result = macd(close_with_gaps)

        for line in result:
            assert len(line) == len(close_with_gaps)
            assert np.isfinite(line).all()

    def test_constant_prices(self):
        result = macd([100.0] * 60)

        for line in result:
            np.testing.assert_allclose(line, 0.0, atol=1e-9)

    def test_custom_periods(self, sample_ohlcv_df):
        result = macd(sample_ohlcv_df["close"].to_numpy(), fast=5, slow=10, signal=3)

        assert np.all(result.macd[:9] == 0)
        assert result.macd[9] != 0

    def test_series_keeps_index(self, sample_ohlcv_df):
        result = macd(sample_ohlcv_df["close"])

        assert isinstance(result.signal, pd.Series)
        assert result.signal.index.equals(sample_ohlcv_df.index)

    def test_single_line_helpers(self, sample_ohlcv_df):
        close = sample_ohlcv_df["close"].to_numpy()
        result = macd(close)

        np.testing.assert_array_equal(macd_signal(close), result.signal)
        np.testing.assert_array_equal(macd_hist(close), result.histogram)


class TestRSI:
    """Tests for Wilder RSI."""

    def test_rising_prices_read_100(self):
        result = rsi(list(range(1, 21)), 14)

        assert len(result) == 20
        assert np.isnan(result[:14]).all()
        assert np.all(result[14:] == 100.0)

    def test_falling_prices_read_0(self):
        result = rsi(list(range(20, 0, -1)), 14)
        assert np.all(result[14:] == 0.0)

    def test_known_values(self):
        result = rsi([1.0, 2.0, 1.0, 2.0], 2)

        assert np.isnan(result[:2]).all()
        assert np.isclose(result[2], 50.0)
        # avg gain (0.5 + 1) / 2, avg loss (0.5 + 0) / 2
        assert np.isclose(result[3], 75.0)

    def test_bounds(self, sample_ohlcv_df):
        result = rsi(sample_ohlcv_df["close"].to_numpy())

        valid = result[~np.isnan(result)]
        assert len(valid) == len(result) - 14
        assert np.all(valid >= 0)
        assert np.all(valid <= 100)

    def test_not_enough_samples(self):
        result = rsi(list(range(14)), 14)

        assert len(result) == 14
        assert np.isnan(result).all()

        assert np.isnan(rsi(list(range(15)), 14)[:14]).all()
        assert not np.isnan(rsi(list(range(15)), 14)[14])

    def test_no_usable_data(self):
        result = rsi([None] * 30)

        assert len(result) == 30
        assert np.isnan(result).all()

    def test_gaps_are_filled(self, close_with_gaps):
        result = rsi(close_with_gaps)

        assert len(result) == len(close_with_gaps)
        assert not np.isnan(result[14:]).any()

    def test_does_not_mutate_input(self, sample_ohlcv_df):
        close = sample_ohlcv_df["close"].to_numpy()
        snapshot = close.copy()
        rsi(close)

        np.testing.assert_array_equal(close, snapshot)


class TestKDJ:
    """Tests for the KDJ oscillator."""

    def test_known_values(self):
        result = kdj([3.0, 4.0, 5.0, 6.0], [1.0, 2.0, 3.0, 4.0], [2.0, 3.0, 4.0, 5.0], 3)

        k2 = 2 / 3 * 50 + 1 / 3 * 75
        d2 = 2 / 3 * 50 + 1 / 3 * k2
        k3 = 2 / 3 * k2 + 1 / 3 * 75
        d3 = 2 / 3 * d2 + 1 / 3 * k3

        assert isinstance(result, KDJResult)
        assert np.isnan(result.k[:2]).all()
        np.testing.assert_allclose(result.k[2:], [k2, k3])
        np.testing.assert_allclose(result.d[2:], [d2, d3])
        np.testing.assert_allclose(result.j[2:], [3 * k2 - 2 * d2, 3 * k3 - 2 * d3])

    def test_fewer_samples_than_period(self):
        result = kdj([1.0] * 5, [1.0] * 5, [1.0] * 5, 9)

        for line in result:
            assert len(line) == 5
            assert np.isnan(line).all()

    def test_period_samples_is_not_enough(self):
        values = list(range(1, 10))
        result = kdj(values, values, values, 9)

        assert np.isnan(result.k).all()

    def test_flat_window_holds_neutral_state(self):
        result = kdj([10.0] * 12, [10.0] * 12, [10.0] * 12, 9)

        assert np.isnan(result.k[:8]).all()
        assert np.all(result.k[8:] == 50.0)
        assert np.all(result.d[8:] == 50.0)
        assert np.all(result.j[8:] == 50.0)

    def test_j_is_unbounded(self):
        highs = [float(i) for i in range(1, 11)]
        lows = [h - 1.0 for h in highs]

        result = kdj(highs, lows, highs, 3)

        assert np.nanmax(result.j) > 100

    def test_effective_length_is_shortest_input(self, sample_ohlcv_df):
        high = sample_ohlcv_df["high"].to_numpy()
        low = sample_ohlcv_df["low"].to_numpy()[:150]
        close = sample_ohlcv_df["close"].to_numpy()

        result = kdj(high, low, close)
        for line in result:
            assert len(line) == 150

    def test_defined_values(self, sample_ohlcv_df):
        result = kdj(
            sample_ohlcv_df["high"].to_numpy(),
            sample_ohlcv_df["low"].to_numpy(),
            sample_ohlcv_df["close"].to_numpy(),
        )

        assert np.isnan(result.k[:8]).all()
        assert not np.isnan(result.k[8:]).any()
        assert np.all((result.k[8:] >= 0) & (result.k[8:] <= 100))
        assert np.all((result.d[8:] >= 0) & (result.d[8:] <= 100))

    def test_no_usable_data(self):
        result = kdj([None] * 20, [1.0] * 20, [1.0] * 20)

        for line in result:
            assert len(line) == 20
            assert np.isnan(line).all()

    def test_series_keeps_close_index(self, sample_ohlcv_df):
        result = kdj(sample_ohlcv_df["high"], sample_ohlcv_df["low"], sample_ohlcv_df["close"])

        assert isinstance(result.j, pd.Series)
        assert result.j.index.equals(sample_ohlcv_df.index)

    def test_series_index_from_high_low_when_close_is_a_list(self, sample_ohlcv_df):
        result = kdj(
            sample_ohlcv_df["high"],
            sample_ohlcv_df["low"],
            sample_ohlcv_df["close"].tolist(),
        )

        assert isinstance(result.k, pd.Series)
        assert result.k.index.equals(sample_ohlcv_df.index)
