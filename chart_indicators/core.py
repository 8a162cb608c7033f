"""
Core series handling: input coercion, sanitizing and OHLCV channel extraction.

Every indicator converts its input to a fresh float64 array first, so
callers' lists, arrays and Series are never written to. Missing samples
(None / NaN) are carried as NaN.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

import numpy as np
import pandas as pd
from numba import jit


# Type aliases
ArrayLike = Union[np.ndarray, pd.Series, Sequence[float]]
CandlesLike = Union[pd.DataFrame, Sequence["Candle"], Sequence[Mapping[str, Any]]]

OHLCV_CHANNELS = ('open', 'high', 'low', 'close', 'volume')


@dataclass(frozen=True)
class Candle:
    """OHLCV sample for one time bucket."""
    time: Any
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Candle":
        """Build a candle from a decoded API record."""
        missing = [col for col in OHLCV_CHANNELS[:4] if col not in data]
        if missing:
            raise ValueError(f"Missing required fields: {missing}")
        return cls(
            time=data.get('time'),
            open=data['open'],
            high=data['high'],
            low=data['low'],
            close=data['close'],
            volume=data.get('volume', 0.0),
        )


# ============================================================================
# Input / Output Alignment
# ============================================================================

def to_float_array(x: ArrayLike) -> np.ndarray:
    """Copy a price series into a float64 array, None becomes NaN."""
    if x is None:
        return np.empty(0, dtype=np.float64)
    if isinstance(x, pd.Series):
        return pd.to_numeric(x, errors='coerce').to_numpy(dtype=np.float64, copy=True, na_value=np.nan)
    return np.array(x, dtype=np.float64).reshape(-1)


def like_input(values: np.ndarray, like: Any) -> ArrayLike:
    """Return values as a Series on the caller's index when the input was a Series."""
    if isinstance(like, pd.Series):
        return pd.Series(values, index=like.index[:len(values)])
    return values


# ============================================================================
# Sanitizer
# ============================================================================

def is_valid(value: Any) -> bool:
    """True for a number that is neither None nor NaN. Bools count as 1 / 0."""
    if value is None:
        return False
    if not isinstance(value, (int, float, np.number, np.bool_)):
        return False
    return not np.isnan(value)


def has_valid_data(x: ArrayLike) -> bool:
    """
    Check that a series is non-empty and holds at least one finite number.

    Indicators run this before computing and return their sentinel output
    when it fails.
    """
    if x is None:
        return False
    values = to_float_array(x)
    if values.size == 0:
        return False
    return bool(np.isfinite(values).any())


@jit(nopython=True)
def _fill_nulls(values: np.ndarray) -> np.ndarray:
    """Forward fill, then backward fill, then zero whatever is left."""
    result = values.copy()
    length = len(result)

    has_last = False
    last = 0.0
    for i in range(length):
        if np.isnan(result[i]):
            if has_last:
                result[i] = last
        else:
            last = result[i]
            has_last = True

    has_last = False
    for i in range(length - 1, -1, -1):
        if np.isnan(result[i]):
            if has_last:
                result[i] = last
            else:
                result[i] = 0.0
        else:
            last = result[i]
            has_last = True

    return result


def fill_null_values(x: ArrayLike) -> ArrayLike:
    """
    Repair gaps in a price series.

    Each missing sample takes the most recent earlier valid value; samples
    with no earlier valid value take the nearest later one. A series with
    no valid value at all becomes zeros. The result has the input's length
    and no NaN, and filling it again is a no-op.
    """
    if x is None:
        return np.empty(0, dtype=np.float64)
    return like_input(_fill_nulls(to_float_array(x)), x)


fill_gaps = fill_null_values


# ============================================================================
# Channel Extraction
# ============================================================================

def extract_channel(candles: CandlesLike, channel: str) -> ArrayLike:
    """
    Project OHLCV samples down to one numeric channel.

    Parameters:
    -----------
    candles : DataFrame, sequence of Candle, or sequence of mappings
        Chronologically ordered OHLCV samples
    channel : str
        One of 'open', 'high', 'low', 'close', 'volume'

    Returns:
    --------
    Series on the DataFrame's index for DataFrame input, float64 array
    otherwise. No validation of the values themselves is done.
    """
    if channel not in OHLCV_CHANNELS:
        raise ValueError(f"Unknown channel: {channel}. Use one of {OHLCV_CHANNELS}")

    if isinstance(candles, pd.DataFrame):
        if channel not in candles.columns:
            raise ValueError(f"Missing required column: {channel}")
        return pd.Series(to_float_array(candles[channel]), index=candles.index)

    values = []
    for candle in candles:
        if isinstance(candle, Mapping):
            if channel not in candle:
                raise ValueError(f"Missing required field: {channel}")
            values.append(candle[channel])
        else:
            values.append(getattr(candle, channel))

    return np.array(values, dtype=np.float64)


def extract_open_prices(candles: CandlesLike) -> ArrayLike:
    """Open prices of an OHLCV series."""
    return extract_channel(candles, 'open')


def extract_high_prices(candles: CandlesLike) -> ArrayLike:
    """High prices of an OHLCV series."""
    return extract_channel(candles, 'high')


def extract_low_prices(candles: CandlesLike) -> ArrayLike:
    """Low prices of an OHLCV series."""
    return extract_channel(candles, 'low')


def extract_close_prices(candles: CandlesLike) -> ArrayLike:
    """Close prices of an OHLCV series."""
    return extract_channel(candles, 'close')


def extract_volumes(candles: CandlesLike) -> ArrayLike:
    """Volumes of an OHLCV series."""
    return extract_channel(candles, 'volume')
