"""
Momentum and oscillator indicators.

MACD, Wilder RSI and KDJ. Every input is gap-filled before the recursive
smoothing runs, since a single NaN would otherwise poison every later
value.
"""

import logging
from typing import NamedTuple

import numpy as np
import pandas as pd
from numba import jit

from .core import ArrayLike, to_float_array, like_input, has_valid_data, fill_null_values
from .trend import ema

logger = logging.getLogger(__name__)


class MACDResult(NamedTuple):
    macd: ArrayLike
    signal: ArrayLike
    histogram: ArrayLike


class KDJResult(NamedTuple):
    k: ArrayLike
    d: ArrayLike
    j: ArrayLike


# ============================================================================
# MACD
# ============================================================================

@jit(nopython=True)
def _macd_line(ema_fast: np.ndarray, ema_slow: np.ndarray, slow: int) -> np.ndarray:
    """Fast minus slow EMA, zero until both are seeded."""
    length = len(ema_fast)
    result = np.zeros(length)

    for i in range(max(slow - 1, 0), length):
        if np.isnan(ema_fast[i]) or np.isnan(ema_slow[i]):
            result[i] = result[i - 1] if i > 0 else 0.0
        else:
            result[i] = ema_fast[i] - ema_slow[i]

    return result


def _zero_nan(values: np.ndarray) -> np.ndarray:
    return np.where(np.isnan(values), 0.0, values)


def macd(close: ArrayLike, fast: int = 12, slow: int = 26, signal: int = 9) -> MACDResult:
    """
    MACD indicator.

    Returns:
    --------
    MACDResult with fields 'macd', 'signal', 'histogram'

    Unlike the other indicators, MACD uses 0 rather than NaN where it
    cannot compute: the first slow-1 positions, and every position when
    the input is shorter than `slow` or has no usable data. All three
    outputs are always finite.
    """
    values = to_float_array(close)
    length = values.size

    def zeros() -> MACDResult:
        return MACDResult(
            like_input(np.zeros(length), close),
            like_input(np.zeros(length), close),
            like_input(np.zeros(length), close),
        )

    if not has_valid_data(values):
        logger.debug("macd: no usable data")
        return zeros()

    if length < slow:
        logger.debug("macd: need at least %s samples, got %s", slow, length)
        return zeros()

    filled = fill_null_values(values)
    ema_fast = ema(filled, fast)
    ema_slow = ema(filled, slow)

    if not has_valid_data(ema_fast) or not has_valid_data(ema_slow):
        logger.debug("macd: EMA legs produced no usable values")
        return zeros()

    macd_line = _zero_nan(_macd_line(ema_fast, ema_slow, int(slow)))
    signal_line = _zero_nan(ema(macd_line, signal))
    histogram = macd_line - signal_line

    return MACDResult(
        like_input(macd_line, close),
        like_input(signal_line, close),
        like_input(histogram, close),
    )


def macd_signal(close: ArrayLike, fast: int = 12, slow: int = 26, signal: int = 9) -> ArrayLike:
    """MACD signal line only."""
    return macd(close, fast, slow, signal).signal


def macd_hist(close: ArrayLike, fast: int = 12, slow: int = 26, signal: int = 9) -> ArrayLike:
    """MACD histogram only."""
    return macd(close, fast, slow, signal).histogram


# ============================================================================
# RSI (Relative Strength Index)
# ============================================================================

@jit(nopython=True)
def _rsi_calc(close: np.ndarray, n: int) -> np.ndarray:
    """Numba-optimized RSI calculation using Wilder's smoothing."""
    length = len(close)
    rsi = np.full(length, np.nan)

    gain_sum = 0.0
    loss_sum = 0.0
    changes = 0
    for i in range(1, n + 1):
        if np.isnan(close[i]) or np.isnan(close[i - 1]):
            continue
        delta = close[i] - close[i - 1]
        if delta >= 0:
            gain_sum += delta
        else:
            loss_sum -= delta
        changes += 1

    if changes == 0:
        return rsi

    up = gain_sum / changes
    down = loss_sum / changes

    if down == 0:
        rsi[n] = 100.0
    else:
        rsi[n] = 100.0 - (100.0 / (1.0 + up / down))

    for i in range(n + 1, length):
        if np.isnan(close[i]) or np.isnan(close[i - 1]):
            rsi[i] = rsi[i - 1]
            continue

        delta = close[i] - close[i - 1]
        if delta >= 0:
            up_val = delta
            down_val = 0.0
        else:
            up_val = 0.0
            down_val = -delta

        up = (up * (n - 1) + up_val) / n
        down = (down * (n - 1) + down_val) / n

        if down == 0:
            rsi[i] = 100.0
        else:
            rsi[i] = 100.0 - (100.0 / (1.0 + up / down))

    return rsi


def rsi(close: ArrayLike, n: int = 14) -> ArrayLike:
    """
    Relative Strength Index.

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    The first value sits at index n and averages the first n price
    changes; later values use Wilder's smoothing. A flat or rising window
    with no losses reads 100. Positions before n are NaN, and so is the
    whole output when there are n or fewer samples.
    """
    values = to_float_array(close)
    length = values.size

    if not has_valid_data(values):
        logger.debug("rsi: no usable data")
        return like_input(np.full(length, np.nan), close)

    if length <= n:
        logger.debug("rsi: need more than %s samples, got %s", n, length)
        return like_input(np.full(length, np.nan), close)

    filled = fill_null_values(values)
    return like_input(_rsi_calc(filled, int(n)), close)


# ============================================================================
# KDJ (Stochastic with J line)
# ============================================================================

@jit(nopython=True)
def _kdj_calc(high: np.ndarray, low: np.ndarray, close: np.ndarray, n: int):
    """Numba-optimized recursive KDJ starting from a neutral 50/50 state."""
    length = len(close)
    k = np.full(length, np.nan)
    d = np.full(length, np.nan)
    j = np.full(length, np.nan)

    last_k = 50.0
    last_d = 50.0

    for i in range(max(n - 1, 0), length):
        highest = -np.inf
        lowest = np.inf
        count = 0
        for m in range(max(0, i - n + 1), i + 1):
            if np.isnan(high[m]) or np.isnan(low[m]):
                continue
            if high[m] > highest:
                highest = high[m]
            if low[m] < lowest:
                lowest = low[m]
            count += 1

        # Flat or empty window: hold the previous state
        if count == 0 or abs(highest - lowest) < 1e-6 or np.isnan(close[i]):
            k[i] = last_k
            d[i] = last_d
            j[i] = 3.0 * last_k - 2.0 * last_d
            continue

        rsv = (close[i] - lowest) / (highest - lowest) * 100.0
        last_k = (2.0 / 3.0) * last_k + (1.0 / 3.0) * rsv
        last_d = (2.0 / 3.0) * last_d + (1.0 / 3.0) * last_k

        k[i] = last_k
        d[i] = last_d
        j[i] = 3.0 * last_k - 2.0 * last_d

    return k, d, j


def kdj(high: ArrayLike, low: ArrayLike, close: ArrayLike, n: int = 9) -> KDJResult:
    """
    KDJ stochastic oscillator.

    RSV = 100 * (Close - Low(n)) / (High(n) - Low(n))
    K = 2/3 * K[-1] + 1/3 * RSV
    D = 2/3 * D[-1] + 1/3 * K
    J = 3 * K - 2 * D

    Inputs are truncated to the shortest of the three. K and D start from
    50. J is an extrapolation and routinely leaves [0, 100].

    Returns:
    --------
    KDJResult with fields 'k', 'd', 'j'
    """
    highs = to_float_array(high)
    lows = to_float_array(low)
    closes = to_float_array(close)
    length = min(highs.size, lows.size, closes.size)

    # Output takes the index of the first Series among close, high, low
    like = next((x for x in (close, high, low) if isinstance(x, pd.Series)), close)

    def nans() -> KDJResult:
        return KDJResult(
            like_input(np.full(length, np.nan), like),
            like_input(np.full(length, np.nan), like),
            like_input(np.full(length, np.nan), like),
        )

    if not (has_valid_data(highs) and has_valid_data(lows) and has_valid_data(closes)):
        logger.debug("kdj: no usable data")
        return nans()

    if length <= n:
        logger.debug("kdj: need more than %s samples, got %s", n, length)
        return nans()

    k, d, j = _kdj_calc(
        fill_null_values(highs[:length]),
        fill_null_values(lows[:length]),
        fill_null_values(closes[:length]),
        int(n),
    )

    return KDJResult(like_input(k, like), like_input(d, like), like_input(j, like))
