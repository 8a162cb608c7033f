"""
Moving averages.

SMA and EMA are the building blocks for MACD and Bollinger Bands. Both
keep the input's length: positions without enough history are NaN.
"""

import logging

import numpy as np
from numba import jit

from .core import ArrayLike, to_float_array, like_input

logger = logging.getLogger(__name__)


# ============================================================================
# Moving Averages
# ============================================================================

@jit(nopython=True)
def _window_mean(values: np.ndarray, start: int, end: int) -> float:
    """Mean of the valid samples in values[start:end], NaN if there are none."""
    first = np.nan
    offset = 0.0
    count = 0
    for j in range(start, end):
        if np.isnan(values[j]):
            continue
        if count == 0:
            first = values[j]
        else:
            offset += values[j] - first
        count += 1

    if count == 0:
        return np.nan

    # Summing offsets from the first sample keeps a constant window exact
    return first + offset / count


@jit(nopython=True)
def _sma_calc(values: np.ndarray, n: int) -> np.ndarray:
    """Numba-optimized SMA over the valid samples of each window."""
    length = len(values)
    result = np.full(length, np.nan)

    for i in range(length):
        if i < n - 1:
            continue
        result[i] = _window_mean(values, max(0, i - n + 1), i + 1)

    return result


def sma(close: ArrayLike, n: int) -> ArrayLike:
    """
    Simple Moving Average.

    Mean of the trailing n samples. Missing samples inside a window are
    left out of both the sum and the count; a window with no valid sample
    gives NaN. The first n-1 positions are NaN.

    n <= 0 is not supported; the result is unspecified.
    """
    values = to_float_array(close)
    if values.size == 0:
        logger.debug("sma: empty input")
        return like_input(values, close)

    return like_input(_sma_calc(values, int(n)), close)


@jit(nopython=True)
def _ema_calc(values: np.ndarray, n: int) -> np.ndarray:
    """Numba-optimized EMA with an SMA seed and hold-on-gap recursion."""
    length = len(values)
    result = np.full(length, np.nan)

    if n <= 0 or length < n:
        return result

    ema_val = _window_mean(values, 0, n)

    # Nothing to seed from
    if np.isnan(ema_val):
        return result

    k = 2.0 / (n + 1.0)
    result[n - 1] = ema_val

    for i in range(n, length):
        if not np.isnan(values[i]):
            ema_val = values[i] * k + ema_val * (1.0 - k)
        result[i] = ema_val

    return result


def ema(close: ArrayLike, n: int) -> ArrayLike:
    """
    Exponential Moving Average.

    Parameters:
    -----------
    close : ArrayLike
        Price series
    n : int
        Period for EMA, smoothing factor is 2 / (n + 1)

    The value at n-1 is the mean of the valid samples among the first n.
    After that a missing sample repeats the previous EMA instead of
    producing NaN. If the first n samples hold no valid value the whole
    output is NaN.
    """
    values = to_float_array(close)
    if values.size == 0:
        logger.debug("ema: empty input")
        return like_input(values, close)

    result = _ema_calc(values, int(n))
    if np.isnan(result).all():
        logger.debug("ema: cannot seed period %s from %s samples", n, values.size)

    return like_input(result, close)
