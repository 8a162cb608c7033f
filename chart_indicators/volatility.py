"""
Volatility bands.
"""

import logging
from typing import NamedTuple

import numpy as np
from numba import jit

from .core import ArrayLike, to_float_array, like_input
from .trend import sma

logger = logging.getLogger(__name__)


class BollingerResult(NamedTuple):
    upper: ArrayLike
    middle: ArrayLike
    lower: ArrayLike


# ============================================================================
# Bollinger Bands
# ============================================================================

@jit(nopython=True)
def _bollinger_calc(close: np.ndarray, middle: np.ndarray, n: int, k: float):
    """Numba-optimized population standard deviation envelope around the SMA."""
    length = len(close)
    upper = np.full(length, np.nan)
    lower = np.full(length, np.nan)

    for i in range(length):
        if i < n - 1 or np.isnan(middle[i]):
            continue

        total = 0.0
        count = 0
        for m in range(max(0, i - n + 1), i + 1):
            if not np.isnan(close[m]):
                dev = close[m] - middle[i]
                total += dev * dev
                count += 1

        if count == 0:
            continue

        std = np.sqrt(total / count)
        upper[i] = middle[i] + k * std
        lower[i] = middle[i] - k * std

    return upper, lower


def bollinger_bands(close: ArrayLike, n: int = 20, k: float = 2.0) -> BollingerResult:
    """
    Bollinger Bands.

    Returns:
    --------
    BollingerResult with fields:
        - upper: middle + k * std
        - middle: SMA(n)
        - lower: middle - k * std

    std is the population deviation of the valid samples in the trailing
    window. Missing samples are skipped, not filled.
    """
    values = to_float_array(close)
    length = values.size

    if length == 0:
        logger.debug("bollinger_bands: empty input")
        empty = like_input(values, close)
        return BollingerResult(empty, empty.copy(), empty.copy())

    if length < n:
        logger.debug("bollinger_bands: need at least %s samples, got %s", n, length)
        return BollingerResult(
            like_input(np.full(length, np.nan), close),
            like_input(np.full(length, np.nan), close),
            like_input(np.full(length, np.nan), close),
        )

    middle = sma(values, n)
    upper, lower = _bollinger_calc(values, middle, int(n), float(k))

    return BollingerResult(
        like_input(upper, close),
        like_input(middle, close),
        like_input(lower, close),
    )


bollinger = bollinger_bands
