"""
Chart pane indicators.

A chart shows at most one overlay on the main (candlestick) pane and one
oscillator on the sub pane. This module maps an indicator choice to the
channels it needs, runs it, and pairs the result with the chart's time
axis.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from .config import IndicatorSettings
from .core import CandlesLike, extract_close_prices, extract_high_prices, extract_low_prices
from .momentum import macd, rsi, kdj
from .volatility import bollinger_bands

logger = logging.getLogger(__name__)


class IndicatorType(str, Enum):
    NONE = 'none'
    MACD = 'macd'
    RSI = 'rsi'
    KDJ = 'kdj'
    BOLL = 'boll'


MAIN_PANE_INDICATORS = (IndicatorType.BOLL,)
SUB_PANE_INDICATORS = (IndicatorType.MACD, IndicatorType.RSI, IndicatorType.KDJ)

# Registry of pane indicator computations
_INDICATOR_REGISTRY: Dict[IndicatorType, Callable[[CandlesLike, IndicatorSettings], Dict[str, Any]]] = {}


def register_indicator(kind: IndicatorType):
    """
    Decorator to register the computation behind a pane indicator.

    Usage:
        @register_indicator(IndicatorType.RSI)
        def _rsi_lines(candles, settings):
            ...
    """
    def decorator(func):
        _INDICATOR_REGISTRY[kind] = func
        return func
    return decorator


def get_registered_indicators() -> Dict[IndicatorType, Callable]:
    """Get all registered pane indicators."""
    return _INDICATOR_REGISTRY.copy()


@register_indicator(IndicatorType.MACD)
def _macd_lines(candles: CandlesLike, settings: IndicatorSettings) -> Dict[str, Any]:
    result = macd(
        extract_close_prices(candles),
        settings.macd_fast, settings.macd_slow, settings.macd_signal,
    )
    return result._asdict()


@register_indicator(IndicatorType.RSI)
def _rsi_lines(candles: CandlesLike, settings: IndicatorSettings) -> Dict[str, Any]:
    return {'rsi': rsi(extract_close_prices(candles), settings.rsi_period)}


@register_indicator(IndicatorType.KDJ)
def _kdj_lines(candles: CandlesLike, settings: IndicatorSettings) -> Dict[str, Any]:
    result = kdj(
        extract_high_prices(candles),
        extract_low_prices(candles),
        extract_close_prices(candles),
        settings.kdj_period,
    )
    return result._asdict()


@register_indicator(IndicatorType.BOLL)
def _boll_lines(candles: CandlesLike, settings: IndicatorSettings) -> Dict[str, Any]:
    result = bollinger_bands(
        extract_close_prices(candles),
        settings.boll_period, settings.boll_multiplier,
    )
    return result._asdict()


def compute_indicator(kind, candles: CandlesLike,
                      settings: Optional[IndicatorSettings] = None) -> Dict[str, Any]:
    """
    Compute the lines of one pane indicator.

    Args:
        kind: IndicatorType or its string value ('none', 'macd', 'rsi', 'kdj', 'boll')
        candles: OHLCV samples in chronological order
        settings: Periods to use, defaults to IndicatorSettings()

    Returns:
        Dict of line name -> series, each the length of `candles`.
        Empty for IndicatorType.NONE.
    """
    try:
        kind = IndicatorType(kind)
    except ValueError:
        raise ValueError(
            f"Unknown indicator: {kind}. Use one of {[t.value for t in IndicatorType]}"
        ) from None

    if kind is IndicatorType.NONE:
        return {}

    settings = settings or IndicatorSettings()
    logger.debug("Computing %s over %s candles", kind.value, len(candles))
    return _INDICATOR_REGISTRY[kind](candles, settings)


def to_line_data(times: Sequence[Any], values: Sequence[float]) -> List[Dict[str, Any]]:
    """
    Pair indicator values with the chart's time axis by position.

    Points that are not computable (None / NaN) are dropped, so the
    chart never draws them. Pairs up to the shorter of the two inputs.
    """
    points = []
    for time, value in zip(times, values):
        if value is None or np.isnan(value):
            continue
        points.append({'time': time, 'value': float(value)})
    return points
