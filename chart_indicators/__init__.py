"""
Technical indicator engine for candlestick charts.

Pure, batch implementations of the indicators a trading chart draws,
compiled with Numba. All functions are designed to be:
- Length preserving: output[i] describes input[i]
- Side-effect free: inputs are never modified
- NaN-aware: gaps are filled or skipped, short history yields sentinels
- Index aligned: pandas Series in, pandas Series out on the same index

Standard signature: fn(series, n=..., **params)
"""

from .core import *
from .trend import *
from .momentum import *
from .volatility import *
from .config import *
from .panes import *

__version__ = "1.0.0"

__all__ = [
    # Data model
    'Candle', 'OHLCV_CHANNELS',

    # Sanitizer
    'is_valid', 'has_valid_data', 'fill_null_values', 'fill_gaps',

    # Channel extraction
    'extract_channel', 'extract_open_prices', 'extract_high_prices',
    'extract_low_prices', 'extract_close_prices', 'extract_volumes',

    # Moving averages
    'sma', 'ema',

    # Momentum
    'macd', 'macd_signal', 'macd_hist', 'MACDResult',
    'rsi',
    'kdj', 'KDJResult',

    # Volatility
    'bollinger_bands', 'bollinger', 'BollingerResult',

    # Settings
    'IndicatorSettings', 'create_indicator_settings',

    # Chart panes
    'IndicatorType', 'MAIN_PANE_INDICATORS', 'SUB_PANE_INDICATORS',
    'compute_indicator', 'to_line_data',
    'register_indicator', 'get_registered_indicators',
]
