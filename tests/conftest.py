"""
Pytest fixtures for the chart indicator tests.
"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def sample_ohlcv_df():
    """Hourly OHLCV candles with a DatetimeIndex."""
    n = 200
    np.random.seed(42)

    # Generate realistic price data
    returns = np.random.normal(0.0005, 0.02, n)
    close = 100.0 * np.exp(np.cumsum(returns))

    high = close * (1 + np.abs(np.random.normal(0, 0.01, n)))
    low = close * (1 - np.abs(np.random.normal(0, 0.01, n)))
    open_ = low + np.random.uniform(0, 1, n) * (high - low)
    volume = np.random.randint(100000, 1000000, n).astype(float)

    index = pd.date_range("2024-01-01", periods=n, freq=pd.Timedelta(hours=1), tz="UTC")

    return pd.DataFrame({
        "open": open_,
        "high": high,
        "low": low,
        "close": close,
        "volume": volume,
    }, index=index)


@pytest.fixture
def sample_candles(sample_ohlcv_df):
    """The same candles as a list of Candle records."""
    from chart_indicators import Candle

    return [
        Candle(
            time=int(ts.timestamp()),
            open=row.open,
            high=row.high,
            low=row.low,
            close=row.close,
            volume=row.volume,
        )
        for ts, row in zip(sample_ohlcv_df.index, sample_ohlcv_df.itertuples())
    ]


@pytest.fixture
def close_with_gaps(sample_ohlcv_df):
    """Close prices as a list with a few missing samples."""
    close = sample_ohlcv_df["close"].tolist()
    for i in (0, 3, 40, 41, 42, 120, 199):
        close[i] = None
    return close
