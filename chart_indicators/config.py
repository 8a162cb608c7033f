"""
Indicator settings.
"""

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Mapping


@dataclass
class IndicatorSettings:
    """Periods and multipliers used when indicators are computed for a chart."""

    # MACD
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    # Oscillators
    rsi_period: int = 14
    kdj_period: int = 9

    # Bollinger Bands
    boll_period: int = 20
    boll_multiplier: float = 2.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ValueError for settings no indicator can run with."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type in (int, 'int'):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"Parameter {f.name} must be int, got {type(value)}")
                if value < 1:
                    raise ValueError(f"Parameter {f.name} must be >= 1, got {value}")
            else:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"Parameter {f.name} must be float, got {type(value)}")
                if value < 0:
                    raise ValueError(f"Parameter {f.name} must be >= 0, got {value}")

        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast must be below macd_slow, got {self.macd_fast} >= {self.macd_slow}"
            )

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "IndicatorSettings":
        """Build settings from a dict, ignoring keys that are not settings."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in params.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def create_indicator_settings(**overrides: Any) -> IndicatorSettings:
    """
    Convenience function to create IndicatorSettings with some defaults replaced.

    Args:
        **overrides: Any IndicatorSettings field, e.g. rsi_period=6

    Returns:
        Validated IndicatorSettings
    """
    return IndicatorSettings(**overrides)
