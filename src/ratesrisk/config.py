"""
Engine configuration.

EngineConfig collects the parameters the risk engine needs beyond the
feeds themselves:
- Currency universe and reference (reporting) currency
- Valuation delta: days from the serial-day epoch to the valuation date
- Bump size used for finite-difference DV01
- Day-count basis used to turn tenors in days into year fractions

The valuation delta is an explicit value rather than today's date so that
runs against fixed feeds are reproducible.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .currencies import CurrencySet, G5


# Spreadsheet serial-day epoch: serial 1 is 1900-01-01 and the 1900 leap-day
# bug is absorbed by starting from 1899-12-30.
SERIAL_EPOCH = date(1899, 12, 30)

# Valuation delta matching the sample portfolio dates.
DEFAULT_VALUATION_DELTA = 42940

DEFAULT_BUMP_SIZE = 1e-4
DEFAULT_DAY_COUNT_BASIS = 360


def serial_day(d: date) -> int:
    """Days from the serial-day epoch to d (2024-04-29 -> 45411)."""
    return (d - SERIAL_EPOCH).days


@dataclass
class EngineConfig:
    """
    Container for risk engine parameters.
    
    Attributes:
        currencies: Universe of currencies the feeds may reference
        reference_currency: Currency all FX spots are quoted against
        valuation_delta: Serial day count of the valuation date
        bump_size: Additive rate bump for central differences
        day_count_basis: Days per year in discount factor exponents
    """
    currencies: CurrencySet = field(default_factory=lambda: G5)
    reference_currency: str = "USD"
    valuation_delta: int = DEFAULT_VALUATION_DELTA
    bump_size: float = DEFAULT_BUMP_SIZE
    day_count_basis: int = DEFAULT_DAY_COUNT_BASIS
    
    def __post_init__(self):
        if self.reference_currency not in self.currencies:
            raise ValueError(
                f"Reference currency {self.reference_currency} is not in "
                f"{self.currencies.name}"
            )
        if self.valuation_delta < 0:
            raise ValueError(f"Valuation delta must be non-negative, got {self.valuation_delta}")
        if self.bump_size <= 0:
            raise ValueError(f"Bump size must be positive, got {self.bump_size}")
        if self.day_count_basis <= 0:
            raise ValueError(f"Day-count basis must be positive, got {self.day_count_basis}")
    
    @classmethod
    def as_of(
        cls,
        valuation_date: date,
        currencies: Optional[CurrencySet] = None,
        **kwargs
    ) -> "EngineConfig":
        """Config valued at a calendar date instead of a raw serial delta."""
        return cls(
            currencies=currencies or G5,
            valuation_delta=serial_day(valuation_date),
            **kwargs
        )
    
    @classmethod
    def fixture(cls) -> "EngineConfig":
        """Config matching the sample feeds shipped in data/."""
        return cls(valuation_delta=DEFAULT_VALUATION_DELTA)


__all__ = [
    "EngineConfig",
    "serial_day",
    "SERIAL_EPOCH",
    "DEFAULT_VALUATION_DELTA",
    "DEFAULT_BUMP_SIZE",
    "DEFAULT_DAY_COUNT_BASIS",
]
