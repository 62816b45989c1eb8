"""
FX spot rates.

Each currency holds one spot quoted against the reference currency
(CCY/USD, i.e. USD per unit of CCY). Crosses follow from dividing two such
spots: EUR/JPY = (EUR/USD) / (JPY/USD).
"""

from typing import Union


class SpotRateTable:
    """
    FX spot of one currency against the reference currency.
    
    The spot defaults to 1.0, which is the reference currency's own rate.
    """
    
    def __init__(self, spot: float = 1.0):
        self._spot = 1.0
        self.set_spot(spot)
    
    def set_spot(self, rate: float) -> None:
        """Overwrite the spot."""
        if rate <= 0:
            raise ValueError(f"FX spot must be positive, got {rate}")
        self._spot = float(rate)
    
    def get_spot(self) -> float:
        return self._spot
    
    def __truediv__(self, term: "SpotRateTable") -> float:
        """Cross rate self/term."""
        return self._spot / term.get_spot()
    
    def __repr__(self) -> str:
        return f"SpotRateTable(spot={self._spot})"


def cross_rate(
    base: Union[SpotRateTable, float],
    term: Union[SpotRateTable, float]
) -> float:
    """
    Cross rate base/term from two spots against the same reference.
    
    Args:
        base: Base currency spot (table or raw rate)
        term: Term currency spot (table or raw rate)
    
    Returns:
        Units of term currency per unit of base currency
    """
    if not isinstance(base, SpotRateTable):
        base = SpotRateTable(base)
    if not isinstance(term, SpotRateTable):
        term = SpotRateTable(term)
    return base / term


__all__ = [
    "SpotRateTable",
    "cross_rate",
]
