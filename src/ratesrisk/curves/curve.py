"""
Per-currency interest rate curve.

The curve stores annualized spot rates at integer tenors (days from the
valuation date) and returns discount factors by linear interpolation of the
spot rate:
    
    r(t) = (r_i (T_i+1 - t) + r_i+1 (t - T_i)) / (T_i+1 - T_i)
    P(0, t) = exp(-r(t) * t / basis)

Boundary rules:
- Before the first tenor the curve is pinned to r = 0 at t = 0
- At or beyond the last tenor the last rate is held flat

Rates can be perturbed temporarily with bump_tenor / bump_curve, which return
a CurveBump guard that restores the curve when released.
"""

import bisect
import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..config import DEFAULT_DAY_COUNT_BASIS
from ..exceptions import TenorNotFoundError
from .bumping import CurveBump

logger = logging.getLogger(__name__)


class InterestRateCurve:
    """
    Interest rate curve keyed by tenor in days.
    
    Attributes:
        currency: Currency code (used in diagnostics only)
        day_count_basis: Days per year in the discount factor exponent
    
    Conventions:
        - Tenors are non-negative integer days
        - Rates are annualized; negative rates are allowed
        - Re-adding a tenor replaces its rate
    """
    
    def __init__(
        self,
        currency: Optional[str] = None,
        day_count_basis: int = DEFAULT_DAY_COUNT_BASIS
    ):
        self.currency = currency
        self.day_count_basis = day_count_basis
        
        self._rates: Dict[int, float] = {}
        self._tenors: List[int] = []  # sorted keys of _rates
        self._active_bumps: List[CurveBump] = []
    
    def add_rate(self, tenor: int, rate: float) -> None:
        """
        Insert or overwrite the rate at a tenor.
        
        Args:
            tenor: Days from valuation date
            rate: Annualized spot rate
        """
        if tenor < 0:
            raise ValueError(f"Tenor must be non-negative, got {tenor}")
        if self._active_bumps:
            raise RuntimeError("Cannot add rates while the curve is bumped")
        
        if tenor not in self._rates:
            bisect.insort(self._tenors, tenor)
        self._rates[tenor] = float(rate)
    
    def check_tenor(self, tenor: int) -> bool:
        """Whether a rate is stored at exactly this tenor."""
        return tenor in self._rates
    
    def get_tenors(self) -> List[int]:
        """Stored tenors (a fresh list, ascending)."""
        return list(self._tenors)
    
    def get_rate(self, tenor: int) -> float:
        """Stored rate at an exact tenor."""
        try:
            return self._rates[tenor]
        except KeyError:
            raise TenorNotFoundError(tenor, self.currency) from None
    
    def get_zero_rate(self, t: int) -> float:
        """
        Interpolated spot rate at t.
        
        Args:
            t: Days from valuation date
        
        Returns:
            Linearly interpolated annualized rate
        """
        if not self._tenors:
            raise RuntimeError("Curve has no rates - add rates before querying")
        if t < 0:
            raise ValueError(f"Tenor must be non-negative, got {t}")
        
        # First stored tenor strictly greater than t
        idx = bisect.bisect_right(self._tenors, t)
        
        if idx == 0:
            t_left, r_left = 0, 0.0
            t_right = self._tenors[0]
            r_right = self._rates[t_right]
        else:
            t_left = self._tenors[idx - 1]
            r_left = self._rates[t_left]
            if idx == len(self._tenors):
                # Flat beyond the last point
                return r_left
            t_right = self._tenors[idx]
            r_right = self._rates[t_right]
        
        return (r_left * (t_right - t) + r_right * (t - t_left)) / (t_right - t_left)
    
    def get_discount_factor(self, t: int) -> float:
        """
        Discount factor P(0, t).
        
        Args:
            t: Days from valuation date
        
        Returns:
            exp(-r(t) * t / basis)
        """
        r_eff = self.get_zero_rate(t)
        return float(np.exp(-r_eff * t / self.day_count_basis))
    
    def bump_tenor(self, tenor: int, amount: float) -> CurveBump:
        """
        Add amount to the rate at one existing tenor until released.
        
        Args:
            tenor: Tenor to bump (must exist, see check_tenor)
            amount: Additive rate bump
        
        Returns:
            CurveBump guard; use it as a context manager or call release()
        """
        if tenor not in self._rates:
            raise TenorNotFoundError(tenor, self.currency)
        return CurveBump(self, (tenor,), amount)
    
    def bump_curve(self, amount: float) -> CurveBump:
        """
        Add amount to every stored rate until released.
        
        Args:
            amount: Additive rate bump
        
        Returns:
            CurveBump guard; use it as a context manager or call release()
        """
        return CurveBump(self, tuple(self._tenors), amount, parallel=True)
    
    @property
    def is_bumped(self) -> bool:
        """Whether any bump is currently live."""
        return bool(self._active_bumps)
    
    def _shift(self, tenors: Sequence[int], amount: float) -> Dict[int, float]:
        """Shift rates in place and return the rates they replaced."""
        saved = {}
        for tenor in tenors:
            saved[tenor] = self._rates[tenor]
            self._rates[tenor] = saved[tenor] + amount
        return saved
    
    def _restore(self, saved: Dict[int, float]) -> None:
        self._rates.update(saved)
    
    def __len__(self) -> int:
        return len(self._tenors)
    
    def __repr__(self) -> str:
        return (f"InterestRateCurve(currency={self.currency}, "
                f"tenors={len(self._tenors)}, bumped={self.is_bumped})")


def create_curve(
    points: Dict[int, float],
    currency: Optional[str] = None,
    day_count_basis: int = DEFAULT_DAY_COUNT_BASIS
) -> InterestRateCurve:
    """
    Build a curve from a {tenor: rate} mapping.
    
    Args:
        points: Rates keyed by tenor in days
        currency: Currency code
        day_count_basis: Days per year
    
    Returns:
        Populated curve
    """
    curve = InterestRateCurve(currency, day_count_basis)
    for tenor, rate in points.items():
        curve.add_rate(tenor, rate)
    return curve


__all__ = [
    "InterestRateCurve",
    "create_curve",
]
