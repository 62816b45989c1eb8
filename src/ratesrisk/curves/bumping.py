"""
Scoped curve bumps for sensitivity calculations.

A CurveBump is created by InterestRateCurve.bump_tenor / bump_curve. The bump
is applied as soon as the guard exists and undone exactly once when it is
released, either explicitly or by leaving a with-block:
    
    with curve.bump_curve(1e-4):
        pv_up = ledger.get_book_value(curve.get_discount_factor)

Release writes back the rates captured at acquisition, so a bump/release
cycle leaves the curve bit-for-bit unchanged. Bumps on the same curve must be
released in reverse order of acquisition.
"""

import logging
from typing import TYPE_CHECKING, Dict, Tuple

if TYPE_CHECKING:
    from .curve import InterestRateCurve

logger = logging.getLogger(__name__)


class CurveBump:
    """
    Live additive bump on a curve.
    
    Attributes:
        curve: The bumped curve
        tenors: Tenors shifted by this bump (fixed at acquisition)
        amount: Additive bump size
        parallel: Whether this is a whole-curve bump
    """
    
    def __init__(
        self,
        curve: "InterestRateCurve",
        tenors: Tuple[int, ...],
        amount: float,
        parallel: bool = False
    ):
        self.curve = curve
        self.tenors = tenors
        self.amount = amount
        self.parallel = parallel
        self._released = False
        
        if parallel:
            logger.debug("Bumping whole %s curve by %g", curve.currency, amount)
        for tenor in tenors:
            logger.debug("Bumping %d days tenor by %g", tenor, amount)
        
        self._saved: Dict[int, float] = curve._shift(tenors, amount)
        curve._active_bumps.append(self)
    
    @property
    def released(self) -> bool:
        return self._released
    
    def release(self) -> None:
        """Undo the bump. Later calls are no-ops."""
        if self._released:
            return
        
        stack = self.curve._active_bumps
        if not stack or stack[-1] is not self:
            raise RuntimeError(
                "Curve bumps must be released in reverse order of acquisition"
            )
        
        if self.parallel:
            logger.debug("Unbumping whole %s curve by %g", self.curve.currency, self.amount)
        for tenor in self.tenors:
            logger.debug("Unbumping %d days tenor by %g", tenor, self.amount)
        
        self.curve._restore(self._saved)
        stack.pop()
        self._released = True
    
    def __enter__(self) -> "CurveBump":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
    
    def __repr__(self) -> str:
        kind = "parallel" if self.parallel else f"tenor={self.tenors[0]}"
        return f"CurveBump({kind}, amount={self.amount}, released={self._released})"


__all__ = [
    "CurveBump",
]
