"""
Curves package - per-currency interest rate curves.

Provides:
- InterestRateCurve: tenor -> rate points with linear spot-rate interpolation
- CurveBump: scoped, reversible rate bump returned by the curve
"""

from .curve import InterestRateCurve, create_curve
from .bumping import CurveBump

__all__ = [
    "InterestRateCurve",
    "create_curve",
    "CurveBump",
]
