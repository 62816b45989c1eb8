"""
Risk package - multi-currency DV01 engine.

Provides:
- RiskEngine: feeds in, discount factors / FX / DV01 out
"""

from .engine import RiskEngine

__all__ = [
    "RiskEngine",
]
