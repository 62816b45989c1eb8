"""
Portfolio package - per-currency cash-flow ledgers.
"""

from .ledger import PortfolioLedger, DiscountFunction

__all__ = [
    "PortfolioLedger",
    "DiscountFunction",
]
