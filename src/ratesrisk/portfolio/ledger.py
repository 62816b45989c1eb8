"""
Cash-flow ledger for one currency.

Trades are reduced to notionals aggregated by maturity date, where dates are
serial day counts on the same scale as the valuation delta. Present value is
computed against an injected discount function of the effective tenor
(date - delta), so the same ledger values under a base or a bumped curve.
"""

import logging
from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

DiscountFunction = Callable[[int], float]


class PortfolioLedger:
    """
    Aggregated notionals by maturity date.
    
    Attributes:
        currency: Currency code (used in diagnostics only)
    """
    
    def __init__(self, currency: Optional[str] = None, delta: int = 0):
        self.currency = currency
        self._notionals: Dict[int, float] = {}
        self._delta = delta
    
    def add_trade(self, date: int, notional: float) -> None:
        """Accumulate notional into the bucket for date."""
        self._notionals[date] = self._notionals.get(date, 0) + notional
    
    def set_delta(self, delta: int) -> None:
        """Set the valuation offset subtracted from maturity dates."""
        self._delta = delta
    
    def get_delta(self) -> int:
        return self._delta
    
    def get_maturities(self) -> List[int]:
        """Maturity dates (a fresh list, insertion order)."""
        return list(self._notionals)
    
    def get_notionals(self) -> Dict[int, float]:
        """Copy of {maturity date: aggregated notional}."""
        return dict(self._notionals)
    
    def get_notional(self, date: int) -> float:
        """Aggregated notional at a date (0 if none)."""
        return self._notionals.get(date, 0)
    
    def effective_tenor(self, date: int) -> int:
        return date - self._delta
    
    def get_book_value(self, discount_fn: DiscountFunction) -> float:
        """
        Present value of all cash flows.
        
        Flows whose effective tenor is negative have matured and are left
        out of the sum.
        
        Args:
            discount_fn: Discount factor as a function of tenor in days
        
        Returns:
            Sum of notional * discount_fn(date - delta)
        """
        pvs = []
        logger.debug("Tenor\tNotional\tDiscount Factor")
        for date, notional in self._notionals.items():
            tenor = self.effective_tenor(date)
            if tenor < 0:
                logger.warning(
                    "Skipping matured %s cash flow: date %d is %d days before valuation",
                    self.currency, date, -tenor
                )
                continue
            df = discount_fn(tenor)
            logger.debug("%d\t%s\t%.10f", tenor, notional, df)
            pvs.append(notional * df)
        
        total = float(np.sum(pvs)) if pvs else 0.0
        logger.debug("Book PV of %s positions is %s", self.currency, total)
        return total
    
    def to_frame(self, discount_fn: Optional[DiscountFunction] = None) -> pd.DataFrame:
        """
        Cash flows as a DataFrame sorted by maturity.
        
        Columns: date, tenor, notional and, when discount_fn is given,
        discount_factor and pv.
        """
        rows = []
        for date in sorted(self._notionals):
            tenor = self.effective_tenor(date)
            row = {
                "date": date,
                "tenor": tenor,
                "notional": self._notionals[date],
            }
            if discount_fn is not None:
                df = discount_fn(tenor) if tenor >= 0 else 0.0
                row["discount_factor"] = df
                row["pv"] = row["notional"] * df
            rows.append(row)
        
        columns = ["date", "tenor", "notional"]
        if discount_fn is not None:
            columns += ["discount_factor", "pv"]
        return pd.DataFrame(rows, columns=columns)
    
    def __len__(self) -> int:
        return len(self._notionals)
    
    def __repr__(self) -> str:
        return (f"PortfolioLedger(currency={self.currency}, "
                f"maturities={len(self._notionals)}, delta={self._delta})")


__all__ = [
    "PortfolioLedger",
    "DiscountFunction",
]
