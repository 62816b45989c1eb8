"""
Multi-currency DV01 engine.

The engine reads a rates/FX feed and a trade feed, keeps one model per
currency that has data, and answers:
- Discount factors from the currency's curve
- FX spots and crosses against the reference currency
- Curve tenors and portfolio maturities
- DV01 by central finite differences, for a single tenor or a parallel shift

DV01 = FX(USD/CCY) * -(PV(r + eps) - PV(r - eps)) / 2

Positive DV01 means the portfolio loses value when rates rise. Missing data
never raises from a query: the result is None (or an empty collection for
tenors and maturities).
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..config import EngineConfig
from ..curves.bumping import CurveBump
from ..curves.curve import InterestRateCurve
from ..feeds import (
    FxObservation,
    MarketObservation,
    RateObservation,
    TradeObservation,
    iter_market_observations,
    iter_trade_observations,
    read_feed,
)
from ..fx import SpotRateTable
from ..portfolio.ledger import PortfolioLedger

logger = logging.getLogger(__name__)


class RiskEngine:
    """
    Per-currency curves, spots and ledgers with risk queries on top.
    
    Attributes:
        config: Engine parameters (currency universe, valuation delta, bump)
    
    A currency may have any subset of curve, spot and ledger; every query
    checks the models it needs before computing.
    """
    
    def __init__(
        self,
        rate_lines: Iterable[str] = (),
        trade_lines: Iterable[str] = (),
        config: Optional[EngineConfig] = None
    ):
        """
        Build the engine from feed lines.
        
        Args:
            rate_lines: Rates and FX spot feed lines
            trade_lines: Trade feed lines
            config: Engine parameters (defaults to EngineConfig())
        """
        self.config = config or EngineConfig()
        self._curves: Dict[str, InterestRateCurve] = {}
        self._spots: Dict[str, SpotRateTable] = {
            self.config.reference_currency: SpotRateTable()
        }
        self._ledgers: Dict[str, PortfolioLedger] = {}
        logger.info(
            "Valuation delta is %d days (%s universe, reference %s)",
            self.config.valuation_delta,
            self.config.currencies.name,
            self.config.reference_currency,
        )
        
        self.ingest_market_lines(rate_lines)
        self.ingest_trade_lines(trade_lines)
    
    @classmethod
    def from_files(
        cls,
        rates_path: Union[str, Path],
        portfolio_path: Union[str, Path],
        config: Optional[EngineConfig] = None
    ) -> "RiskEngine":
        """
        Build the engine from feed files.
        
        Args:
            rates_path: Rates and FX spot feed
            portfolio_path: Trade feed
            config: Engine parameters (defaults to EngineConfig())
            
        Raises:
            FeedNotFoundError: If either feed cannot be opened
        """
        rate_lines = read_feed(rates_path, "rates")
        trade_lines = read_feed(portfolio_path, "portfolio")
        return cls(rate_lines, trade_lines, config)
    
    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    
    def ingest_market_lines(self, lines: Iterable[str]) -> None:
        """Load every valid rate and FX line."""
        for obs in iter_market_observations(lines, self.config.currencies):
            self.add_market_observation(obs)
    
    def ingest_trade_lines(self, lines: Iterable[str]) -> None:
        """Load every valid trade line."""
        for obs in iter_trade_observations(lines, self.config.currencies):
            self.add_trade_observation(obs)
    
    def add_market_observation(self, obs: MarketObservation) -> None:
        """Route a rate or spot to its currency, creating the model if needed."""
        if isinstance(obs, RateObservation):
            curve = self._curves.get(obs.currency)
            if curve is None:
                curve = InterestRateCurve(obs.currency, self.config.day_count_basis)
                self._curves[obs.currency] = curve
            curve.add_rate(obs.tenor, obs.rate)
        elif isinstance(obs, FxObservation):
            spot = self._spots.get(obs.currency)
            if spot is None:
                spot = SpotRateTable()
                self._spots[obs.currency] = spot
            spot.set_spot(obs.spot)
        else:
            raise TypeError(f"Unsupported market observation: {obs!r}")
    
    def add_trade_observation(self, obs: TradeObservation) -> None:
        """Book a trade's notional into its currency ledger."""
        tenor = obs.date - self.config.valuation_delta
        if tenor < 0:
            logger.warning(
                "Trade %s tenor %d cannot be negative, skipping", obs.trade_id, tenor
            )
            return
        logger.debug(
            "Effective tenor is %d days, notional is %d", tenor, obs.notional
        )
        
        ledger = self._ledgers.get(obs.currency)
        if ledger is None:
            ledger = PortfolioLedger(obs.currency)
            ledger.set_delta(self.config.valuation_delta)
            self._ledgers[obs.currency] = ledger
        ledger.add_trade(obs.date, obs.notional)
    
    # ------------------------------------------------------------------
    # Model access
    # ------------------------------------------------------------------
    
    def _resolve(self, ccy: str) -> Optional[str]:
        resolved = self.config.currencies.to_ccy(ccy)
        if resolved is None:
            logger.warning("Unrecognized currency: %s", ccy)
        return resolved
    
    def _check_rates(self, ccy: Optional[str]) -> bool:
        if ccy is None:
            return False
        if ccy not in self._curves:
            logger.warning("No rates for %s", ccy)
            return False
        return True
    
    def _check_fx(self, ccy: Optional[str]) -> bool:
        if ccy is None:
            return False
        if ccy not in self._spots:
            logger.warning("No spot for %s", ccy)
            return False
        return True
    
    @staticmethod
    def _check_tenor_value(tenor: int) -> bool:
        if tenor < 0:
            logger.warning("Rate tenor %d cannot be negative", tenor)
            return False
        return True
    
    def _check_tenor_rate(self, ccy: Optional[str], tenor: int) -> bool:
        if not self._check_rates(ccy):
            return False
        if not self._curves[ccy].check_tenor(tenor):
            logger.warning("Currency %s has no tenor %d", ccy, tenor)
            return False
        return True
    
    def get_curve(self, ccy: str) -> Optional[InterestRateCurve]:
        return self._curves.get(ccy)
    
    def get_ledger(self, ccy: str) -> Optional[PortfolioLedger]:
        return self._ledgers.get(ccy)
    
    def currencies(self) -> List[str]:
        """Currencies with any data, in universe order."""
        present = set(self._curves) | set(self._spots) | set(self._ledgers)
        return self.config.currencies.sort(present)
    
    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    
    def get_maturities(self, ccy: str) -> List[int]:
        """Maturity dates of the currency's trades (empty if none)."""
        ccy = self._resolve(ccy)
        if ccy is None or ccy not in self._ledgers:
            return []
        logger.info("Fetching all trade maturities for %s", ccy)
        return self._ledgers[ccy].get_maturities()
    
    def get_tenors(self, ccy: str) -> List[int]:
        """Tenors on the currency's curve (empty if no curve)."""
        ccy = self._resolve(ccy)
        if not self._check_rates(ccy):
            return []
        logger.info("Fetching available rate tenors for %s", ccy)
        return self._curves[ccy].get_tenors()
    
    def get_discount_factor(self, ccy: str, tenor: int) -> Optional[float]:
        """Discount factor at tenor days, or None without a curve or for tenor < 0."""
        ccy = self._resolve(ccy)
        if not self._check_rates(ccy) or not self._check_tenor_value(tenor):
            return None
        logger.info("Calculating discount factor for %s, tenor = %d days", ccy, tenor)
        return self._curves[ccy].get_discount_factor(tenor)
    
    def get_fx_spot(self, base: str, term: str) -> Optional[float]:
        """Units of term per unit of base, or None if either spot is missing."""
        base = self._resolve(base)
        term = self._resolve(term)
        if not self._check_fx(base) or not self._check_fx(term):
            return None
        logger.info("Calculating FX spot for %s%s", base, term)
        return self._spots[base] / self._spots[term]
    
    def get_book_value(self, ccy: str) -> Optional[float]:
        """Unbumped present value of the currency's trades in that currency."""
        ccy = self._resolve(ccy)
        if not self._check_rates(ccy):
            return None
        ledger = self._ledgers.get(ccy)
        if ledger is None:
            return 0.0
        return ledger.get_book_value(self._curves[ccy].get_discount_factor)
    
    def get_dv01(self, ccy: str, tenor: Optional[int] = None) -> Optional[float]:
        """
        DV01 in the reference currency by central differences.
        
        Args:
            ccy: Currency whose curve is bumped
            tenor: Curve tenor to bump; None bumps every tenor (parallel)
        
        Returns:
            DV01, or None if the curve, the tenor or the spot is missing
        """
        ccy = self._resolve(ccy)
        if tenor is None:
            if not self._check_rates(ccy) or not self._check_fx(ccy):
                return None
            logger.info(
                "Calculating DV01 with central differences for %s and a parallel curve shift", ccy
            )
            curve = self._curves[ccy]
            return self._central_difference(ccy, curve.bump_curve)
        
        if not self._check_tenor_rate(ccy, tenor) or not self._check_fx(ccy):
            return None
        logger.info(
            "Calculating DV01 with central differences for %s and a bump to tenor = %d",
            ccy, tenor
        )
        curve = self._curves[ccy]
        return self._central_difference(ccy, lambda amount: curve.bump_tenor(tenor, amount))
    
    def get_key_rate_dv01s(self, ccy: str) -> Dict[int, float]:
        """Single-tenor DV01 for every tenor on the curve (ascending)."""
        result = {}
        for tenor in self.get_tenors(ccy):
            dv01 = self.get_dv01(ccy, tenor)
            if dv01 is not None:
                result[tenor] = dv01
        return result
    
    def _central_difference(
        self,
        ccy: str,
        bump: Callable[[float], CurveBump]
    ) -> float:
        ledger = self._ledgers.get(ccy)
        if ledger is None:
            logger.info("No trades for %s, DV01 is zero", ccy)
            return 0.0
        
        curve = self._curves[ccy]
        eps = self.config.bump_size
        
        def bumped_value(amount: float) -> float:
            with bump(amount):
                return ledger.get_book_value(curve.get_discount_factor)
        
        fx = self.get_fx_spot(self.config.reference_currency, ccy)
        return fx * -(bumped_value(eps) - bumped_value(-eps)) / 2
    
    def __repr__(self) -> str:
        return (f"RiskEngine(curves={sorted(self._curves)}, spots={sorted(self._spots)}, "
                f"ledgers={sorted(self._ledgers)})")


__all__ = [
    "RiskEngine",
]
