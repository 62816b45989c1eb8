"""
RatesRisk: multi-currency interest rate risk from textual feeds

A small library for:
- Building per-currency rate curves from IR.<tenor>.<CCY> quotes
- FX spots and crosses against a reference currency
- Present value of cash-flow portfolios
- DV01 by central finite differences (single tenor or parallel shift)

Diagnostics go through the standard logging module and are silent until
diagnostics.configure_logging() is called.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core modules
from .currencies import CurrencySet, G5, G10
from .config import EngineConfig, serial_day
from .exceptions import FeedNotFoundError, TenorNotFoundError
from .diagnostics import configure_logging, disable_logging

# Models
from .curves import InterestRateCurve, CurveBump, create_curve
from .fx import SpotRateTable, cross_rate
from .portfolio import PortfolioLedger

# Feeds
from .feeds import (
    RateObservation,
    FxObservation,
    TradeObservation,
    parse_market_line,
    parse_portfolio_line,
    read_feed,
)

# Engine
from .risk import RiskEngine

# Reporting
from .reporting import RiskReport, ReportFormatter, build_risk_report, export_to_csv

__all__ = [
    # Version
    "__version__",
    # Core
    "CurrencySet",
    "G5",
    "G10",
    "EngineConfig",
    "serial_day",
    "FeedNotFoundError",
    "TenorNotFoundError",
    "configure_logging",
    "disable_logging",
    # Models
    "InterestRateCurve",
    "CurveBump",
    "create_curve",
    "SpotRateTable",
    "cross_rate",
    "PortfolioLedger",
    # Feeds
    "RateObservation",
    "FxObservation",
    "TradeObservation",
    "parse_market_line",
    "parse_portfolio_line",
    "read_feed",
    # Engine
    "RiskEngine",
    # Reporting
    "RiskReport",
    "ReportFormatter",
    "build_risk_report",
    "export_to_csv",
]
