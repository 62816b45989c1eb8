"""
Shared fixtures: small in-memory feeds and the sample feeds under data/.
"""

from pathlib import Path

import pytest

from ratesrisk.config import EngineConfig
from ratesrisk.curves import InterestRateCurve, create_curve
from ratesrisk.risk import RiskEngine

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

VALUATION_DELTA = 42940

RATE_LINES = [
    "# header",
    "IR.1M.USD 0.02",
    "IR.2M.USD 0.025",
    "IR.1Y.USD 0.03",
    "IR.1M.EUR 0.01",
    "IR.1Y.EUR 0.015",
    "FX.SPOT.EUR 1.25",
    "FX.SPOT.GBP 1.5",
]

TRADE_LINES = [
    "# id;notional;ccy;date;",
    f"1;000f4240;USD;{VALUATION_DELTA + 30};",      # 1,000,000 at 30 days
    f"2;001e8480;USD;{VALUATION_DELTA + 360};",     # 2,000,000 at 360 days
    f"3;000186a0;EUR;{VALUATION_DELTA + 180};",     # 100,000 at 180 days
    f"4;000186a0;EUR;{VALUATION_DELTA + 180};",     # same date, aggregates
]


@pytest.fixture
def config():
    return EngineConfig(valuation_delta=VALUATION_DELTA)


@pytest.fixture
def engine(config):
    return RiskEngine(RATE_LINES, TRADE_LINES, config)


@pytest.fixture
def two_point_curve() -> InterestRateCurve:
    return create_curve({30: 0.02, 60: 0.025}, currency="USD")


@pytest.fixture
def rates_path() -> Path:
    return DATA_DIR / "rates.txt"


@pytest.fixture
def portfolio_path() -> Path:
    return DATA_DIR / "portfolio.txt"
