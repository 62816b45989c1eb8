"""
Parsers for the textual market-data and trade feeds.

Feed formats (one record per line):
    
    IR.2W.EUR 0.025           rate: tenor 2 weeks, currency EUR
    FX.SPOT.EUR 1.1213        spot: EUR against USD (EURUSD)
    1;000186a0;EUR;42970;     trade: id; hex notional; currency; date

Tenor units convert to days as D=1, W=7, M=30, Y=360. Lines starting with
'#' and blank lines are skipped silently. Anything else that does not parse
(unknown format, currency or tenor unit) is logged and skipped; only a feed
that cannot be opened is fatal.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .currencies import CurrencySet
from .exceptions import FeedNotFoundError

logger = logging.getLogger(__name__)


RATE_PATTERN = re.compile(r'^IR\.(\d+)([A-Z])\.([A-Z]{3})[ \t]+(-?(?:\d+\.)?\d+)$')
FX_PATTERN = re.compile(r'^FX\.SPOT\.([A-Z]{3})[ \t]+((?:\d+\.)?\d+)$')
TRADE_PATTERN = re.compile(r'^(\d+);([0-9a-fA-F]+);([A-Z]{3});(\d+);$')

TENOR_UNIT_DAYS = {
    'D': 1,
    'W': 7,
    'M': 30,
    'Y': 360,
}


@dataclass(frozen=True)
class RateObservation:
    """Rate for one currency at one tenor (days)."""
    currency: str
    tenor: int
    rate: float


@dataclass(frozen=True)
class FxObservation:
    """Spot of a currency against the reference currency."""
    currency: str
    spot: float


@dataclass(frozen=True)
class TradeObservation:
    """Cash-flow notional paid on a serial date."""
    trade_id: str
    currency: str
    date: int
    notional: int


MarketObservation = Union[RateObservation, FxObservation]


def is_comment(line: str) -> bool:
    """Header, comment or blank line."""
    stripped = line.strip()
    return not stripped or stripped.startswith('#')


def tenor_to_days(amount: int, unit: str) -> Optional[int]:
    """
    Convert a tenor like (2, 'W') to days.
    
    Returns:
        Days, or None for an unknown unit
    """
    if amount < 0:
        logger.warning("Rate tenor %d cannot be negative", amount)
        return None
    multiplier = TENOR_UNIT_DAYS.get(unit)
    if multiplier is None:
        logger.warning("Unrecognized tenor unit: %s", unit)
        return None
    return amount * multiplier


def _currency(code: str, currencies: CurrencySet) -> Optional[str]:
    ccy = currencies.to_ccy(code)
    if ccy is None:
        logger.warning("Unrecognized currency: %s", code)
    return ccy


def parse_rate_line(line: str, currencies: CurrencySet) -> Optional[RateObservation]:
    """Parse an IR.<N><U>.<CCY> <rate> line (None if it is not one or is invalid)."""
    match = RATE_PATTERN.match(line.strip())
    if not match:
        return None
    logger.debug("Parsing rate data: %s", line.strip())
    
    amount, unit, code, rate = match.groups()
    tenor = tenor_to_days(int(amount), unit)
    if tenor is None:
        return None
    ccy = _currency(code, currencies)
    if ccy is None:
        return None
    return RateObservation(currency=ccy, tenor=tenor, rate=float(rate))


def parse_fx_line(line: str, currencies: CurrencySet) -> Optional[FxObservation]:
    """Parse an FX.SPOT.<CCY> <spot> line (None if it is not one or is invalid)."""
    match = FX_PATTERN.match(line.strip())
    if not match:
        return None
    logger.debug("Parsing FX data: %s", line.strip())
    
    code, spot = match.groups()
    ccy = _currency(code, currencies)
    if ccy is None:
        return None
    if float(spot) <= 0:
        logger.warning("FX spot for %s must be positive: %s", ccy, spot)
        return None
    return FxObservation(currency=ccy, spot=float(spot))


def parse_trade_line(line: str, currencies: CurrencySet) -> Optional[TradeObservation]:
    """
    Parse an <id>;<hex notional>;<CCY>;<date>; line.
    
    Only cash-flow trades exist today; other trade types (FX forwards) would
    get their own pattern and observation type here.
    """
    match = TRADE_PATTERN.match(line.strip())
    if not match:
        return None
    logger.debug("Parsing trade data: %s", line.strip())
    
    trade_id, notional_hex, code, date = match.groups()
    ccy = _currency(code, currencies)
    if ccy is None:
        return None
    return TradeObservation(
        trade_id=trade_id,
        currency=ccy,
        date=int(date),
        notional=int(notional_hex, 16),
    )


def parse_market_line(line: str, currencies: CurrencySet) -> Optional[MarketObservation]:
    """
    Parse one line of the rates/FX feed.
    
    Returns:
        RateObservation, FxObservation, or None (comment, unrecognized or
        invalid line; the reason is logged)
    """
    if is_comment(line):
        return None
    stripped = line.strip()
    if RATE_PATTERN.match(stripped):
        return parse_rate_line(stripped, currencies)
    if FX_PATTERN.match(stripped):
        return parse_fx_line(stripped, currencies)
    logger.warning("Unrecognized line: %s", stripped)
    return None


def parse_portfolio_line(line: str, currencies: CurrencySet) -> Optional[TradeObservation]:
    """Parse one line of the trade feed (None for comments and bad lines)."""
    if is_comment(line):
        return None
    stripped = line.strip()
    if TRADE_PATTERN.match(stripped):
        return parse_trade_line(stripped, currencies)
    logger.warning("Unrecognized line: %s", stripped)
    return None


def iter_market_observations(
    lines: Iterable[str],
    currencies: CurrencySet
) -> Iterator[MarketObservation]:
    """Valid observations from a rates/FX feed, in feed order."""
    for line in lines:
        obs = parse_market_line(line, currencies)
        if obs is not None:
            yield obs


def iter_trade_observations(
    lines: Iterable[str],
    currencies: CurrencySet
) -> Iterator[TradeObservation]:
    """Valid trades from a portfolio feed, in feed order."""
    for line in lines:
        obs = parse_portfolio_line(line, currencies)
        if obs is not None:
            yield obs


def read_feed(path: Union[str, Path], feed: Optional[str] = None) -> List[str]:
    """
    Read all lines of a feed file.
    
    Args:
        path: File path
        feed: Feed label for error messages ("rates", "portfolio")
    
    Returns:
        Lines without trailing newlines; undecodable bytes become U+FFFD
    
    Raises:
        FeedNotFoundError: If the file cannot be opened
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError as exc:
        logger.warning("Could not read file at %s", path)
        raise FeedNotFoundError(str(path), feed) from exc


__all__ = [
    "RateObservation",
    "FxObservation",
    "TradeObservation",
    "MarketObservation",
    "RATE_PATTERN",
    "FX_PATTERN",
    "TRADE_PATTERN",
    "TENOR_UNIT_DAYS",
    "is_comment",
    "tenor_to_days",
    "parse_rate_line",
    "parse_fx_line",
    "parse_trade_line",
    "parse_market_line",
    "parse_portfolio_line",
    "iter_market_observations",
    "iter_trade_observations",
    "read_feed",
]
