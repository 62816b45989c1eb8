"""
Tests for feed line parsing.
"""

import logging

import pytest

from ratesrisk.config import EngineConfig
from ratesrisk.currencies import G5
from ratesrisk.exceptions import FeedNotFoundError
from ratesrisk.feeds import (
    FxObservation,
    RateObservation,
    TradeObservation,
    iter_market_observations,
    iter_trade_observations,
    parse_market_line,
    parse_portfolio_line,
    read_feed,
    tenor_to_days,
)
from ratesrisk.risk import RiskEngine


class TestRateLines:
    """Tests for IR.<N><U>.<CCY> lines."""
    
    @pytest.mark.parametrize("line,tenor", [
        ("IR.1D.EUR 0.025", 1),
        ("IR.2W.EUR 0.025", 14),
        ("IR.3M.EUR 0.025", 90),
        ("IR.5Y.EUR 0.025", 1800),
    ])
    def test_tenor_units(self, line, tenor):
        obs = parse_market_line(line, G5)
        assert obs == RateObservation(currency="EUR", tenor=tenor, rate=0.025)
    
    def test_integer_and_negative_rates(self):
        assert parse_market_line("IR.1Y.USD 1", G5).rate == 1.0
        assert parse_market_line("IR.1Y.JPY -0.0004", G5).rate == -0.0004
    
    def test_unknown_unit_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_market_line("IR.3X.USD 0.02", G5) is None
        assert "tenor unit" in caplog.text
    
    def test_unknown_currency_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_market_line("IR.1M.CHF 0.01", G5) is None
        assert "CHF" in caplog.text
    
    def test_tenor_to_days(self):
        assert tenor_to_days(2, "M") == 60
        assert tenor_to_days(2, "Q") is None
        assert tenor_to_days(-1, "D") is None


class TestFxLines:
    """Tests for FX.SPOT.<CCY> lines."""
    
    def test_spot(self):
        assert parse_market_line("FX.SPOT.EUR 1.1213", G5) == FxObservation("EUR", 1.1213)
    
    def test_zero_spot_skipped(self):
        assert parse_market_line("FX.SPOT.EUR 0", G5) is None
    
    def test_unknown_currency(self):
        assert parse_market_line("FX.SPOT.CHF 1.04", G5) is None


class TestTradeLines:
    """Tests for <id>;<hex>;<CCY>;<date>; lines."""
    
    def test_hex_notional(self):
        obs = parse_portfolio_line("7;000f4240;USD;43000;", G5)
        assert obs == TradeObservation(trade_id="7", currency="USD", date=43000, notional=1_000_000)
    
    def test_trailing_whitespace(self):
        assert parse_portfolio_line("1;ff;GBP;42970;\r\n", G5).notional == 255
    
    def test_missing_terminator_is_unrecognized(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_portfolio_line("1;ff;GBP;42970", G5) is None
        assert "Unrecognized line" in caplog.text
    
    def test_unknown_currency(self):
        assert parse_portfolio_line("1;ff;CHF;42970;", G5) is None


class TestFeeds:
    """Tests for whole-feed iteration and file access."""
    
    def test_comments_and_blanks_are_silent(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_market_line("# header", G5) is None
            assert parse_market_line("   ", G5) is None
        assert caplog.text == ""
    
    def test_unrecognized_line_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_market_line("hello world", G5) is None
        assert "Unrecognized line: hello world" in caplog.text
    
    def test_trade_line_in_market_feed_is_unrecognized(self):
        assert parse_market_line("1;ff;GBP;42970;", G5) is None
    
    def test_iteration_keeps_order_and_skips_bad_lines(self):
        lines = ["# h", "IR.1M.USD 0.01", "junk", "FX.SPOT.GBP 1.3", "IR.1M.CHF 0.01"]
        observations = list(iter_market_observations(lines, G5))
        assert observations == [
            RateObservation("USD", 30, 0.01),
            FxObservation("GBP", 1.3),
        ]
    
    def test_trade_iteration(self):
        lines = ["1;a;USD;43000;", "2;b;EUR;43000;", "bad"]
        assert [t.notional for t in iter_trade_observations(lines, G5)] == [10, 11]
    
    def test_read_feed(self, rates_path):
        lines = read_feed(rates_path, "rates")
        assert lines[0].startswith("#")
        assert "FX.SPOT.EUR 1.1213" in lines
    
    def test_read_missing_feed(self, tmp_path):
        missing = tmp_path / "missing.txt"
        with pytest.raises(FeedNotFoundError) as excinfo:
            read_feed(missing, "rates")
        assert isinstance(excinfo.value, FileNotFoundError)
        assert str(missing) in str(excinfo.value)
    
    def test_undecodable_bytes_do_not_abort(self, tmp_path, caplog):
        rates = tmp_path / "rates.txt"
        rates.write_bytes(b"# Market data \xa3 feed\nIR.1M.USD 0.02\nFX.SPOT.\xff 1.1\n")
        trades = tmp_path / "portfolio.txt"
        trades.write_bytes(b"# \xa3\n1;f4240;USD;42970;\n")
        
        lines = read_feed(rates, "rates")
        assert lines[1] == "IR.1M.USD 0.02"
        
        with caplog.at_level(logging.WARNING):
            engine = RiskEngine.from_files(rates, trades, EngineConfig.fixture())
        assert engine.get_tenors("USD") == [30]
        assert engine.get_maturities("USD") == [42970]
        assert "Unrecognized line: FX.SPOT." in caplog.text
