#!/usr/bin/env python
"""
DV01 run over a rates/FX feed and a trade feed.

Walks through the engine's queries on the given feeds:
1. Build per-currency curves, spots and ledgers
2. Print sample discount factors and FX crosses
3. Print curve tenors and trade maturities
4. Print single-tenor and parallel DV01
5. Print the risk report and optionally export it to CSV

Usage:
    python run_risk.py [--rates FILE] [--portfolio FILE] [--output-dir DIR] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ratesrisk import EngineConfig, RiskEngine, configure_logging
from ratesrisk.config import DEFAULT_VALUATION_DELTA
from ratesrisk.currencies import G5, G10
from ratesrisk.reporting import (
    ReportFormatter,
    build_risk_report,
    export_to_csv,
    print_report,
)

UNIVERSES = {"G5": G5, "G10": G10}


def show(label, value):
    print(f"  {label:<28} {'n/a' if value is None else value}")


def print_market(engine: RiskEngine):
    """Discount factors and FX crosses, as in the reference run."""
    print("\nDiscount factors:")
    for ccy, tenor in [("EUR", 20), ("EUR", 30), ("EUR", 45), ("EUR", 360),
                       ("EUR", 9999), ("CAD", 30)]:
        show(f"{ccy} {tenor}d", engine.get_discount_factor(ccy, tenor))
    
    print("\nFX spots:")
    for base, term in [("EUR", "USD"), ("USD", "JPY"), ("EUR", "JPY"),
                       ("GBP", "EUR"), ("USD", "USD"), ("USD", "CAD")]:
        show(f"{base}{term}", engine.get_fx_spot(base, term))


def print_schedule(engine: RiskEngine):
    print("\nCurve tenors (days):")
    for ccy in engine.config.currencies:
        show(ccy, sorted(engine.get_tenors(ccy)) or "-")
    
    print("\nTrade maturities:")
    for ccy in engine.config.currencies:
        show(ccy, sorted(engine.get_maturities(ccy)) or "-")


def print_dv01(engine: RiskEngine, tenor: int):
    ref = engine.config.reference_currency
    print(f"\nDV01 ({ref}):")
    for ccy in engine.currencies():
        show(f"{ccy} tenor = {tenor} days", engine.get_dv01(ccy, tenor))
        show(f"{ccy} parallel", engine.get_dv01(ccy))


def main():
    """Main entry point."""
    data_dir = Path(__file__).parent.parent / "data"
    
    parser = argparse.ArgumentParser(description="Multi-currency DV01 run")
    parser.add_argument(
        "--rates",
        type=Path,
        default=data_dir / "rates.txt",
        help="Rates and FX spot feed"
    )
    parser.add_argument(
        "--portfolio",
        type=Path,
        default=data_dir / "portfolio.txt",
        help="Trade feed"
    )
    parser.add_argument(
        "--valuation-delta",
        type=int,
        default=DEFAULT_VALUATION_DELTA,
        help="Serial day of the valuation date"
    )
    parser.add_argument(
        "--universe",
        choices=sorted(UNIVERSES),
        default="G5",
        help="Currency universe"
    )
    parser.add_argument(
        "--tenor",
        type=int,
        default=360,
        help="Tenor (days) for the single-tenor DV01"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Export the risk report as CSV files here"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log warnings (-v), info (-vv) or debug (-vvv) diagnostics"
    )
    args = parser.parse_args()
    
    if args.verbose:
        levels = [logging.WARNING, logging.INFO, logging.DEBUG]
        configure_logging(levels[min(args.verbose, 3) - 1])
    
    config = EngineConfig(
        currencies=UNIVERSES[args.universe],
        valuation_delta=args.valuation_delta,
    )
    
    print("="*60)
    print("MULTI-CURRENCY DV01")
    print(f"Valuation delta: {config.valuation_delta}")
    print("="*60)
    
    engine = RiskEngine.from_files(args.rates, args.portfolio, config)
    
    print_market(engine)
    print_schedule(engine)
    print_dv01(engine, args.tenor)
    
    report = build_risk_report(engine, portfolio_name=args.portfolio.stem)
    print_report(report, ReportFormatter(precision=4))
    
    if args.output_dir:
        files = export_to_csv(report, args.output_dir)
        print(f"\nExported {len(files)} CSV files to {args.output_dir}")
        for f in files:
            print(f"  - {f}")


if __name__ == "__main__":
    main()
