"""
Risk reporting for the DV01 engine.

Provides formatted console output and CSV export for:
- Per-currency summary (book value, FX spot, parallel DV01)
- Key-rate DV01 ladder per curve tenor
- Cash-flow tables per currency

All DV01 figures are in the engine's reference currency; book values are in
the currency of the trades.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..risk.engine import RiskEngine


@dataclass
class ReportSection:
    """
    A section of a report.
    
    Attributes:
        title: Section title
        data: Data (DataFrame or dict)
        notes: Optional notes
    """
    title: str
    data: Union[pd.DataFrame, Dict[str, Any]]
    notes: Optional[str] = None


@dataclass
class RiskReport:
    """
    Complete risk report.
    
    Attributes:
        valuation_delta: Serial day of the valuation
        portfolio_name: Name of portfolio
        sections: List of report sections
        metadata: Additional metadata
    """
    valuation_delta: int
    portfolio_name: str
    sections: List[ReportSection] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    
    def add_section(
        self,
        title: str,
        data: Union[pd.DataFrame, Dict[str, Any]],
        notes: Optional[str] = None
    ):
        """Add a section to the report."""
        self.sections.append(ReportSection(title, data, notes))
    
    def get_section(self, title: str) -> Optional[ReportSection]:
        for section in self.sections:
            if section.title == title:
                return section
        return None
    
    def to_dict(self) -> Dict:
        """Convert entire report to dictionary."""
        result = {
            "valuation_delta": self.valuation_delta,
            "portfolio_name": self.portfolio_name,
            "metadata": self.metadata,
            "sections": {}
        }
        
        for section in self.sections:
            if isinstance(section.data, pd.DataFrame):
                result["sections"][section.title] = section.data.to_dict(orient="records")
            else:
                result["sections"][section.title] = section.data
        
        return result


class ReportFormatter:
    """
    Formats reports for console output.
    """
    
    def __init__(
        self,
        width: int = 80,
        precision: int = 2,
        thousands_sep: bool = True
    ):
        self.width = width
        self.precision = precision
        self.thousands_sep = thousands_sep
    
    def format_number(self, value: float, precision: Optional[int] = None) -> str:
        """Format a number for display."""
        p = precision if precision is not None else self.precision
        
        if abs(value) >= 1e6:
            return f"{value/1e6:,.{p}f}M"
        elif abs(value) >= 1e3 and self.thousands_sep:
            return f"{value:,.{p}f}"
        elif value != 0 and abs(value) < 10 ** -p:
            return f"{value:.{p}e}"
        return f"{value:.{p}f}"
    
    def header(self, title: str) -> str:
        return f"\n{'='*self.width}\n{title.center(self.width)}\n{'='*self.width}\n"
    
    def subheader(self, title: str) -> str:
        return f"\n{'-'*self.width}\n{title}\n{'-'*self.width}\n"
    
    def format_dict(self, data: Dict[str, Any], indent: int = 2) -> str:
        """Format dictionary as key-value pairs."""
        lines = []
        pad = " " * indent
        
        for key, value in data.items():
            if isinstance(value, float):
                formatted = self.format_number(value)
            else:
                formatted = str(value)
            lines.append(f"{pad}{key}: {formatted}")
        
        return "\n".join(lines)
    
    def format_dataframe(self, df: pd.DataFrame, max_rows: int = 50) -> str:
        """Format DataFrame for console."""
        if df.empty:
            return "(no data)"
        with pd.option_context(
            'display.max_rows', max_rows,
            'display.width', self.width,
            'display.float_format', lambda x: self.format_number(x)
        ):
            return df.to_string(index=False)
    
    def format_report(self, report: RiskReport) -> str:
        """Format entire report for console."""
        lines = []
        
        lines.append(self.header(f"Risk Report: {report.portfolio_name}"))
        lines.append(f"Valuation delta: {report.valuation_delta}")
        
        if report.metadata:
            lines.append("\nMetadata:")
            lines.append(self.format_dict(report.metadata))
        
        for section in report.sections:
            lines.append(self.subheader(section.title))
            
            if isinstance(section.data, pd.DataFrame):
                lines.append(self.format_dataframe(section.data))
            else:
                lines.append(self.format_dict(section.data))
            
            if section.notes:
                lines.append(f"\nNote: {section.notes}")
        
        lines.append(f"\n{'='*self.width}")
        lines.append("End of Report")
        
        return "\n".join(lines)


SUMMARY_COLUMNS = ["currency", "tenors", "maturities", "fx_spot", "book_value", "dv01"]
KEY_RATE_COLUMNS = ["currency", "tenor", "dv01", "pct_of_total", "cumulative_pct"]


def generate_risk_summary(engine: RiskEngine) -> pd.DataFrame:
    """
    One row per currency with data.
    
    Columns: currency, tenors (curve points), maturities (trade dates),
    fx_spot (CCY/reference), book_value (local), dv01 (parallel, reference).
    Missing values are NaN.
    """
    rows = []
    ref = engine.config.reference_currency
    
    for ccy in engine.currencies():
        book_value = engine.get_book_value(ccy)
        fx_spot = engine.get_fx_spot(ccy, ref)
        dv01 = engine.get_dv01(ccy)
        rows.append({
            "currency": ccy,
            "tenors": len(engine.get_tenors(ccy)),
            "maturities": len(engine.get_maturities(ccy)),
            "fx_spot": fx_spot if fx_spot is not None else float("nan"),
            "book_value": book_value if book_value is not None else float("nan"),
            "dv01": dv01 if dv01 is not None else float("nan"),
        })
    
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def generate_key_rate_report(engine: RiskEngine, ccy: str) -> pd.DataFrame:
    """
    Key-rate DV01 ladder for one currency.
    
    The share columns are relative to the sum of the key-rate DV01s.
    """
    key_rate_dv01 = engine.get_key_rate_dv01s(ccy)
    total = sum(key_rate_dv01.values())
    
    rows = []
    for tenor, dv01 in key_rate_dv01.items():
        rows.append({
            "currency": ccy,
            "tenor": tenor,
            "dv01": dv01,
            "pct_of_total": (dv01 / total * 100) if total != 0 else 0.0,
        })
    
    df = pd.DataFrame(rows, columns=KEY_RATE_COLUMNS[:-1])
    df["cumulative_pct"] = df["pct_of_total"].cumsum()
    return df


def generate_dv01_ladder(
    engine: RiskEngine,
    currencies: Optional[List[str]] = None
) -> pd.DataFrame:
    """Key-rate ladders of several currencies stacked (default: all with data)."""
    frames = [
        generate_key_rate_report(engine, ccy)
        for ccy in (engine.currencies() if currencies is None else currencies)
    ]
    frames = [f for f in frames if not f.empty]
    if not frames:
        return pd.DataFrame(columns=KEY_RATE_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def generate_cashflow_report(engine: RiskEngine, ccy: str) -> pd.DataFrame:
    """Cash flows of one currency with discount factors and PVs when a curve exists."""
    ledger = engine.get_ledger(ccy)
    if ledger is None:
        return pd.DataFrame(columns=["date", "tenor", "notional"])
    curve = engine.get_curve(ccy)
    discount_fn = curve.get_discount_factor if curve is not None and len(curve) else None
    return ledger.to_frame(discount_fn)


def build_risk_report(engine: RiskEngine, portfolio_name: str = "Portfolio") -> RiskReport:
    """Summary, key-rate ladder and per-currency cash flows in one report."""
    report = RiskReport(
        valuation_delta=engine.config.valuation_delta,
        portfolio_name=portfolio_name,
        metadata={
            "reference_currency": engine.config.reference_currency,
            "bump_size": engine.config.bump_size,
            "currency_universe": engine.config.currencies.name,
        },
    )
    report.add_section(
        "Summary",
        generate_risk_summary(engine),
        notes=f"DV01 in {engine.config.reference_currency}; book value in local currency",
    )
    report.add_section("Key Rate DV01", generate_dv01_ladder(engine))
    for ccy in engine.currencies():
        cashflows = generate_cashflow_report(engine, ccy)
        if not cashflows.empty:
            report.add_section(f"Cash Flows {ccy}", cashflows)
    return report


def export_to_csv(
    report: RiskReport,
    output_dir: Union[str, Path],
    prefix: Optional[str] = None
) -> List[str]:
    """
    Export report to CSV files.
    
    Creates one CSV per section plus a metadata file.
    
    Args:
        report: RiskReport to export
        output_dir: Output directory
        prefix: Optional filename prefix
    
    Returns:
        List of created file paths
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    
    prefix = prefix or report.portfolio_name.replace(" ", "_")
    
    created_files = []
    
    meta_file = output_path / f"{prefix}_{report.valuation_delta}_metadata.csv"
    meta_df = pd.DataFrame([{
        "valuation_delta": report.valuation_delta,
        "portfolio_name": report.portfolio_name,
        **report.metadata
    }])
    meta_df.to_csv(meta_file, index=False)
    created_files.append(str(meta_file))
    
    for section in report.sections:
        safe_title = section.title.replace(" ", "_").replace("/", "_")
        filename = output_path / f"{prefix}_{report.valuation_delta}_{safe_title}.csv"
        
        if isinstance(section.data, pd.DataFrame):
            section.data.to_csv(filename, index=False)
        else:
            pd.DataFrame([section.data]).to_csv(filename, index=False)
        
        created_files.append(str(filename))
    
    return created_files


def print_report(report: RiskReport, formatter: Optional[ReportFormatter] = None):
    """Print report to console."""
    fmt = formatter or ReportFormatter()
    print(fmt.format_report(report))


__all__ = [
    "ReportSection",
    "RiskReport",
    "ReportFormatter",
    "generate_risk_summary",
    "generate_key_rate_report",
    "generate_dv01_ladder",
    "generate_cashflow_report",
    "build_risk_report",
    "export_to_csv",
    "print_report",
]
