"""
Reporting module for risk analytics.

Provides:
- Console reports (formatted tables)
- CSV export
"""

from .risk_report import (
    ReportSection,
    RiskReport,
    ReportFormatter,
    generate_risk_summary,
    generate_key_rate_report,
    generate_dv01_ladder,
    generate_cashflow_report,
    build_risk_report,
    export_to_csv,
    print_report,
)


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
