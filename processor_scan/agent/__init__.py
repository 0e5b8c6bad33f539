"""
Analysis pipeline for Data Processor Scan.

Provides contract analysis, report rendering and the per-session
state controller.
"""

from processor_scan.agent.core import ComplianceAgent
from processor_scan.agent.analyzer import ContractAnalyzer, RESPONSE_SCHEMA
from processor_scan.agent.controller import AppState, SessionController
from processor_scan.agent.reporter import (
    EXPORT_FILENAME,
    ReportGenerator,
    generate_html_report,
)

__all__ = [
    "ComplianceAgent",
    "ContractAnalyzer",
    "RESPONSE_SCHEMA",
    "AppState",
    "SessionController",
    "EXPORT_FILENAME",
    "ReportGenerator",
    "generate_html_report",
]
