"""
Data models package for Data Processor Scan.
"""

from processor_scan.models.schemas import (
    DocumentType,
    ComplianceStatus,
    RiskLevel,
    REQUIREMENT_STATUSES,
    OVERALL_RATINGS,
    RequirementAnalysis,
    OverallAssessment,
    ComplianceReport,
    ExportedReport,
    LLMResponse,
    severity_class,
)

__all__ = [
    "DocumentType",
    "ComplianceStatus",
    "RiskLevel",
    "REQUIREMENT_STATUSES",
    "OVERALL_RATINGS",
    "RequirementAnalysis",
    "OverallAssessment",
    "ComplianceReport",
    "ExportedReport",
    "LLMResponse",
    "severity_class",
]
