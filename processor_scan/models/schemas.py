"""
Data models and schemas for Data Processor Scan.

Uses Pydantic for validation and deserialization of the compliance report
returned by the analysis service. Every model is frozen: a report is
immutable once decoded.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class DocumentType(str, Enum):
    """Kind of document the user is submitting; context for the reviewer."""
    DPA = "Standalone DPA"
    SCHEDULE = "Processing Schedule"
    CLAUSES = "General Agreement Clauses"


class ComplianceStatus(str, Enum):
    """Status vocabulary shared by requirement statuses and overall ratings."""
    COMPLIANT = "Compliant"
    PARTIALLY_COMPLIANT = "Partially Compliant"
    NOT_FOUND = "Not Found / Non-Compliant"
    LIKELY_NON_COMPLIANT = "Likely Non-Compliant"   # Overall rating only
    LIKELY_COMPLIANT = "Likely Compliant"           # Overall rating only


class RiskLevel(str, Enum):
    """Risk attached to a single requirement."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Values each usage of ComplianceStatus may take
REQUIREMENT_STATUSES = (
    ComplianceStatus.COMPLIANT,
    ComplianceStatus.PARTIALLY_COMPLIANT,
    ComplianceStatus.NOT_FOUND,
)

OVERALL_RATINGS = (
    ComplianceStatus.LIKELY_COMPLIANT,
    ComplianceStatus.PARTIALLY_COMPLIANT,
    ComplianceStatus.LIKELY_NON_COMPLIANT,
)


# =============================================================================
# Report Models
# =============================================================================

class RequirementAnalysis(BaseModel):
    """Evaluation of one Article 28(3) checklist item."""
    
    model_config = ConfigDict(frozen=True)
    
    name: str = Field(..., description="Requirement name")
    article_reference: str = Field(..., description="Regulatory article reference")
    status: ComplianceStatus = Field(..., description="Requirement status")
    risk_level: RiskLevel = Field(..., description="Risk classification")
    analysis: str = Field(..., description="Reviewer's analysis")
    
    # Present only when a relevant clause was located
    excerpt: Optional[str] = Field(
        default=None,
        description="Quoted text from the contract"
    )
    clause_reference: Optional[str] = Field(
        default=None,
        description="Where the excerpt sits in the contract"
    )
    suggested_improvement: Optional[str] = Field(
        default=None,
        description="Remedial drafting; meaningful only when not compliant"
    )
    
    @field_validator("status")
    @classmethod
    def _check_requirement_status(cls, value: ComplianceStatus) -> ComplianceStatus:
        if value not in REQUIREMENT_STATUSES:
            raise ValueError(f"'{value.value}' is an overall rating, not a requirement status")
        return value
    
    @field_validator("excerpt", "clause_reference", "suggested_improvement", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
    
    @property
    def is_compliant(self) -> bool:
        """True when the status is exactly Compliant."""
        return self.status == ComplianceStatus.COMPLIANT
    
    @property
    def needs_remediation(self) -> bool:
        """True for any status other than Compliant."""
        return not self.is_compliant


class OverallAssessment(BaseModel):
    """Aggregate verdict for one analysis run."""
    
    model_config = ConfigDict(frozen=True)
    
    rating: ComplianceStatus = Field(..., description="Overall rating")
    summary: str = Field(..., description="Prose summary")
    key_risks: list[str] = Field(..., description="Key risks, in order")
    key_strengths: list[str] = Field(..., description="Key strengths, in order")
    
    @field_validator("rating")
    @classmethod
    def _check_overall_rating(cls, value: ComplianceStatus) -> ComplianceStatus:
        if value not in OVERALL_RATINGS:
            raise ValueError(f"'{value.value}' is a requirement status, not an overall rating")
        return value


class ComplianceReport(BaseModel):
    """Complete result of one analysis run."""
    
    model_config = ConfigDict(frozen=True)
    
    overall_assessment: OverallAssessment = Field(
        ...,
        description="Aggregate verdict"
    )
    requirements: list[RequirementAnalysis] = Field(
        ...,
        description="Per-requirement results in checklist order"
    )
    
    def compliant_requirements(self) -> list[RequirementAnalysis]:
        """Requirements with status exactly Compliant, in report order."""
        return [req for req in self.requirements if req.is_compliant]
    
    def remediation_requirements(self) -> list[RequirementAnalysis]:
        """Requirements needing remediation, in report order."""
        return [req for req in self.requirements if req.needs_remediation]


# =============================================================================
# Export Models
# =============================================================================

class ExportedReport(BaseModel):
    """A rendered document ready to hand to the browser for download."""
    
    model_config = ConfigDict(frozen=True)
    
    filename: str = Field(..., description="Download file name")
    content: str = Field(..., description="Document body")
    mime_type: str = Field(default="text/html", description="Media type")


# =============================================================================
# LLM Interaction Models
# =============================================================================

class LLMResponse(BaseModel):
    """Response from the analysis service."""
    
    content: str = Field(..., description="Generated text content")
    model: str = Field(..., description="Model that generated response")
    tokens_used: int = Field(default=0, description="Tokens consumed")
    generation_time: float = Field(default=0.0, description="Time to generate")


# =============================================================================
# Helper Functions
# =============================================================================

def severity_class(status: str) -> str:
    """
    Classify a status or rating into a three-tier severity.
    
    Args:
        status: Status or rating text
        
    Returns:
        "non-compliant", "partial" or "compliant"
    """
    text = status.value if isinstance(status, Enum) else str(status)
    
    if "Non-Compliant" in text or "Not Found" in text:
        return "non-compliant"
    elif "Partially" in text:
        return "partial"
    else:
        return "compliant"
