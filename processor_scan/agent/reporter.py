"""
Report Generator for Data Processor Scan.

Renders a ComplianceReport as a self-contained HTML remediation schedule:
inline styles only, no external resources. Output depends only on the
report and the generation date.
"""

import html
from datetime import date
from typing import Optional

from processor_scan.models.schemas import (
    ComplianceReport,
    ComplianceStatus,
    ExportedReport,
    RequirementAnalysis,
    severity_class,
)


EXPORT_FILENAME = "Data-Processor-Remediation-Report.html"

REGULATORY_CITATION = "UK GDPR Art 28(3)"


# =============================================================================
# Report Templates
# =============================================================================

REPORT_STYLES = """
    body {
      font-family: 'Times New Roman', Times, serif;
      line-height: 1.6;
      max-width: 900px;
      margin: 40px auto;
      color: #1a1a1a;
      padding: 20px;
    }
    h1 { color: #2c3e50; border-bottom: 2px solid #2c3e50; padding-bottom: 10px; margin-bottom: 5px; }
    h2 { color: #2c3e50; margin-top: 40px; border-bottom: 1px solid #eee; padding-bottom: 5px; }
    h3 { font-size: 1.1em; color: #444; margin-bottom: 10px; }
    .meta { color: #666; font-style: italic; margin-bottom: 30px; }
    .summary-box {
      background: #f8f9fa;
      padding: 25px;
      border: 1px solid #ddd;
      border-radius: 5px;
      font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
    }
    .summary-columns { display: flex; gap: 40px; margin-top: 30px; }
    .summary-columns > div { flex: 1; }
    .badge {
      display: inline-block;
      padding: 4px 8px;
      border-radius: 4px;
      font-weight: bold;
      color: white;
      font-size: 0.85em;
      text-transform: uppercase;
      letter-spacing: 0.05em;
    }
    .compliant { background-color: #059669; }
    .partial { background-color: #d97706; }
    .non-compliant { background-color: #dc2626; }
    .req-item { margin-bottom: 40px; background: #fff; }
    .req-header {
      display: flex;
      justify-content: space-between;
      align-items: baseline;
      margin-bottom: 15px;
      background: #f1f5f9;
      padding: 10px 15px;
      border-radius: 4px;
    }
    .req-title { font-weight: bold; font-size: 1.1em; font-family: sans-serif; color: #334155; }
    .req-ref { font-size: 0.9em; color: #64748b; font-weight: normal; margin-left: 10px; }
    .section-label {
      font-size: 0.8em;
      text-transform: uppercase;
      letter-spacing: 0.1em;
      color: #94a3b8;
      font-weight: bold;
      margin-bottom: 5px;
      font-family: sans-serif;
    }
    .analysis { margin-bottom: 20px; color: #333; padding-left: 15px; }
    .clause-box {
      border-left: 4px solid #cbd5e1;
      padding: 10px 20px;
      margin: 10px 0 20px 0;
      color: #475569;
      font-style: italic;
    }
    .suggestion-box {
      background: #fffafa;
      border: 1px solid #fecaca;
      border-left: 4px solid #dc2626;
      padding: 20px;
      margin-top: 15px;
    }
    .suggestion-preamble { margin-top: 5px; margin-bottom: 10px; font-size: 0.9em; color: #7f1d1d; }
    .redline { color: #dc2626; font-weight: bold; font-size: 1.05em; }
    .footer {
      margin-top: 60px;
      font-size: 0.8em;
      text-align: center;
      color: #94a3b8;
      border-top: 1px solid #eee;
      padding-top: 20px;
      font-family: sans-serif;
    }
    ul { margin-top: 5px; padding-left: 20px; }
    li { margin-bottom: 5px; }
"""

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Data Processor Scan - Remediation Schedule</title>
  <style>{styles}</style>
</head>
<body>
  <h1>Data Processor Remediation Schedule</h1>
  <div class="meta">Generated on {date} &bull; Based on {citation}</div>
{summary}
  <h2>Schedule of Required Amendments</h2>
  <p style="margin-bottom: 30px; color: #666;">
    The following table outlines compliance gaps identified in the contract.
    Suggested drafting is provided in <strong style="color: #dc2626;">red</strong> for insertion into the agreement.
  </p>
{remediation}
  <h2>Compliant Items (No Action Required)</h2>
  <ul style="color: #555;">
{compliant}
  </ul>

  <div class="footer">
    Generated by <strong>Data Processor Scan</strong>.
    This document is an automated analysis tool and does not constitute legal advice.
    Please review all suggested drafting with qualified legal counsel.
  </div>
</body>
</html>
"""

SUMMARY_TEMPLATE = """
  <div class="summary-box">
    <h2 style="margin-top:0; border:none; padding:0;">Executive Summary</h2>
    <p style="margin-bottom: 20px;">
      <strong>Overall Compliance Rating:</strong> <span class="badge {rating_class}">{rating}</span>
    </p>
    <p>{summary}</p>
    <div class="summary-columns">
      <div>
        <h3>&#9888;&#65039; Key Risks</h3>
        <ul>{risks}</ul>
      </div>
      <div>
        <h3>&#9989; Key Strengths</h3>
        <ul>{strengths}</ul>
      </div>
    </div>
  </div>
"""

REQUIREMENT_TEMPLATE = """
  <div class="req-item">
    <div class="req-header">
      <div>
        <span class="req-title">{name}</span>
        <span class="req-ref">{article}</span>
      </div>
      <span class="badge {status_class}">{status}</span>
    </div>
    <div class="section-label">Analysis</div>
    <div class="analysis">{analysis}</div>
{excerpt}{suggestion}  </div>
"""

EXCERPT_TEMPLATE = """    <div class="section-label">Existing Clause Reference: {reference}</div>
    <div class="clause-box">"{excerpt}"</div>
"""

SUGGESTION_TEMPLATE = """    <div class="suggestion-box">
      <div class="section-label" style="color: #991b1b;">Recommended Drafting Action</div>
      <p class="suggestion-preamble">{preamble}</p>
      <div class="redline">{suggestion}</div>
    </div>
"""

INSERT_PREAMBLE = "Insert the following new clause:"
AMEND_PREAMBLE = "Replace/Amend with the following:"


# =============================================================================
# Report Generator
# =============================================================================

class ReportGenerator:
    """
    Generates the downloadable remediation schedule.
    
    Non-compliant requirements get a full remediation entry; compliant
    ones are listed once, briefly, at the end.
    """
    
    def generate_html_report(
        self,
        report: ComplianceReport,
        generated_on: Optional[date] = None
    ) -> str:
        """
        Render the remediation schedule.
        
        Args:
            report: Decoded compliance report
            generated_on: Date printed in the header (defaults to today)
            
        Returns:
            Complete HTML document
        """
        generated_on = generated_on or date.today()
        
        remediation = "".join(
            self._format_requirement(req)
            for req in report.remediation_requirements()
        )
        compliant = "\n".join(
            self._format_compliant_item(req)
            for req in report.compliant_requirements()
        )
        
        return DOCUMENT_TEMPLATE.format(
            styles=REPORT_STYLES,
            date=format_report_date(generated_on),
            citation=REGULATORY_CITATION,
            summary=self._format_summary(report),
            remediation=remediation,
            compliant=compliant,
        )
    
    def build_export(
        self,
        report: ComplianceReport,
        generated_on: Optional[date] = None
    ) -> ExportedReport:
        """Render the report and wrap it for download under the fixed file name."""
        return ExportedReport(
            filename=EXPORT_FILENAME,
            content=self.generate_html_report(report, generated_on),
            mime_type="text/html",
        )
    
    # -------------------------------------------------------------------------
    # Formatting Helpers
    # -------------------------------------------------------------------------
    
    def _format_summary(self, report: ComplianceReport) -> str:
        """Format the executive summary block."""
        assessment = report.overall_assessment
        
        return SUMMARY_TEMPLATE.format(
            rating_class=severity_class(assessment.rating),
            rating=_escape(assessment.rating.value),
            summary=_escape(assessment.summary),
            risks="".join(f"<li>{_escape(r)}</li>" for r in assessment.key_risks),
            strengths="".join(f"<li>{_escape(s)}</li>" for s in assessment.key_strengths),
        )
    
    def _format_requirement(self, req: RequirementAnalysis) -> str:
        """Format one remediation entry."""
        excerpt = ""
        if req.excerpt:
            excerpt = EXCERPT_TEMPLATE.format(
                reference=_escape(req.clause_reference or "N/A"),
                excerpt=_escape(req.excerpt),
            )
        
        suggestion = ""
        if req.needs_remediation and req.suggested_improvement:
            suggestion = SUGGESTION_TEMPLATE.format(
                preamble=drafting_preamble(req.status),
                suggestion=_escape(req.suggested_improvement).replace("\n", "<br/>"),
            )
        
        return REQUIREMENT_TEMPLATE.format(
            name=_escape(req.name),
            article=_escape(req.article_reference),
            status_class=severity_class(req.status),
            status=_escape(req.status.value),
            analysis=_escape(req.analysis),
            excerpt=excerpt,
            suggestion=suggestion,
        )
    
    @staticmethod
    def _format_compliant_item(req: RequirementAnalysis) -> str:
        """Format one line of the compliant-items list."""
        reference = _escape(req.clause_reference or "Found")
        return f"    <li><strong>{_escape(req.name)}:</strong> Compliant ({reference})</li>"


# =============================================================================
# Helper Functions
# =============================================================================

def _escape(text: str) -> str:
    return html.escape(text, quote=True)


def drafting_preamble(status: ComplianceStatus) -> str:
    """
    Pick the instruction shown above suggested drafting.
    
    Args:
        status: Requirement status
        
    Returns:
        Insert wording when nothing was found, amend wording otherwise
    """
    if "Not Found" in status.value:
        return INSERT_PREAMBLE
    return AMEND_PREAMBLE


def format_report_date(value: date) -> str:
    """Format a date day-month-year, e.g. '19 October 2026'."""
    return f"{value.day} {value.strftime('%B %Y')}"


def generate_html_report(report: ComplianceReport, generated_on: Optional[date] = None) -> str:
    """
    Render a remediation schedule.
    
    Args:
        report: Decoded compliance report
        generated_on: Date printed in the header (defaults to today)
        
    Returns:
        Complete HTML document
    """
    return ReportGenerator().generate_html_report(report, generated_on)
