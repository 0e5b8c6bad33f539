"""
Shared fixtures for Data Processor Scan tests.
"""

import io
import json

import docx
import httpx
import pytest

from processor_scan.errors import AnalysisError
from processor_scan.models.schemas import ComplianceReport
from processor_scan.tools.llm_client import GeminiClient


# =============================================================================
# Report Fixtures
# =============================================================================

@pytest.fixture
def report_payload():
    """A report as the analysis service would return it."""
    return {
        "overall_assessment": {
            "rating": "Partially Compliant",
            "summary": "The DPA covers most Article 28(3) terms but is silent on audits.",
            "key_risks": ["No audit rights", "Sub-processor flow-down is vague"],
            "key_strengths": ["Clear security schedule"],
        },
        "requirements": [
            {
                "name": "Confidentiality",
                "article_reference": "Art 28(3)(b)",
                "status": "Compliant",
                "clause_reference": "Clause 4.2",
                "excerpt": "All personnel are bound by confidentiality.",
                "analysis": "Personnel confidentiality is expressly required.",
                "suggested_improvement": "",
                "risk_level": "Low",
            },
            {
                "name": "Sub-processors",
                "article_reference": "Art 28(3)(d)",
                "status": "Partially Compliant",
                "clause_reference": "Clause 7",
                "excerpt": "The Processor may appoint sub-processors.",
                "analysis": "No prior authorisation requirement.",
                "suggested_improvement": "The Processor shall not engage a sub-processor\nwithout prior written authorisation.",
                "risk_level": "Medium",
            },
            {
                "name": "Audits and Inspections",
                "article_reference": "Art 28(3)(h)",
                "status": "Not Found / Non-Compliant",
                "analysis": "No audit clause located.",
                "suggested_improvement": "The Processor shall allow for and contribute to audits.",
                "risk_level": "High",
            },
        ],
    }


@pytest.fixture
def sample_report(report_payload):
    """Decoded mixed report: one compliant, one partial, one missing."""
    return ComplianceReport.model_validate(report_payload)


@pytest.fixture
def compliant_report():
    """Report with a Likely Compliant rating and no gaps."""
    return ComplianceReport.model_validate({
        "overall_assessment": {
            "rating": "Likely Compliant",
            "summary": "All mandatory terms are present.",
            "key_risks": [],
            "key_strengths": ["Comprehensive DPA"],
        },
        "requirements": [
            {
                "name": "Documented Instructions",
                "article_reference": "Art 28(3)(a)",
                "status": "Compliant",
                "clause_reference": "Clause 2",
                "analysis": "Processing limited to documented instructions.",
                "risk_level": "Low",
            },
            {
                "name": "End of Contract",
                "article_reference": "Art 28(3)(g)",
                "status": "Compliant",
                "analysis": "Deletion or return on termination.",
                "risk_level": "Low",
            },
        ],
    })


@pytest.fixture
def contract_text():
    """Pasted contract text comfortably above the minimum length."""
    return (
        "DATA PROCESSING AGREEMENT\n"
        "1. The Processor shall process Personal Data only on documented "
        "instructions from the Controller.\n"
        "2. The Processor shall ensure that persons authorised to process "
        "the Personal Data are bound by confidentiality.\n"
    )


# =============================================================================
# Fake Analysis Backends
# =============================================================================

class FakeAnalyzer:
    """Analyzer double that records calls and replays queued outcomes."""
    
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
    
    def analyze(self, text, document_type):
        self.calls.append((text, document_type))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_analyzer_factory():
    """Build a FakeAnalyzer with queued reports or exceptions."""
    return FakeAnalyzer


@pytest.fixture
def analysis_failure():
    """The collapsed analysis error."""
    return AnalysisError()


def gemini_body(content: str, tokens: int = 1234) -> dict:
    """A generateContent response wrapping ``content`` as the model output."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": content}]}}
        ],
        "usageMetadata": {"totalTokenCount": tokens},
    }


@pytest.fixture
def gemini_factory():
    """
    Build a GeminiClient backed by an httpx.MockTransport.
    
    The factory takes a handler ``(request) -> httpx.Response`` and returns
    ``(client, requests)`` where ``requests`` collects every request sent.
    """
    clients = []
    
    def factory(handler, api_key="test-key"):
        requests = []
        
        def recording_handler(request):
            requests.append(request)
            return handler(request)
        
        client = GeminiClient(
            api_key=api_key,
            transport=httpx.MockTransport(recording_handler),
        )
        clients.append(client)
        return client, requests
    
    yield factory
    
    for client in clients:
        client.close()


@pytest.fixture
def respond_with():
    """Handler factory: always answer 200 with ``content`` as model output."""
    def make_handler(content):
        if not isinstance(content, str):
            content = json.dumps(content)
        return lambda request: httpx.Response(200, json=gemini_body(content))
    return make_handler


# =============================================================================
# Document Fixtures
# =============================================================================

def build_pdf(page_texts: list[str]) -> bytes:
    """Write a minimal PDF with one line of Helvetica text per page."""
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]
    for pid, text in zip(page_ids, page_texts):
        stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET"
        objects.append(
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
        )
        objects.append(f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream")
    
    out = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")
    
    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return out


@pytest.fixture
def pdf_factory():
    """Build PDF bytes from a list of page texts."""
    return build_pdf


@pytest.fixture
def docx_bytes():
    """A DOCX with two paragraphs and a one-row table."""
    document = docx.Document()
    document.add_heading("Data Processing Agreement", level=1)
    document.add_paragraph("The Processor shall act only on documented instructions.")
    document.add_paragraph("")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Data subjects"
    table.rows[0].cells[1].text = "Employees"
    
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_factory():
    """
    Build DOCX bytes from body blocks in order.
    
    A string block becomes a paragraph; a list of rows becomes a table.
    """
    def factory(blocks):
        document = docx.Document()
        for block in blocks:
            if isinstance(block, str):
                document.add_paragraph(block)
                continue
            table = document.add_table(rows=len(block), cols=len(block[0]))
            for row, values in zip(table.rows, block):
                for cell, value in zip(row.cells, values):
                    cell.text = value
        
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()
    return factory
