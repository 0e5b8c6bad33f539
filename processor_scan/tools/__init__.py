"""
Tools package for Data Processor Scan.

Provides document text extraction and the analysis service client.
"""

from processor_scan.tools.document_loader import (
    DocumentLoader,
    extract_text,
    guess_media_type,
    TEXT_MEDIA_TYPE,
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
)
from processor_scan.tools.llm_client import GeminiClient, create_client

__all__ = [
    "DocumentLoader",
    "extract_text",
    "guess_media_type",
    "TEXT_MEDIA_TYPE",
    "DOCX_MEDIA_TYPE",
    "PDF_MEDIA_TYPE",
    "GeminiClient",
    "create_client",
]
