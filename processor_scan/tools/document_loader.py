"""
Document Loader for Data Processor Scan.

Extracts plain text from uploaded contract documents: plain text,
DOCX and PDF. Works on in-memory bytes, since uploads never touch disk.
"""

import io
import logging
from pathlib import PurePath
from typing import Optional

import docx
import pypdf
from docx.oxml.table import CT_Tbl
from docx.oxml.text.paragraph import CT_P
from docx.table import Table
from docx.text.paragraph import Paragraph

from processor_scan.errors import (
    DocumentExtractionError,
    PdfParseError,
    UnsupportedFileTypeError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Media Types
# =============================================================================

TEXT_MEDIA_TYPE = "text/plain"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MEDIA_TYPE = "application/pdf"

# Fallback when neither the browser nor the extension tells us anything
UNKNOWN_MEDIA_TYPE = "application/octet-stream"

EXTENSION_MEDIA_TYPES = {
    ".txt": TEXT_MEDIA_TYPE,
    ".docx": DOCX_MEDIA_TYPE,
    ".pdf": PDF_MEDIA_TYPE,
}


# =============================================================================
# Document Loader
# =============================================================================

class DocumentLoader:
    """
    Extracts text from contract documents.
    
    The loader only reads its input; validation of the extracted text
    (e.g. minimum length) is the caller's job.
    """
    
    # Tried in order before falling back to replacement characters
    TEXT_ENCODINGS = ("utf-8-sig", "cp1252")
    
    # -------------------------------------------------------------------------
    # Main Loading Methods
    # -------------------------------------------------------------------------
    
    def extract(self, data: bytes, media_type: str) -> str:
        """
        Extract plain text from document bytes.
        
        Args:
            data: Raw file content
            media_type: Declared media type of the content
            
        Returns:
            Extracted text
            
        Raises:
            UnsupportedFileTypeError: If the media type is not accepted
            PdfParseError: If a PDF cannot be opened or parsed
            DocumentExtractionError: If any other extraction step fails
        """
        if media_type == TEXT_MEDIA_TYPE:
            return self._load_text(data)
        elif media_type == DOCX_MEDIA_TYPE:
            return self._load_docx(data)
        elif media_type == PDF_MEDIA_TYPE:
            return self._load_pdf(data)
        
        logger.info("Rejected upload with media type %r", media_type)
        raise UnsupportedFileTypeError()
    
    def extract_file(
        self,
        filename: str,
        data: bytes,
        declared_type: Optional[str] = None
    ) -> str:
        """
        Extract text from an uploaded file.
        
        Args:
            filename: Name of the uploaded file
            data: Raw file content
            declared_type: Media type reported by the browser, if any
            
        Returns:
            Extracted text
        """
        media_type = guess_media_type(filename, declared_type)
        logger.debug("Extracting %s as %s (%d bytes)", filename, media_type, len(data))
        return self.extract(data, media_type)
    
    # -------------------------------------------------------------------------
    # Format-Specific Loaders
    # -------------------------------------------------------------------------
    
    def _load_pdf(self, data: bytes) -> str:
        """
        Extract text from a PDF, page by page.
        
        Tokens on a page are joined with single spaces; pages are
        separated by a blank line, in page order.
        """
        try:
            reader = pypdf.PdfReader(io.BytesIO(data))
            
            pages = []
            for page in reader.pages:
                page_text = page.extract_text() or ""
                pages.append(" ".join(page_text.split()))
        except Exception as e:
            logger.warning("PDF parse error: %s", e)
            raise PdfParseError() from e
        
        return "\n\n".join(pages)
    
    def _load_docx(self, data: bytes) -> str:
        """
        Extract raw text from a DOCX body, discarding formatting.
        
        Paragraphs and tables are read in body order; each table row
        becomes one block with its cells joined by " | ".
        """
        try:
            document = docx.Document(io.BytesIO(data))
            
            blocks = []
            for child in document.element.body.iterchildren():
                if isinstance(child, CT_P):
                    text = Paragraph(child, document).text
                    if text.strip():
                        blocks.append(text)
                elif isinstance(child, CT_Tbl):
                    for row in Table(child, document).rows:
                        row_text = [cell.text for cell in row.cells if cell.text.strip()]
                        if row_text:
                            blocks.append(" | ".join(row_text))
        except Exception as e:
            logger.warning("DOCX extraction failed: %s", e)
            raise DocumentExtractionError() from e
        
        return "\n\n".join(blocks)
    
    def _load_text(self, data: bytes) -> str:
        """Decode a plain text upload, dropping any UTF-8 byte order mark."""
        for encoding in self.TEXT_ENCODINGS:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                continue
        
        logger.info("Text upload is not UTF-8 or cp1252; replacing undecodable bytes")
        return data.decode("utf-8", errors="replace")
    
    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------
    
    @staticmethod
    def get_supported_formats() -> dict[str, str]:
        """
        Get the accepted media types and their upload extensions.
        
        Returns:
            Dict mapping media type to file extension (without the dot)
        """
        return {
            media_type: extension.lstrip(".")
            for extension, media_type in EXTENSION_MEDIA_TYPES.items()
        }
    
    @staticmethod
    def is_supported(media_type: str) -> bool:
        """Check if a media type can be extracted."""
        return media_type in EXTENSION_MEDIA_TYPES.values()


# =============================================================================
# Convenience Functions
# =============================================================================

def guess_media_type(filename: str, declared: Optional[str] = None) -> str:
    """
    Resolve the media type of an upload.
    
    The browser-declared type wins; the file extension is only consulted
    when the browser sent nothing.
    
    Args:
        filename: Name of the uploaded file
        declared: Media type reported by the browser
        
    Returns:
        Media type string
    """
    if declared:
        return declared
    
    suffix = PurePath(filename).suffix.lower()
    return EXTENSION_MEDIA_TYPES.get(suffix, UNKNOWN_MEDIA_TYPE)


def extract_text(data: bytes, media_type: str) -> str:
    """
    Extract text from document bytes.
    
    Args:
        data: Raw file content
        media_type: Declared media type
        
    Returns:
        Extracted text content
    """
    return DocumentLoader().extract(data, media_type)
