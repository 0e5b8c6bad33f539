"""Tests for the document loader."""

import pytest

from processor_scan.errors import (
    DocumentExtractionError,
    PdfParseError,
    UnsupportedFileTypeError,
)
from processor_scan.tools.document_loader import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    TEXT_MEDIA_TYPE,
    UNKNOWN_MEDIA_TYPE,
    DocumentLoader,
    extract_text,
    guess_media_type,
)


@pytest.fixture
def loader():
    """Create a document loader."""
    return DocumentLoader()


# =============================================================================
# Plain Text
# =============================================================================

class TestTextExtraction:
    """Tests for plain text uploads."""

    def test_utf8_is_returned_verbatim(self, loader):
        """Test that UTF-8 text comes back unchanged."""
        data = "Clause 1.\n  The Processor shall – act.\n".encode("utf-8")
        assert loader.extract(data, TEXT_MEDIA_TYPE) == "Clause 1.\n  The Processor shall – act.\n"

    def test_cp1252_fallback(self, loader):
        """Test that non-UTF-8 Windows text still decodes."""
        data = "Processor’s obligations".encode("cp1252")
        assert loader.extract(data, TEXT_MEDIA_TYPE) == "Processor’s obligations"

    def test_empty_file(self, loader):
        """Test that an empty file extracts to an empty string."""
        assert loader.extract(b"", TEXT_MEDIA_TYPE) == ""

    def test_byte_order_mark_dropped(self, loader):
        """Test that a UTF-8 BOM is not part of the extracted text."""
        data = "\ufeffDATA PROCESSING AGREEMENT".encode("utf-8")
        assert loader.extract(data, TEXT_MEDIA_TYPE) == "DATA PROCESSING AGREEMENT"

    def test_undecodable_bytes_replaced(self, loader):
        """Test that bytes valid in neither UTF-8 nor cp1252 become replacement characters."""
        assert loader.extract(b"Clause \x81", TEXT_MEDIA_TYPE) == "Clause \ufffd"

    def test_module_function(self):
        """Test the extract_text convenience function."""
        assert extract_text(b"hello", TEXT_MEDIA_TYPE) == "hello"


# =============================================================================
# DOCX
# =============================================================================

class TestDocxExtraction:
    """Tests for DOCX uploads."""

    def test_paragraphs_extracted(self, loader, docx_bytes):
        """Test that paragraph text is extracted without formatting."""
        text = loader.extract(docx_bytes, DOCX_MEDIA_TYPE)
        assert "Data Processing Agreement" in text
        assert "The Processor shall act only on documented instructions." in text

    def test_paragraph_order(self, loader, docx_bytes):
        """Test that paragraphs keep document order."""
        text = loader.extract(docx_bytes, DOCX_MEDIA_TYPE)
        assert text.index("Data Processing Agreement") < text.index("documented instructions")

    def test_table_rows_extracted(self, loader, docx_bytes):
        """Test that table cells are joined per row."""
        text = loader.extract(docx_bytes, DOCX_MEDIA_TYPE)
        assert "Data subjects | Employees" in text

    def test_blank_paragraphs_dropped(self, loader, docx_bytes):
        """Test that empty paragraphs do not produce extra blank blocks."""
        text = loader.extract(docx_bytes, DOCX_MEDIA_TYPE)
        assert "\n\n\n\n" not in text

    def test_table_between_paragraphs(self, loader, docx_factory):
        """Test that a mid-document table stays in body order."""
        data = docx_factory([
            "Clause 1 before table",
            [["Categories of data", "Contact details"]],
            "Clause 2 after table",
        ])
        text = loader.extract(data, DOCX_MEDIA_TYPE)

        assert text.split("\n\n") == [
            "Clause 1 before table",
            "Categories of data | Contact details",
            "Clause 2 after table",
        ]

    def test_corrupt_docx(self, loader):
        """Test that a broken DOCX raises an extraction error."""
        with pytest.raises(DocumentExtractionError):
            loader.extract(b"this is not a zip archive", DOCX_MEDIA_TYPE)


# =============================================================================
# PDF
# =============================================================================

class TestPdfExtraction:
    """Tests for PDF uploads."""

    def test_pages_in_order(self, loader, pdf_factory):
        """Test that three pages come back in order with blank-line boundaries."""
        data = pdf_factory(["Page1", "Page2", "Page3"])
        text = loader.extract(data, PDF_MEDIA_TYPE)

        assert text.split("\n\n") == ["Page1", "Page2", "Page3"]

    def test_single_page(self, loader, pdf_factory):
        """Test a one-page PDF."""
        data = pdf_factory(["Only page"])
        assert loader.extract(data, PDF_MEDIA_TYPE) == "Only page"

    def test_whitespace_collapsed_within_page(self, loader, pdf_factory):
        """Test that tokens on a page are joined by single spaces."""
        data = pdf_factory(["Sub   processors"])
        assert loader.extract(data, PDF_MEDIA_TYPE) == "Sub processors"

    def test_corrupt_pdf(self, loader):
        """Test that unreadable PDF bytes raise a PDF parse error."""
        with pytest.raises(PdfParseError) as exc_info:
            loader.extract(b"not a pdf at all", PDF_MEDIA_TYPE)

        assert exc_info.value.user_message == (
            "Could not parse PDF. Please copy and paste the text instead."
        )

    def test_pdf_error_is_extraction_error(self, loader):
        """Test that PDF failures can be caught as extraction errors."""
        with pytest.raises(DocumentExtractionError):
            loader.extract(b"%PDF-1.4\ngarbage", PDF_MEDIA_TYPE)


# =============================================================================
# Media Types
# =============================================================================

class TestMediaTypes:
    """Tests for media type resolution and rejection."""

    def test_unsupported_type_rejected(self, loader):
        """Test that other media types are rejected."""
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            loader.extract(b"{}", "application/json")

        assert exc_info.value.user_message == (
            "Unsupported file type. Please use TXT, DOCX, or PDF."
        )

    def test_unsupported_is_value_error(self, loader):
        """Test that unsupported types are also ValueErrors."""
        with pytest.raises(ValueError):
            loader.extract(b"", "image/png")

    def test_declared_type_wins(self):
        """Test that the browser-declared type takes precedence."""
        assert guess_media_type("contract.txt", PDF_MEDIA_TYPE) == PDF_MEDIA_TYPE

    @pytest.mark.parametrize("filename,expected", [
        ("dpa.pdf", PDF_MEDIA_TYPE),
        ("DPA.PDF", PDF_MEDIA_TYPE),
        ("schedule.docx", DOCX_MEDIA_TYPE),
        ("notes.txt", TEXT_MEDIA_TYPE),
        ("scan.png", UNKNOWN_MEDIA_TYPE),
        ("no_extension", UNKNOWN_MEDIA_TYPE),
    ])
    def test_extension_fallback(self, filename, expected):
        """Test that the extension is used when nothing was declared."""
        assert guess_media_type(filename) == expected

    def test_extract_file_uses_extension(self, loader):
        """Test extract_file without a declared type."""
        assert loader.extract_file("clauses.txt", b"Clause text") == "Clause text"

    def test_extract_file_rejects_unknown(self, loader):
        """Test extract_file with an unknown extension."""
        with pytest.raises(UnsupportedFileTypeError):
            loader.extract_file("contract.rtf", b"{\\rtf1}")

    def test_supported_formats(self):
        """Test the supported formats listing."""
        formats = DocumentLoader.get_supported_formats()
        assert formats == {
            TEXT_MEDIA_TYPE: "txt",
            DOCX_MEDIA_TYPE: "docx",
            PDF_MEDIA_TYPE: "pdf",
        }

    def test_is_supported(self):
        """Test is_supported."""
        assert DocumentLoader.is_supported(PDF_MEDIA_TYPE)
        assert not DocumentLoader.is_supported(UNKNOWN_MEDIA_TYPE)
