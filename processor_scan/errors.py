"""
Exception hierarchy for Data Processor Scan.

Every error carries a ``user_message``: the text that is safe to show in the
browser. Provider details, parser tracebacks and similar diagnostics are
logged, never displayed.
"""

from typing import Optional


class ProcessorScanError(Exception):
    """Base class for all application errors."""

    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


# =============================================================================
# Input Errors (local, recoverable)
# =============================================================================

class InputValidationError(ProcessorScanError, ValueError):
    """Contract text is empty or too short to analyze."""

    default_message = "Please enter enough text to analyze (min 50 chars)."


class UnsupportedFileTypeError(ProcessorScanError, ValueError):
    """Uploaded file is not plain text, DOCX or PDF."""

    default_message = "Unsupported file type. Please use TXT, DOCX, or PDF."


class DocumentExtractionError(ProcessorScanError):
    """Text could not be extracted from an uploaded document."""

    default_message = "Failed to extract text from file."


class PdfParseError(DocumentExtractionError):
    """A PDF could not be opened or parsed."""

    default_message = "Could not parse PDF. Please copy and paste the text instead."


# =============================================================================
# Analysis Errors
# =============================================================================

class LLMServiceError(ProcessorScanError):
    """
    Transport-level failure talking to the analysis service.

    Attributes:
        kind: Short failure category (auth, rate_limit, timeout, network,
            http, bad_response, missing_api_key)
        status_code: HTTP status code, if the service answered
    """

    default_message = "The analysis service request failed."

    def __init__(
        self,
        message: Optional[str] = None,
        kind: str = "network",
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class AnalysisError(ProcessorScanError):
    """Analysis failed; all provider and decoding failures collapse to this."""

    default_message = (
        "Failed to analyze the contract. "
        "Ensure the API Key is valid and the text is readable."
    )


# =============================================================================
# Controller Errors
# =============================================================================

class InvalidTransitionError(ProcessorScanError, RuntimeError):
    """An operation was requested in a state that does not allow it."""

    default_message = "That action is not available right now."
