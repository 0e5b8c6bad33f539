"""
Session Controller for Data Processor Scan.

Owns the state of one browser session and drives the
extract -> analyze -> render flow:

    IDLE --submit (>= 50 chars)--> LOADING --success--> READY --reset--> IDLE
                                           --failure--> ERROR --submit--> LOADING

Every analysis gets a ticket. Reset and new submissions invalidate older
tickets, so a late answer for an abandoned request is dropped instead of
overwriting newer state.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from processor_scan.agent.reporter import ReportGenerator
from processor_scan.errors import (
    AnalysisError,
    InputValidationError,
    InvalidTransitionError,
    ProcessorScanError,
)
from processor_scan.models.schemas import ComplianceReport, DocumentType, ExportedReport
from processor_scan.tools.document_loader import DocumentLoader


logger = logging.getLogger(__name__)


EMPTY_FILE_MESSAGE = "The file seems empty or could not be read."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class AppState(str, Enum):
    """Observable states of a session."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Analyzer(Protocol):
    """Anything that can turn contract text into a ComplianceReport."""

    def analyze(self, text: str, document_type: DocumentType) -> ComplianceReport:
        ...


# =============================================================================
# Session Controller
# =============================================================================

class SessionController:
    """
    State machine for one user session.
    
    The view reads ``state``, ``report``, ``error`` and ``input_error``
    and calls the action methods; it never sees exceptions from the
    pipeline, only the messages stored here.
    
    Example:
        >>> controller = SessionController(analyzer)
        >>> controller.submit_text(contract_text)
        >>> if controller.state is AppState.READY:
        ...     export = controller.export_report()
    """
    
    def __init__(
        self,
        analyzer: Analyzer,
        loader: Optional[DocumentLoader] = None,
        reporter: Optional[ReportGenerator] = None,
        min_input_chars: int = 50
    ):
        """
        Initialize the controller.
        
        Args:
            analyzer: Analysis backend
            loader: Document loader for uploads
            reporter: Renderer for the export
            min_input_chars: Shorter text is rejected before analysis
        """
        self.analyzer = analyzer
        self.loader = loader or DocumentLoader()
        self.reporter = reporter or ReportGenerator()
        self.min_input_chars = min_input_chars
        
        self.document_type = DocumentType.DPA
        self.state = AppState.IDLE
        self.report: Optional[ComplianceReport] = None
        self.error: Optional[str] = None
        self.input_error: Optional[str] = None
        
        self._ticket = 0
    
    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    
    @property
    def is_loading(self) -> bool:
        """True while an analysis is in flight."""
        return self.state is AppState.LOADING
    
    @property
    def can_submit(self) -> bool:
        """True when a new analysis may start."""
        return self.state in (AppState.IDLE, AppState.ERROR)
    
    # -------------------------------------------------------------------------
    # User Actions
    # -------------------------------------------------------------------------

    def select_document_type(self, document_type: DocumentType):
        """Set the document type sent with the next analysis."""
        self.document_type = DocumentType(document_type)

    def submit_text(self, text: str) -> bool:
        """
        Analyze pasted text.

        Args:
            text: Contract text

        Returns:
            True if an analysis was run (whatever its outcome), False if
            the input was rejected locally
        """
        self.input_error = None
        try:
            self._check_can_submit()
            self.validate_text(text)
        except ProcessorScanError as e:
            self.input_error = e.user_message
            return False
        
        self.run_analysis(text)
        return True
    
    def submit_file(
        self,
        filename: str,
        data: bytes,
        declared_type: Optional[str] = None
    ) -> bool:
        """
        Extract text from an upload and analyze it.
        
        Args:
            filename: Uploaded file name
            data: Raw file content
            declared_type: Media type reported by the browser
            
        Returns:
            True if an analysis was run, False if the upload was rejected
        """
        self.input_error = None
        try:
            self._check_can_submit()
            text = self.loader.extract_file(filename, data, declared_type)
            # Measured after stripping, same as pasted text
            self.validate_text(text, message=EMPTY_FILE_MESSAGE)
        except ProcessorScanError as e:
            self.input_error = e.user_message
            return False
        
        self.run_analysis(text)
        return True
    
    def reset(self):
        """Return to IDLE, discarding the report and abandoning any request."""
        self._ticket += 1
        self.state = AppState.IDLE
        self.report = None
        self.error = None
        self.input_error = None
        logger.debug("Session reset")
    
    def export_report(self) -> ExportedReport:
        """
        Render the current report for download.
        
        Returns:
            ExportedReport with the fixed download file name
            
        Raises:
            InvalidTransitionError: If no report is ready
        """
        if self.state is not AppState.READY or self.report is None:
            raise InvalidTransitionError("There is no report to export.")
        return self.reporter.build_export(self.report)
    
    # -------------------------------------------------------------------------
    # Analysis Lifecycle
    # -------------------------------------------------------------------------
    
    def validate_text(self, text: str, message: Optional[str] = None):
        """
        Reject text too short to analyze.
        
        Raises:
            InputValidationError: If the stripped text is below the minimum
        """
        if len((text or "").strip()) < self.min_input_chars:
            raise InputValidationError(message)
    
    def run_analysis(self, text: str):
        """
        Run one analysis to completion.
        
        All failures end in the ERROR state with a displayable message.
        """
        ticket = self.begin_analysis()
        try:
            report = self.analyzer.analyze(text, self.document_type)
        except AnalysisError as e:
            self.fail(ticket, e.user_message)
        except Exception:
            logger.exception("Unexpected failure during analysis")
            self.fail(ticket, UNEXPECTED_ERROR_MESSAGE)
        else:
            self.complete(ticket, report)
    
    def begin_analysis(self) -> int:
        """
        Enter LOADING.
        
        Returns:
            Ticket identifying this analysis
            
        Raises:
            InvalidTransitionError: Unless the session is IDLE or ERROR
        """
        self._check_can_submit()

        self._ticket += 1
        self.state = AppState.LOADING
        self.error = None
        self.input_error = None
        logger.debug("Analysis %d started (%s)", self._ticket, self.document_type.value)
        return self._ticket
    
    def complete(self, ticket: int, report: ComplianceReport) -> bool:
        """
        Store a finished report.
        
        Returns:
            False if the ticket is stale and the report was dropped
        """
        if not self._is_current(ticket):
            return False
        
        self.report = report
        self.state = AppState.READY
        logger.debug("Analysis %d ready: %d requirements", ticket, len(report.requirements))
        return True
    
    def fail(self, ticket: int, message: str) -> bool:
        """
        Record a failed analysis.
        
        Returns:
            False if the ticket is stale and the failure was dropped
        """
        if not self._is_current(ticket):
            return False
        
        self.report = None
        self.error = message or UNEXPECTED_ERROR_MESSAGE
        self.state = AppState.ERROR
        return True
    
    def _check_can_submit(self):
        if not self.can_submit:
            raise InvalidTransitionError("An analysis is already running or a report is open.")

    def _is_current(self, ticket: int) -> bool:
        if ticket != self._ticket or self.state is not AppState.LOADING:
            logger.info("Dropping result of abandoned analysis %d", ticket)
            return False
        return True
