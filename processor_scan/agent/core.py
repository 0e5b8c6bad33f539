"""
Core wiring for Data Processor Scan.

Builds the analysis pipeline from configuration and hands out one
SessionController per browser session.
"""

import logging
from typing import Optional

from processor_scan.agent.analyzer import ContractAnalyzer
from processor_scan.agent.controller import SessionController
from processor_scan.agent.reporter import ReportGenerator
from processor_scan.config.settings import AppConfig, get_config, load_checklist
from processor_scan.models.schemas import ComplianceReport, DocumentType
from processor_scan.tools.document_loader import DocumentLoader
from processor_scan.tools.llm_client import GeminiClient, create_client


logger = logging.getLogger(__name__)


# =============================================================================
# Compliance Agent
# =============================================================================

class ComplianceAgent:
    """
    Article 28(3) contract review pipeline.
    
    Components are created lazily so that building an agent never touches
    the network; a missing API key only shows up when analysis runs.
    
    Example:
        >>> agent = ComplianceAgent()
        >>> session = agent.new_session()
        >>> session.submit_text(contract_text)
        >>> print(session.state, session.error)
    """
    
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        llm_client: Optional[GeminiClient] = None
    ):
        """
        Initialize the agent.
        
        Args:
            config: Optional full configuration object
            llm_client: Optional pre-built client (e.g. with a fake transport)
        """
        self.config = config or get_config()
        
        self._llm_client = llm_client
        self._checklist: Optional[list[dict]] = None
        self._document_loader: Optional[DocumentLoader] = None
        self._analyzer: Optional[ContractAnalyzer] = None
        self._reporter: Optional[ReportGenerator] = None
    
    # -------------------------------------------------------------------------
    # Properties (Lazy Initialization)
    # -------------------------------------------------------------------------
    
    @property
    def llm(self) -> GeminiClient:
        """Get or create the LLM client."""
        if self._llm_client is None:
            self._llm_client = create_client(self.config.gemini)
        return self._llm_client
    
    @property
    def checklist(self) -> list[dict]:
        """Get the Article 28(3) checklist items."""
        if self._checklist is None:
            self._checklist = load_checklist(self.config.analysis.checklist_path)
        return self._checklist
    
    @property
    def loader(self) -> DocumentLoader:
        """Get or create the document loader."""
        if self._document_loader is None:
            self._document_loader = DocumentLoader()
        return self._document_loader
    
    @property
    def analyzer(self) -> ContractAnalyzer:
        """Get or create the contract analyzer."""
        if self._analyzer is None:
            self._analyzer = ContractAnalyzer(
                llm_client=self.llm,
                checklist=self.checklist,
                max_input_chars=self.config.analysis.max_input_chars,
                temperature=self.config.gemini.temperature,
                max_tokens=self.config.gemini.max_tokens
            )
        return self._analyzer
    
    @property
    def reporter(self) -> ReportGenerator:
        """Get or create the report generator."""
        if self._reporter is None:
            self._reporter = ReportGenerator()
        return self._reporter
    
    # -------------------------------------------------------------------------
    # Main Methods
    # -------------------------------------------------------------------------
    
    def new_session(self) -> SessionController:
        """Create the controller for a new browser session."""
        return SessionController(
            analyzer=self.analyzer,
            loader=self.loader,
            reporter=self.reporter,
            min_input_chars=self.config.analysis.min_input_chars
        )
    
    def analyze_text(
        self,
        contract_text: str,
        document_type: DocumentType = DocumentType.DPA
    ) -> ComplianceReport:
        """
        Analyze contract text directly, outside any session.
        
        Raises:
            AnalysisError: If the analysis fails
        """
        return self.analyzer.analyze(contract_text, document_type)
    
    def close(self):
        """Close connections and release resources."""
        if self._llm_client:
            self._llm_client.close()
            self._llm_client = None
            self._analyzer = None
    
    def __enter__(self):
        """Context manager entry."""
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
