"""
Contract Analyzer for Data Processor Scan.

Builds the Article 28(3) review request, sends it to the analysis
service and decodes the answer into a ComplianceReport. Every failure
(transport, credentials, malformed or non-conforming output) is
collapsed into a single AnalysisError.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from processor_scan.config.settings import load_checklist
from processor_scan.errors import AnalysisError, LLMServiceError
from processor_scan.models.schemas import (
    ComplianceReport,
    DocumentType,
    OVERALL_RATINGS,
    REQUIREMENT_STATUSES,
    RiskLevel,
)
from processor_scan.tools.llm_client import GeminiClient


logger = logging.getLogger(__name__)


# =============================================================================
# Prompts
# =============================================================================

SYSTEM_PROMPT_TEMPLATE = """You are a senior UK Data Protection Lawyer specializing in GDPR.
Your task is to analyze a contract (Data Processing Agreement or clauses) uploaded by a user.
You must check for compliance specifically with Article 28(3) of the UK GDPR in a Controller-to-Processor relationship.

You must identify if the following required elements are present:
{checklist}

For each point, determine:
- Status: {status_vocabulary}.
- Risk Level: {risk_vocabulary}.
- Improvement: specific legal drafting suggestions if not compliant.

Do not hallucinate clauses. If it's not there, say "Not Found".
Be professional, concise, and purely objective based on UK law."""


ANALYSIS_PROMPT = """Analyze the following text which represents a "{document_type}".

TEXT TO ANALYZE:
{contract_text}"""


STATUS_GLOSSES = {
    "Compliant": "clearly covers requirements",
    "Partially Compliant": "vague/missing details",
}


# =============================================================================
# Response Schema
# =============================================================================

def _string_enum(values) -> dict:
    return {"type": "STRING", "enum": [v.value for v in values]}


RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "overall_assessment": {
            "type": "OBJECT",
            "properties": {
                "rating": _string_enum(OVERALL_RATINGS),
                "summary": {"type": "STRING"},
                "key_risks": {"type": "ARRAY", "items": {"type": "STRING"}},
                "key_strengths": {"type": "ARRAY", "items": {"type": "STRING"}},
            },
            "required": ["rating", "summary", "key_risks", "key_strengths"],
        },
        "requirements": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "article_reference": {"type": "STRING"},
                    "status": _string_enum(REQUIREMENT_STATUSES),
                    "clause_reference": {"type": "STRING"},
                    "excerpt": {"type": "STRING"},
                    "analysis": {"type": "STRING"},
                    "suggested_improvement": {"type": "STRING"},
                    "risk_level": _string_enum(RiskLevel),
                },
                "required": ["name", "article_reference", "status", "analysis", "risk_level"],
            },
        },
    },
    "required": ["overall_assessment", "requirements"],
}


# =============================================================================
# Contract Analyzer
# =============================================================================

class ContractAnalyzer:
    """
    Runs an Article 28(3) compliance review of contract text.
    
    This is the only component that knows about the provider's request
    and response shapes; callers see ``analyze(text, document_type)``.
    """
    
    def __init__(
        self,
        llm_client: GeminiClient,
        checklist: Optional[list[dict]] = None,
        max_input_chars: int = 30000,
        temperature: float = 0.1,
        max_tokens: Optional[int] = None
    ):
        """
        Initialize the contract analyzer.
        
        Args:
            llm_client: Configured Gemini client
            checklist: Checklist items; defaults to the bundled checklist
            max_input_chars: Contract text is truncated to this length
            temperature: Generation temperature
            max_tokens: Output token cap (None for the model default)
        """
        self.llm = llm_client
        self.checklist = checklist if checklist is not None else load_checklist()
        self.max_input_chars = max_input_chars
        self.temperature = temperature
        self.max_tokens = max_tokens
    
    def analyze(self, text: str, document_type: DocumentType) -> ComplianceReport:
        """
        Review contract text and return the decoded report.
        
        Args:
            text: Contract text (no minimum length is enforced here)
            document_type: What the user says the text is
            
        Returns:
            ComplianceReport with requirements in the order returned
            
        Raises:
            AnalysisError: On any transport, credential or decoding failure
        """
        prompt = self.build_prompt(text, document_type)
        
        try:
            response = self.llm.generate_json(
                prompt=prompt,
                system_prompt=self.build_system_prompt(),
                response_schema=RESPONSE_SCHEMA,
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )
        except LLMServiceError as e:
            logger.error("Analysis request failed (%s): %s", e.kind, e.user_message)
            raise AnalysisError() from e
        
        logger.info(
            "Analysis response from %s: %d tokens in %.2fs",
            response.model, response.tokens_used, response.generation_time
        )
        
        return self.parse_report(response.content)
    
    # -------------------------------------------------------------------------
    # Request Construction
    # -------------------------------------------------------------------------
    
    def build_system_prompt(self) -> str:
        """Render the reviewer instruction with the checklist and vocabularies."""
        checklist = "\n".join(
            f"{i}. {item['description']}"
            for i, item in enumerate(self.checklist, 1)
        )
        
        statuses = []
        for status in REQUIREMENT_STATUSES:
            gloss = STATUS_GLOSSES.get(status.value)
            statuses.append(f'"{status.value}" ({gloss})' if gloss else f'"{status.value}"')
        
        return SYSTEM_PROMPT_TEMPLATE.format(
            checklist=checklist,
            status_vocabulary=", ".join(statuses),
            risk_vocabulary=", ".join(level.value for level in RiskLevel),
        )
    
    def build_prompt(self, text: str, document_type: DocumentType) -> str:
        """Embed the document type and the truncated contract text."""
        if len(text) > self.max_input_chars:
            logger.info(
                "Truncating contract text from %d to %d characters",
                len(text), self.max_input_chars
            )
            text = text[:self.max_input_chars]
        
        return ANALYSIS_PROMPT.format(
            document_type=DocumentType(document_type).value,
            contract_text=text,
        )
    
    # -------------------------------------------------------------------------
    # Response Decoding
    # -------------------------------------------------------------------------
    
    @staticmethod
    def parse_report(content: str) -> ComplianceReport:
        """
        Decode the service output into a ComplianceReport.
        
        Empty output is treated as ``{}``, which never decodes into a
        report because every top-level field is required.
        
        Raises:
            AnalysisError: If the content is not a conforming report
        """
        try:
            return ComplianceReport.model_validate_json(content or "{}")
        except ValidationError as e:
            logger.error(
                "Analysis response did not match the report schema (%d errors): %s",
                e.error_count(), e
            )
            raise AnalysisError() from e
