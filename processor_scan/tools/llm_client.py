"""
LLM Client for Gemini integration.

Provides a narrow interface to the Gemini ``generateContent`` REST endpoint,
handling request construction, transport errors and response unwrapping.
One attempt per call: no retries, no streaming.
"""

import logging
import time
from typing import Optional

import httpx

from processor_scan.errors import LLMServiceError
from processor_scan.models.schemas import LLMResponse


logger = logging.getLogger(__name__)


# =============================================================================
# Gemini Client
# =============================================================================

class GeminiClient:
    """
    Client for the Gemini generative language API.
    
    The API key is only checked when a request is made, so a missing
    key shows up as a failed analysis rather than a startup error.
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the Gemini client.
        
        Args:
            api_key: Gemini API key
            base_url: API base URL
            model: Default model to use
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to fake the service)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
    
    def __enter__(self):
        """Context manager entry."""
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - cleanup resources."""
        self.close()
    
    def close(self):
        """Close the HTTP client and release resources."""
        self._client.close()
    
    # -------------------------------------------------------------------------
    # Generation Methods
    # -------------------------------------------------------------------------
    
    def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_schema: Optional[dict] = None,
        model: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        """
        Generate a JSON response constrained by a schema.
        
        Args:
            prompt: The user prompt
            system_prompt: Optional system instruction
            response_schema: Optional output schema (Gemini OpenAPI subset)
            model: Model to use (uses default if not specified)
            temperature: Generation temperature (0.0-1.0)
            max_tokens: Output token cap; None leaves the model default
            
        Returns:
            LLMResponse with the raw JSON text as content
            
        Raises:
            LLMServiceError: On missing credentials, transport failure,
                a non-2xx response or an unreadable response body
        """
        if not self.api_key:
            raise LLMServiceError("No API key configured", kind="missing_api_key")
        
        model = model or self.model
        start_time = time.time()
        
        generation_config = {
            "responseMimeType": "application/json",
            "temperature": temperature,
        }
        if max_tokens is not None:
            generation_config["maxOutputTokens"] = max_tokens
        if response_schema is not None:
            generation_config["responseSchema"] = response_schema
        
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": generation_config,
        }
        
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        
        try:
            response = self._client.post(
                f"/models/{model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": self.api_key},
            )
            response.raise_for_status()
            data = response.json()
            
        except httpx.TimeoutException as e:
            raise LLMServiceError(f"Request timed out after {self.timeout}s", kind="timeout") from e
        
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise LLMServiceError(
                f"HTTP error {status}: {e.response.text[:500]}",
                kind=_classify_status(status),
                status_code=status,
            ) from e
        
        except httpx.RequestError as e:
            raise LLMServiceError(f"Connection error: {e}", kind="network") from e
        
        except ValueError as e:
            raise LLMServiceError(f"Response is not JSON: {e}", kind="bad_response") from e
        
        if not isinstance(data, dict):
            raise LLMServiceError("Response body is not a JSON object", kind="bad_response")
        
        generation_time = time.time() - start_time
        
        return LLMResponse(
            content=extract_candidate_text(data),
            model=model,
            tokens_used=extract_token_count(data),
            generation_time=generation_time
        )


# =============================================================================
# Helper Functions
# =============================================================================

def _classify_status(status: int) -> str:
    """Map an HTTP status code to an LLMServiceError kind."""
    if status in (401, 403):
        return "auth"
    elif status == 429:
        return "rate_limit"
    else:
        return "http"


def extract_candidate_text(data: dict) -> str:
    """
    Pull the generated text out of a generateContent response body.
    
    Args:
        data: Decoded response body
        
    Returns:
        Concatenated text of the first candidate's parts ("" if none)

    Raises:
        LLMServiceError: If the candidate does not have the documented shape
    """
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback") or {}
        logger.warning("Response has no candidates (feedback: %s)", feedback)
        return ""

    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise LLMServiceError("Malformed candidates in response", kind="bad_response")

    candidate = candidates[0]
    content = candidate.get("content") or {}
    if not isinstance(content, dict):
        raise LLMServiceError("Malformed candidate content in response", kind="bad_response")

    parts = content.get("parts") or []
    if not isinstance(parts, list) or not all(isinstance(part, dict) for part in parts):
        raise LLMServiceError("Malformed candidate parts in response", kind="bad_response")

    if finish_reason := candidate.get("finishReason"):
        if finish_reason != "STOP":
            logger.warning("Candidate finished with reason %s", finish_reason)

    texts = [part.get("text") or "" for part in parts]
    if not all(isinstance(text, str) for text in texts):
        raise LLMServiceError("Non-text candidate part in response", kind="bad_response")
    return "".join(texts)


def extract_token_count(data: dict) -> int:
    """Total token count from ``usageMetadata``, 0 when absent or unreadable."""
    usage = data.get("usageMetadata") or {}
    if not isinstance(usage, dict):
        return 0

    count = usage.get("totalTokenCount") or 0
    return count if isinstance(count, int) else 0


def create_client(config) -> GeminiClient:
    """
    Create a Gemini client from a GeminiConfig.
    
    Args:
        config: GeminiConfig instance
        
    Returns:
        Configured GeminiClient instance
    """
    return GeminiClient(
        api_key=config.api_key,
        base_url=config.base_url,
        model=config.model,
        timeout=config.timeout,
    )
