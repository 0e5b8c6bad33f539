"""
Configuration management for Data Processor Scan.

Handles loading and validating configuration from environment variables
and the bundled checklist YAML.
"""

import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field
import yaml


# =============================================================================
# Configuration Models
# =============================================================================

class GeminiConfig(BaseModel):
    """Configuration for the Gemini analysis service."""
    
    # API key; absence only surfaces when an analysis is attempted
    api_key: Optional[str] = Field(
        default=None,
        description="Gemini API key"
    )
    
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API base URL"
    )
    
    model: str = Field(
        default="gemini-2.5-flash",
        description="Model identifier"
    )
    
    # Bounded so a stuck request cannot hold the session in LOADING
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds"
    )
    
    # None sends no cap; thinking tokens count against it on 2.5 models
    max_tokens: Optional[int] = Field(
        default=None,
        description="Output token cap (None for the model default)"
    )
    
    # Low temperature keeps classifications stable between runs
    temperature: float = Field(
        default=0.1,
        description="Generation temperature (lower = more deterministic)"
    )


class AnalysisConfig(BaseModel):
    """Configuration for contract analysis input handling."""
    
    max_input_chars: int = Field(
        default=30000,
        description="Contract text is truncated to this length before sending"
    )
    
    min_input_chars: int = Field(
        default=50,
        description="Shorter text is rejected before analysis"
    )
    
    checklist_path: Path = Field(
        default=Path(__file__).parent / "checklist.yaml",
        description="Path to the Article 28(3) checklist YAML"
    )


class AppConfig(BaseModel):
    """Main application configuration."""
    
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    
    log_level: str = Field(
        default="INFO",
        description="Logging level name"
    )


# =============================================================================
# Configuration Loading Functions
# =============================================================================

def load_yaml_config(path: Path) -> dict:
    """
    Load configuration from a YAML file.
    
    Args:
        path: Path to the YAML file
        
    Returns:
        Dictionary with configuration data
        
    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_checklist(path: Optional[Path] = None) -> list[dict]:
    """
    Load the Article 28(3) checklist items.
    
    Args:
        path: Optional path to a checklist file. Uses default if not provided.
        
    Returns:
        Ordered list of checklist item dicts (id, name, article, description)
    """
    if path is None:
        path = Path(__file__).parent / "checklist.yaml"
    
    return load_yaml_config(path).get("requirements", [])


def get_config(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    log_level: Optional[str] = None
) -> AppConfig:
    """
    Get application configuration with optional overrides.
    
    Environment variables are applied first, explicit arguments last.
    
    Args:
        api_key: Override the Gemini API key
        model: Override the default model
        log_level: Override the logging level
        
    Returns:
        Configured AppConfig instance
    """
    config = AppConfig()
    
    # Apply environment variable overrides
    if env_key := os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"):
        config.gemini.api_key = env_key
    
    if env_model := os.getenv("GEMINI_MODEL"):
        config.gemini.model = env_model
    
    if env_url := os.getenv("GEMINI_BASE_URL"):
        config.gemini.base_url = env_url
    
    if env_timeout := os.getenv("GEMINI_TIMEOUT"):
        config.gemini.timeout = float(env_timeout)
    
    if env_max_tokens := os.getenv("GEMINI_MAX_TOKENS"):
        config.gemini.max_tokens = int(env_max_tokens)
    
    if env_level := os.getenv("PROCESSOR_SCAN_LOG_LEVEL"):
        config.log_level = env_level.upper()
    
    # Apply explicit overrides
    if api_key:
        config.gemini.api_key = api_key
    
    if model:
        config.gemini.model = model
    
    if log_level:
        config.log_level = log_level.upper()
    
    return config


# =============================================================================
# Project Paths
# =============================================================================

PACKAGE_ROOT = Path(__file__).parent.parent

DEFAULT_CHECKLIST_PATH = Path(__file__).parent / "checklist.yaml"
