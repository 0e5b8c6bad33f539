"""
Configuration package for Data Processor Scan.
"""

from processor_scan.config.settings import (
    AppConfig,
    GeminiConfig,
    AnalysisConfig,
    get_config,
    load_checklist,
    load_yaml_config,
    DEFAULT_CHECKLIST_PATH,
)
from processor_scan.config.logging_config import setup_logging

__all__ = [
    "AppConfig",
    "GeminiConfig",
    "AnalysisConfig",
    "get_config",
    "load_checklist",
    "load_yaml_config",
    "DEFAULT_CHECKLIST_PATH",
    "setup_logging",
]
