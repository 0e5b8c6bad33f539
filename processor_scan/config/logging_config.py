"""
Logging setup for Data Processor Scan.

Console output goes through rich so that Streamlit server logs stay readable.
"""

import logging

from rich.logging import RichHandler


ROOT_LOGGER_NAME = "processor_scan"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the package logger with a rich console handler.
    
    Safe to call on every Streamlit rerun: the handler is only attached once.
    
    Args:
        level: Logging level name (e.g. "INFO", "DEBUG")
        
    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())
    
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    
    return logger
