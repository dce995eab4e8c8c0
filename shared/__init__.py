"""
DEVGRAPH Shared Library
=======================

Common utilities shared by the defect graph engine and its scripts.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Devgraph Team"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
