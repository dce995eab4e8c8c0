"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from shared.logging import get_logger, setup_logging

    # Setup at application start
    setup_logging()

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("edge_created", edge_type="HAS_SKILL", from_id="dev1", to_id="skill1")
    logger.warning("duplicate_node_rejected", kind="Team", node_id="team1")
"""

from shared.logging.logger import bind_context, clear_context, get_logger, setup_logging


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
