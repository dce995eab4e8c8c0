"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from shared.config import settings

    print(settings.environment)
    print(settings.graph.seed_file)
"""

from shared.config.settings import (
    Environment,
    GraphSettings,
    LogLevel,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "GraphSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
]
