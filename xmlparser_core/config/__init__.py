"""
Configuration Management
========================

Parser and serialization settings for document contexts.
"""

from xmlparser_core.config.settings import (
    ParserConfig,
    load_config,
    save_config,
    get_default_config,
)

__all__ = [
    "ParserConfig",
    "load_config",
    "save_config",
    "get_default_config",
]
