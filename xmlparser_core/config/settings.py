"""
Configuration Settings
======================

Parser and serialization settings for document contexts.
"""

from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Dict, Any
import json
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """
    Settings used to build the lxml parser, the XPath evaluator and the
    serializer of a ``DocumentContext``.

    Example:
        config = ParserConfig(recover=False, pretty_print=True)
        config.namespaces["w"] = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
        save_config(config, Path("parser.yaml"))
    """

    # Parsing
    recover: bool = True
    resolve_entities: bool = False
    no_network: bool = True
    remove_blank_text: bool = False
    huge_tree: bool = False

    # Serialization
    pretty_print: bool = False  # debug formatting
    encoding: str = "UTF-8"
    xml_declaration: bool = True

    # XPath prefix -> namespace URI
    namespaces: Dict[str, str] = field(default_factory=dict)

    log_level: str = "INFO"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'ParserConfig':
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        config = cls(**{k: v for k, v in data.items() if k in known})
        config.namespaces = dict(config.namespaces or {})
        return config


def load_config(config_path: Path) -> ParserConfig:
    """
    Load configuration from file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config_path: Path to config file

    Returns:
        ParserConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is not supported
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    logger.info(f"Loaded configuration from {config_path}")
    return ParserConfig.from_dict(data or {})


def save_config(config: ParserConfig, config_path: Path) -> None:
    """
    Save configuration to file.

    Supports JSON and YAML formats based on file extension.

    Raises:
        ValueError: If file format is not supported
    """
    suffix = config_path.suffix.lower()
    data = config.to_dict()

    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported config format: {suffix}")

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        if suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")


def get_default_config() -> ParserConfig:
    """Get default configuration."""
    return ParserConfig()
