"""
Parentage Configuration Module

Provides centralized configuration loading for the relationship index.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml


_config_cache: Optional[Dict[str, Any]] = None
CONFIG_DIR = Path(__file__).parent


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes")


def get_parentage_config() -> Dict[str, Any]:
    """
    Load parentage configuration (cached).

    Environment overrides:
        PARENTAGE_PAUSE_RECLAMATION: replaces reclamation.pause_during_compaction

    Returns:
        Dict containing all parentage configuration settings.

    Raises:
        FileNotFoundError: If the bundled config file is missing
    """
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    config_path = CONFIG_DIR / "parentage_config.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    pause = _env_flag("PARENTAGE_PAUSE_RECLAMATION")
    if pause is not None:
        config.setdefault('reclamation', {})['pause_during_compaction'] = pause

    _config_cache = config
    return _config_cache


def clear_config_cache() -> None:
    """Clear the config cache (useful for testing)."""
    global _config_cache
    _config_cache = None
