from __future__ import annotations

"""
Configuration Domain Management.

Provides the default scan configuration and loading of user-provided JSON
configuration files. Values read from disk are merged over the defaults so
that files written for older versions keep working.
"""

import json
import logging
import os
from typing import Any, Dict

from component_inventory.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_COMPONENT_BASE_CLASSES,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_EXTENSIONS,
    DEFAULT_FRAMEWORK_NAMESPACES,
    DEFAULT_INCLUDE_PATH,
    DEFAULT_REF_FORWARDING_WRAPPERS,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default scan configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": os.getcwd(),
        "base_path": "",

        # Filtering
        "include_path": DEFAULT_INCLUDE_PATH,
        "extensions": list(DEFAULT_EXTENSIONS),
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),

        # Classification
        "include_nested_definitions": False,
        "ref_forwarding_wrappers": list(DEFAULT_REF_FORWARDING_WRAPPERS),
        "framework_namespaces": list(DEFAULT_FRAMEWORK_NAMESPACES),
        "component_base_classes": list(DEFAULT_COMPONENT_BASE_CLASSES),

        # Execution
        "max_workers": 1,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    A missing, unreadable or malformed file is not fatal: the problem is
    logged and the defaults are returned.

    Args:
        config_path: Path to a JSON object file.

    Returns:
        Dict[str, Any]: The merged (unvalidated) configuration.
    """
    config = get_default_config()

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return config

    version = data.pop("version", None)
    if version and version != CURRENT_CONFIG_VERSION:
        logger.debug(f"Config version {version} differs from {CURRENT_CONFIG_VERSION}.")

    config.update(data)
    return config


def save_config(config: Dict[str, Any], config_path: str) -> None:
    """
    Persist a configuration as a versioned JSON file.

    Args:
        config: The configuration dictionary to save.
        config_path: Target file path.
    """
    payload = {"version": CURRENT_CONFIG_VERSION}
    payload.update(config)
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
