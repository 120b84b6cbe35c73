"""
Configuration settings for the IPAM console
"""

import copy
import json
import os
from typing import Any, Dict


DEFAULT_CONFIG = {
    "sqlite": {
        "db_path": "data/ipam_console.db",
    },
    "ui": {
        "per_page": 10,
        "date_format": "%Y-%m-%d %H:%M",
    },
    "session": {
        "user_id": "user_admin_001",
        "username": "admin",
        "role": "Administrator",
    },
    "logging": {
        "path": "logs/ipam_console.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.ipam_console_config.json")


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay `overrides` onto `base` (in place)."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: str = CONFIG_FILE) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                _merge(config, json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            print(f"Error loading config file: {e}")

    if os.environ.get("IPAM_CONSOLE_DB"):
        config["sqlite"]["db_path"] = os.environ["IPAM_CONSOLE_DB"]

    per_page = os.environ.get("IPAM_CONSOLE_PER_PAGE")
    if per_page:
        try:
            config["ui"]["per_page"] = max(1, int(per_page))
        except ValueError:
            print(f"Ignoring non-numeric IPAM_CONSOLE_PER_PAGE: {per_page!r}")

    if os.environ.get("IPAM_CONSOLE_LOG_LEVEL"):
        config["logging"]["level"] = os.environ["IPAM_CONSOLE_LOG_LEVEL"]

    if os.environ.get("IPAM_CONSOLE_ROLE"):
        config["session"]["role"] = os.environ["IPAM_CONSOLE_ROLE"]

    return config


def save_config(config: Dict[str, Any], path: str = CONFIG_FILE) -> bool:
    """
    Save configuration to file
    """
    try:
        with open(path, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        print(f"Error saving config file: {e}")
        return False
