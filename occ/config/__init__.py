"""
Configuration loading for OCC.
"""

from __future__ import annotations

from .load import CONFIG_FILE_NAME, config_path, load_config
from .model import OccConfig
from .typed import load_typed

__all__ = [
    "CONFIG_FILE_NAME",
    "OccConfig",
    "config_path",
    "load_config",
    "load_typed",
]
