"""
Загрузчик конфигурации запуска (occ.yaml).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import OccConfig
from .typed import load_typed
from ..errors import ConfigLoadError

CONFIG_FILE_NAME = "occ.yaml"

_yaml = YAML(typ="safe")
logger = logging.getLogger(__name__)


def config_path(root: Path) -> Path:
    return root / CONFIG_FILE_NAME


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}")
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Optional[Path] = None, *, root: Optional[Path] = None) -> OccConfig:
    """
    Загружает конфигурацию.

    Явно указанный файл обязан существовать. Без него ищется occ.yaml
    в root (по умолчанию - текущая директория); если файла нет,
    возвращается конфигурация по умолчанию.

    Raises:
        ConfigLoadError: Файл не найден, не YAML-словарь или не проходит проверку типов
    """
    if path is None:
        path = config_path(root or Path.cwd())
        if not path.is_file():
            logger.debug(f"No {CONFIG_FILE_NAME} in {path.parent}, using defaults")
            return OccConfig()
    elif not path.is_file():
        raise ConfigLoadError(f"Config file not found: {path}")

    raw = _read_yaml_map(path)
    cfg = load_typed(OccConfig, raw, path=path.name)
    logger.debug(f"Loaded config from {path}: {cfg!r}")
    return cfg


__all__ = ["load_config", "config_path", "CONFIG_FILE_NAME"]
