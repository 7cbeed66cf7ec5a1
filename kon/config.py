from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

SCHEMA_VERSION = 1
DEFAULT_CFG_FILE = "kon.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# --------------------------------------------------------------------------- #
# ДЕФОЛТЫ
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "schema_version": SCHEMA_VERSION,
    "show_tokens": False,
    "show_ast": False,
    "log_level": "WARNING",
    "prompt": "> ",
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class Settings:
    """Типизированные настройки интерпретатора."""
    show_tokens: bool = False
    show_ast: bool = False
    log_level: str = "WARNING"
    prompt: str = "> "

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Накладываем значения пользователя поверх дефолтов."""
    cfg = _DEFAULT_CFG.copy()
    cfg.update(raw)                      # пользовательские ключи перекрывают
    return cfg


def _to_settings(cfg: Dict[str, Any], path: Path) -> Settings:
    level = str(cfg.get("log_level", "WARNING")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"{path}: unknown log_level '{cfg.get('log_level')}'")

    return Settings(
        show_tokens=bool(cfg.get("show_tokens")),
        show_ast=bool(cfg.get("show_ast")),
        log_level=level,
        prompt=str(cfg.get("prompt", "> ")),
    )


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Path) -> Dict[str, Any]:
    """
    Загрузить kon.yaml.

    • Если файла нет - вернуть дефолты.
    • Если schema_version отсутствует - считаем, что это актуальная версия.
    • Проверяем несовместимость схем.
    """
    if not path.exists():
        return _DEFAULT_CFG.copy()

    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    if raw.get("schema_version", SCHEMA_VERSION) != SCHEMA_VERSION:
        raise ConfigError(
            f"Unsupported config schema {raw.get('schema_version')} "
            f"(tool expects {SCHEMA_VERSION})"
        )

    return _merge_defaults(raw)


def load_settings(path: Path) -> Settings:
    """kon.yaml → Settings (дефолты, если файла нет)."""
    return _to_settings(load_config(path), path)


__all__ = ["SCHEMA_VERSION", "DEFAULT_CFG_FILE", "Settings", "load_config", "load_settings"]
