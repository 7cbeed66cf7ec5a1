from __future__ import annotations

from importlib import metadata

# Имена дистрибутива: основное и то, под которым пакет публикуется в индексе
_DISTRIBUTIONS = ("kon", "kon-lang")

# Запуск из исходников без установки
_UNKNOWN_VERSION = "0.0.0"


def tool_version() -> str:
    """Версия установленного интерпретатора для `kon --version` и логов."""
    for name in _DISTRIBUTIONS:
        try:
            return metadata.version(name)
        except metadata.PackageNotFoundError:
            continue
    return _UNKNOWN_VERSION


__all__ = ["tool_version"]
