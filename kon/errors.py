"""
Исключения Kon, которые видит пользователь.

Всё, что CLI должен напечатать одной строкой и завершиться с кодом 2,
наследует KonError: диагностики интерпретатора, ошибки kon.yaml,
недоступный файл скрипта. Прочие исключения (включая RecursionError
на слишком глубокой вложенности) считаются дефектами и идут с трейсбеком.
"""

from __future__ import annotations


class KonError(Exception):
    """Базовая ошибка, которую пользователь может исправить сам."""
    pass


class ConfigError(KonError):
    """Некорректный kon.yaml (версия схемы, уровень логирования и т.п.)."""
    pass


__all__ = ["KonError", "ConfigError"]
