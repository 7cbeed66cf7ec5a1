from pathlib import Path

import pytest

from kon.interpreter.error_handler import ErrorHandler
from tests.infrastructure.file_utils import write


@pytest.fixture
def handler() -> ErrorHandler:
    """Свежий сборщик диагностик."""
    return ErrorHandler()


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Рабочая директория с kon.yaml по умолчанию и небольшим скриптом."""
    root = tmp_path
    write(root / "kon.yaml", "schema_version: 1\nlog_level: WARNING\n")
    write(root / "sum.kon", "// sum of two\n1 + 2 * 3\n")
    return root


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    # KON_DEBUG из окружения разработчика не должен влиять на тесты
    monkeypatch.delenv("KON_DEBUG", raising=False)
