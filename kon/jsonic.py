"""
JSON Lines для CLI: каждый отчёт - один компактный объект на своей строке.

Так `--json` в интерактивном режиме даёт поток, который читается построчно.
"""

from __future__ import annotations

import json

from pydantic import BaseModel

_SEPARATORS = (",", ":")


def dumps_line(model: BaseModel) -> str:
    """pydantic-модель в одну строку JSON с завершающим переводом строки."""
    text = json.dumps(model.model_dump(mode="json"), ensure_ascii=False, separators=_SEPARATORS)
    return text + "\n"


__all__ = ["dumps_line"]
