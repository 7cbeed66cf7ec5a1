from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_CFG_FILE, Settings, load_settings
from .errors import KonError
from .interpreter.errors import InterpreterErrors
from .interpreter.runner import Interpreter, RunOptions
from .jsonic import dumps_line
from .log import setup_logging
from .report import failure_report, success_report
from .version import tool_version

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="kon",
        description="Kon expression interpreter",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")

    mode = p.add_mutually_exclusive_group(required=True)
    mode.add_argument("-f", "--file", metavar="PATH", help="выполнить файл со скриптом")
    mode.add_argument("-i", "--interactive", action="store_true", help="интерактивный режим (REPL)")
    mode.add_argument("-e", "--eval", metavar="SOURCE", dest="source", help="вычислить выражение из аргумента")

    p.add_argument("--show-tokens", action="store_true", help="вывести токены в stderr")
    p.add_argument("--show-ast", action="store_true", help="вывести дерево выражения в stderr")
    p.add_argument("--json", action="store_true", help="JSON-отчёт о прогоне в stdout")
    p.add_argument(
        "--config",
        metavar="PATH",
        help=f"файл настроек (по умолчанию ./{DEFAULT_CFG_FILE})",
    )
    return p


def _options(ns: argparse.Namespace, settings: Settings) -> RunOptions:
    # Флаги CLI перекрывают значения из kon.yaml
    return RunOptions(
        show_tokens=bool(ns.show_tokens or settings.show_tokens),
        show_ast=bool(ns.show_ast or settings.show_ast),
    )


def _report_error(error: KonError) -> None:
    if isinstance(error, InterpreterErrors):
        for line in error.report_lines():
            sys.stderr.write(line + "\n")
    else:
        sys.stderr.write(str(error).rstrip() + "\n")


def _emit_dumps(interpreter: Interpreter) -> None:
    if interpreter.token_dump is not None:
        sys.stderr.write(interpreter.token_dump)
    if interpreter.tree_dump is not None:
        sys.stderr.write(interpreter.tree_dump)


def _run_source(interpreter: Interpreter, source: str, name: str, as_json: bool) -> int:
    """Один прогон; возвращает код выхода."""
    try:
        value = interpreter.run(source, name)
    except KonError as e:
        if as_json:
            report = failure_report(source, e, tokens=interpreter.token_dump, ast=interpreter.tree_dump)
            sys.stdout.write(dumps_line(report))
        else:
            _emit_dumps(interpreter)
            _report_error(e)
        return 2

    if as_json:
        report = success_report(source, value, tokens=interpreter.token_dump, ast=interpreter.tree_dump)
        sys.stdout.write(dumps_line(report))
    else:
        _emit_dumps(interpreter)
        sys.stdout.write(f"{value}\n")
    return 0


def _run_prompt(interpreter: Interpreter, prompt: str, as_json: bool) -> int:
    """
    REPL: строка за строкой до EOF; ошибки печатаются, но не завершают сессию.

    С --json stdout содержит только отчёты, по одному JSON-объекту на строку,
    поэтому приглашение не выводится.
    """
    while True:
        if not as_json:
            sys.stdout.write(prompt)
            sys.stdout.flush()

        line = sys.stdin.readline()
        if not line:
            if not as_json:
                sys.stdout.write("\n")
            return 0
        if not line.strip():
            continue

        _run_source(interpreter, line, "stdio", as_json)


def _read_script(path_arg: str) -> str:
    path = Path(path_arg)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise KonError(f"script `{path}` was not found")
    except OSError as e:
        raise KonError(f"failed to read script `{path}`: {e}")


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        cfg_path = Path(ns.config) if ns.config else Path.cwd() / DEFAULT_CFG_FILE
        settings = load_settings(cfg_path)
        setup_logging(settings.log_level_value)
        logger.info(f"kon: {tool_version()}")

        interpreter = Interpreter(_options(ns, settings))

        if ns.interactive:
            return _run_prompt(interpreter, settings.prompt, ns.json)

        if ns.file:
            source = _read_script(ns.file)
            return _run_source(interpreter, source, Path(ns.file).name, ns.json)

        return _run_source(interpreter, ns.source, "argv", ns.json)

    except KonError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
