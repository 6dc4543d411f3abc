"""
Интерактивная оболочка: читает строки, исполняет их как шаблоны, печатает результат.

Все строки исполняются в одном контексте, поэтому объявления
переменных сохраняются между вводами.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TextIO

from .errors import OccUserError
from .runtime.runtime import Runtime, RuntimeOptions
from .template.parser import compile_template

logger = logging.getLogger(__name__)

PROMPT = "> "
EXIT_COMMAND = ".exit"
CONTEXT_COMMAND = ".context"


class Repl:
    """
    Read-Eval-Print Loop.

    Usage:
        Repl(RuntimeOptions(timeout=1000)).run()
    """

    def __init__(
        self,
        options: Optional[RuntimeOptions] = None,
        *,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
        prompt: str = PROMPT,
    ):
        self.input_fn = input_fn or input
        self.output = output or sys.stdout
        self.prompt = prompt
        # Пустое дерево: нужен только контекст, общий для всех строк
        self.runtime = Runtime(compile_template(""), options)

    def _print(self, text: str) -> None:
        self.output.write(text + "\n")

    def eval_line(self, line: str) -> str:
        """Компилирует и исполняет одну строку в общем контексте."""
        self.runtime.tree = compile_template(line)
        return self.runtime.start()

    def run(self) -> None:
        """Крутит цикл до EOF, Ctrl+C или команды .exit."""
        while True:
            try:
                line = self.input_fn(self.prompt)
            except (EOFError, KeyboardInterrupt):
                self._print("")
                break

            if not line.strip():
                continue

            command = line.strip()
            if command == EXIT_COMMAND:
                break
            if command == CONTEXT_COMMAND:
                self._print(", ".join(sorted(self.runtime.context)))
                continue

            try:
                self._print(self.eval_line(line))
            except OccUserError as e:
                self._print(f"{type(e).__name__}: {e}")
            except Exception as e:
                # Ошибка функции тега хоста не должна ронять оболочку
                logger.debug("Unhandled error in REPL line", exc_info=True)
                self._print(f"Error: {type(e).__name__}: {e}")


__all__ = ["Repl", "PROMPT"]
