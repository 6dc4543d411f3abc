"""
Диагностика позиций в исходном тексте шаблона.

Строит двухстрочную трассу для синтаксических ошибок: строку исходника,
содержащую проблемный символ, и строку с кареткой под ним.
"""

from __future__ import annotations

from typing import Tuple

# Сколько символов строки показывать вокруг каретки
BEFORE_LIMIT = 18
BEFORE_KEEP = 15
AFTER_LIMIT = 19
AFTER_KEEP = 16
ELLIPSIS = "..."


class DiagnosticsIndexError(RuntimeError):
    """Запрошенного индекса нет в исходнике (нарушение инварианта компилятора)."""
    pass


def _find_line(source: str, index: int) -> Tuple[int, int, str]:
    """
    Находит строку, содержащую символ с индексом index.

    Returns:
        (номер строки с 1, смещение внутри строки с 0, текст строки без \\n)
    """
    if index < 0 or index >= len(source):
        raise DiagnosticsIndexError(f"Invalid index {index} for source of length {len(source)}")

    line_no = 1
    line_start = 0
    for i in range(index):
        if source[i] == "\n":
            line_no += 1
            line_start = i + 1

    line_end = source.find("\n", line_start)
    if line_end == -1:
        line_end = len(source)

    return line_no, index - line_start, source[line_start:line_end]


def locate(source: str, index: int) -> Tuple[int, int]:
    """Возвращает (строка, колонка) для индекса, обе нумерации с 1."""
    line_no, offset, _ = _find_line(source, index)
    return line_no, offset + 1


def focus_on_column(line: str, column: int) -> str:
    """
    Рисует строку и каретку под символом с индексом column (с 0).

    Длинные строки обрезаются с обеих сторон от каретки.
    """
    before, after = line[:column], line[column:]

    if len(before) > BEFORE_LIMIT:
        before = ELLIPSIS + before[-BEFORE_KEEP:]
    if len(after) > AFTER_LIMIT:
        after = after[:AFTER_KEEP] + ELLIPSIS

    return before + after + "\n" + " " * len(before) + "^"


def create_trace(source: str, index: int) -> str:
    """
    Формирует трассу ошибки для абсолютного индекса в исходнике.

    Raises:
        DiagnosticsIndexError: Если индекса нет в исходнике
    """
    _, offset, line = _find_line(source, index)
    return focus_on_column(line, offset)


__all__ = ["create_trace", "locate", "focus_on_column", "DiagnosticsIndexError"]
