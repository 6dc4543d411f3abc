"""
Лексический алфавит шаблонизатора.

Определяет служебные символы языка и параметры, которые продукции
грамматики передают друг другу для позиционной диагностики.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class Tokens(str, enum.Enum):
    """Служебные символы шаблона."""

    ESCAPE = "\\"

    TEMPLATE_STRING_START = "`"
    TEMPLATE_STRING_END = "`"
    SINGLE_QUOTE_STRING_START = "'"
    SINGLE_QUOTE_STRING_END = "'"
    DOUBLE_QUOTE_STRING_START = '"'
    DOUBLE_QUOTE_STRING_END = '"'

    TAG_START = "{"
    TAG_END = "}"
    COMMENT_TAG = "!"

    SEPARATOR = " "
    NEWLINE = "\n"

    ASSIGNMENT_OPERATOR = "="


# Разделители аргументов тега
WHITESPACE = frozenset({Tokens.SEPARATOR.value, Tokens.NEWLINE.value})

# Допустимый символ имени метода/переменной (цифры не допускаются)
NAME_CHAR = re.compile(r"[$_A-Za-z]")


def is_whitespace(current: str) -> bool:
    return current in WHITESPACE


def escaped_text(current: str, escaped: bool, delimiters: frozenset) -> str:
    """
    Текст, который даёт символ current с учётом предшествующего экранирования.

    Экранированный служебный разделитель продукции становится самим собой,
    любой другой экранированный символ сохраняет обратную косую черту.
    """
    if not escaped or current in delimiters:
        return current
    return Tokens.ESCAPE.value + current


@dataclass(frozen=True)
class ParseOptions:
    """
    Параметры вызова продукции.

    Продукции ведут локальный курсор от начала своего тела, поэтому
    для ошибок им нужен полный текст и абсолютный индекс этого начала.
    """
    full_source: str      # Полный исходный текст
    global_index: int = 0  # Абсолютный индекс первого символа тела продукции (после открывающего разделителя)

    def at(self, i: int) -> int:
        """Абсолютный индекс для локального смещения i."""
        return self.global_index + i

    def nested(self, i: int) -> "ParseOptions":
        """Параметры для вложенной продукции, чей открывающий разделитель стоит на локальном смещении i."""
        return ParseOptions(self.full_source, self.global_index + i + 1)


__all__ = ["Tokens", "WHITESPACE", "NAME_CHAR", "is_whitespace", "escaped_text", "ParseOptions"]
