"""
Продукция строковых литералов: '...' и "...".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .engine import EngineState, ParsingEngine
from .nodes import BaseNode, DoubleQuoteStringNode, SingleQuoteStringNode, StringNode
from .tokens import ParseOptions, Tokens, escaped_text
from ..errors import UnexpectedEndOfInput

logger = logging.getLogger(__name__)


@dataclass
class StringState(EngineState):
    is_closed: bool = False        # Встретилась закрывающая кавычка
    next_is_escaped: bool = False  # Следующий символ экранирован


def _handle_escape(engine: ParsingEngine, current: str, state: StringState, node: StringNode) -> Optional[bool]:
    if current == Tokens.ESCAPE and not state.next_is_escaped:
        state.next_is_escaped = True

        node.text_length += 1
        state.i += 1
        return True
    return None


def _closing_quote(node: StringNode) -> str:
    if isinstance(node, SingleQuoteStringNode):
        return Tokens.SINGLE_QUOTE_STRING_END.value
    return Tokens.DOUBLE_QUOTE_STRING_END.value


def _handle_end(engine: ParsingEngine, current: str, state: StringState, node: StringNode) -> Optional[bool]:
    # Строка верхнего уровня закрываться не обязана
    if current == _closing_quote(node) and node.parent is not None and not state.next_is_escaped:
        state.is_closed = True
        state.finished = True

        state.i += 1
        node.text_length += 1
        return True
    return None


def _handle_letter(engine: ParsingEngine, current: str, state: StringState, node: StringNode) -> Optional[bool]:
    delimiters = frozenset({_closing_quote(node), Tokens.ESCAPE.value})
    node.content += escaped_text(current, state.next_is_escaped, delimiters)
    state.next_is_escaped = False

    state.i += 1
    node.text_length += 1
    return True


def parse_string(
    data: str,
    options: Optional[ParseOptions] = None,
    parent: Optional[BaseNode] = None,
    start: int = 0,
) -> StringNode:
    """
    Разбирает строковый литерал, начинающийся с открывающей кавычки.

    Тип узла выбирается по кавычке. Длина узла включает обе кавычки.

    Args:
        data: Исходник; строка начинается с открывающей кавычки на data[start]
        options: Полный исходник и абсолютный индекс символа после кавычки
        parent: Родительский узел (None для строки верхнего уровня)
        start: Индекс открывающей кавычки в data

    Raises:
        UnexpectedEndOfInput: Если вложенная строка не закрыта
    """
    if options is None:
        options = ParseOptions(data, start + 1)

    quote = data[start:start + 1]
    node_cls = SingleQuoteStringNode if quote == Tokens.SINGLE_QUOTE_STRING_START else DoubleQuoteStringNode

    # Тело начинается сразу после открывающей кавычки
    body = start + 1

    def check_closed(engine: ParsingEngine, state: StringState, node: StringNode) -> Optional[bool]:
        if not state.is_closed and node.parent is not None:
            raise UnexpectedEndOfInput(
                "Unexpected end of input",
                source=options.full_source,
                index=options.at(state.i - 1),
            )
        return None

    node = (
        ParsingEngine(StringState(), node_cls(parent=parent))
        .use(_handle_escape)
        .use(_handle_end)
        .use(_handle_letter)
        .end(check_closed)
        .run(data, body)
    )

    # Учитываем открывающую кавычку
    if parent is not None:
        node.text_length += 1

    logger.debug(f"Parsed {node_cls.__name__} of length {node.text_length}")
    return node


__all__ = ["parse_string", "StringState"]
