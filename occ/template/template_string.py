"""
Продукция шаблонных строк: `...` и корень документа.

Корень документа разбирается этой же продукцией без обрамляющих
обратных кавычек: весь ввод считается телом шаблона верхнего уровня.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .engine import EngineState, ParsingEngine
from .nodes import BaseNode, TemplateStringNode
from .tag import parse_tag
from .tokens import ParseOptions, Tokens, escaped_text
from ..errors import UnexpectedEndOfInput

logger = logging.getLogger(__name__)

# Символы, которые экранирование превращает в обычный текст
TEMPLATE_DELIMITERS = frozenset({
    Tokens.TEMPLATE_STRING_END.value,
    Tokens.TAG_START.value,
    Tokens.ESCAPE.value,
})


@dataclass
class TemplateStringState(EngineState):
    is_closed: bool = False        # Встретилась закрывающая обратная кавычка
    next_is_escaped: bool = False  # Следующий символ экранирован


def _handle_escape(engine: ParsingEngine, current: str, state: TemplateStringState,
                   node: TemplateStringNode) -> Optional[bool]:
    if current == Tokens.ESCAPE and not state.next_is_escaped:
        state.next_is_escaped = True

        node.text_length += 1
        state.i += 1
        return True
    return None


def _handle_letter(engine: ParsingEngine, current: str, state: TemplateStringState,
                   node: TemplateStringNode) -> Optional[bool]:
    consumed = 2 if state.next_is_escaped else 1
    node.append_text(escaped_text(current, state.next_is_escaped, TEMPLATE_DELIMITERS), consumed)
    state.next_is_escaped = False

    state.i += 1
    node.text_length += 1
    return True


def _keep_trailing_escape(engine: ParsingEngine, state: TemplateStringState,
                          node: TemplateStringNode) -> Optional[bool]:
    # Одинокая обратная косая черта в конце документа остаётся текстом
    if state.next_is_escaped and node.parent is None:
        node.append_text(Tokens.ESCAPE.value)
    return None


def parse_template_string(
    data: str,
    options: Optional[ParseOptions] = None,
    parent: Optional[BaseNode] = None,
    start: int = 0,
) -> TemplateStringNode:
    """
    Разбирает шаблонную строку.

    Для вложенной строки на data[start] стоит открывающая обратная кавычка,
    а узел должен закрыться. Корень документа (parent=None) разбирается
    без разделителей до конца ввода.

    Args:
        data: Исходник
        options: Полный исходник и абсолютный индекс начала тела строки
        parent: Родительский узел (None для корня документа)
        start: Индекс начала строки в data

    Raises:
        TemplateSyntaxError: При любой синтаксической ошибке внутри строки
    """
    # Тело начинается после открывающей обратной кавычки
    body = start + 1 if parent is not None else start
    if options is None:
        options = ParseOptions(data, body)

    def handle_tag(engine: ParsingEngine, current: str, state: TemplateStringState,
                   node: TemplateStringNode) -> Optional[bool]:
        if current == Tokens.TAG_START and not state.next_is_escaped:
            child = parse_tag(data, options.nested(state.i), node, body + state.i)
            node.children.append(child)

            node.text_length += child.text_length
            state.i += child.text_length
            return True
        return None

    def handle_backtick(engine: ParsingEngine, current: str, state: TemplateStringState,
                        node: TemplateStringNode) -> Optional[bool]:
        if current != Tokens.TEMPLATE_STRING_END or state.next_is_escaped:
            return None

        if node.parent is not None:
            state.is_closed = True
            state.finished = True

            state.i += 1
            node.text_length += 1
            return True

        # В корне документа обратная кавычка открывает вложенную шаблонную строку
        child = parse_template_string(data, options.nested(state.i), node, body + state.i)
        node.children.append(child)

        node.text_length += child.text_length
        state.i += child.text_length
        return True

    def check_closed(engine: ParsingEngine, state: TemplateStringState,
                     node: TemplateStringNode) -> Optional[bool]:
        if not state.is_closed and node.parent is not None:
            raise UnexpectedEndOfInput(
                "Unexpected end of input",
                source=options.full_source,
                index=options.at(state.i - 1),
            )
        return None

    node = (
        ParsingEngine(TemplateStringState(), TemplateStringNode(parent=parent))
        .use(_handle_escape)
        .use(handle_tag)
        .use(handle_backtick)
        .use(_handle_letter)
        .end(check_closed)
        .end(_keep_trailing_escape)
        .run(data, body)
    )

    # Учитываем открывающую обратную кавычку
    if parent is not None:
        node.text_length += 1

    logger.debug(f"Parsed template string with {len(node.children)} children, length {node.text_length}")
    return node


__all__ = ["parse_template_string", "TemplateStringState", "TEMPLATE_DELIMITERS"]
