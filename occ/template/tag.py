"""
Продукция тегов: обычные теги, комментарии и объявления переменных.

Разбор начинается с обычного TagNode. Когда становится понятно, что это
комментарий ({!...}) или объявление ({name=value}), движку подставляется
новый узел нужного типа, в который явно переносятся уже накопленные поля.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .engine import EngineState, ParsingEngine
from .nodes import AnyTagNode, BaseNode, CommentTagNode, TagNode, VariableDeclarationTagNode
from .strings import parse_string
from .tokens import NAME_CHAR, ParseOptions, Tokens, is_whitespace
from ..errors import (
    ExpressionExpected,
    InvalidMethodOrVariableName,
    InvalidToken,
    UnexpectedEndOfInput,
    UnexpectedToken,
)

logger = logging.getLogger(__name__)

Production = Callable[[str, ParseOptions, BaseNode, int], BaseNode]


@dataclass
class TagState(EngineState):
    is_closed: bool = False  # Встретилась закрывающая фигурная скобка
    arg_state: int = 0       # 0 - разбирается имя метода, N - номер текущего аргумента


# Заполняется при первом обращении: template_string импортирует этот модуль
_VALUE_PRODUCTIONS: Dict[str, Production] = {}


def _value_productions() -> Dict[str, Production]:
    """Таблица продукций, которые могут стоять на месте аргумента или значения."""
    if not _VALUE_PRODUCTIONS:
        from .template_string import parse_template_string

        _VALUE_PRODUCTIONS.update({
            Tokens.TAG_START.value: parse_tag,
            Tokens.TEMPLATE_STRING_START.value: parse_template_string,
            Tokens.SINGLE_QUOTE_STRING_START.value: parse_string,
            Tokens.DOUBLE_QUOTE_STRING_START.value: parse_string,
        })
    return _VALUE_PRODUCTIONS


def parse_tag(
    data: str,
    options: Optional[ParseOptions] = None,
    parent: Optional[BaseNode] = None,
    start: int = 0,
) -> AnyTagNode:
    """
    Разбирает тег, комментарий или объявление переменной.

    Для вложенного тега на data[start] стоит открывающая фигурная скобка,
    и тег обязан закрыться. Тег верхнего уровня (parent=None) - это тело
    тега без скобок, начинающееся с data[start].

    Args:
        data: Исходник
        options: Полный исходник и абсолютный индекс начала тела тега
        parent: Родительский узел
        start: Индекс начала тега в data

    Returns:
        TagNode, CommentTagNode или VariableDeclarationTagNode

    Raises:
        TemplateSyntaxError: При любой синтаксической ошибке внутри тега
    """
    # Тело начинается после открывающей фигурной скобки
    body = start + 1 if parent is not None else start
    if options is None:
        options = ParseOptions(data, body)

    def fail(error_cls, message: str, i: int):
        return error_cls(message, source=options.full_source, index=options.at(i))

    def handle_end(engine: ParsingEngine, current: str, state: TagState, node: AnyTagNode) -> Optional[bool]:
        if current == Tokens.TAG_END and node.parent is not None:
            if isinstance(node, TagNode) and not node.method:
                raise fail(ExpressionExpected, "Expression expected", state.i)
            state.is_closed = True
            state.finished = True

            state.i += 1
            node.text_length += 1
            return True
        return None

    def handle_comment(engine: ParsingEngine, current: str, state: TagState, node: AnyTagNode) -> Optional[bool]:
        # Восклицательный знак первым символом превращает тег в комментарий
        if current == Tokens.COMMENT_TAG and state.i == 0 and isinstance(node, TagNode):
            engine.node = CommentTagNode(parent=node.parent, text_length=node.text_length + 1)
            logger.debug("Tag reclassified as comment")

            state.i += 1
            return True

        if isinstance(node, CommentTagNode):
            node.comment_text += current

            state.i += 1
            node.text_length += 1
            return True
        return None

    def handle_declaration(engine: ParsingEngine, current: str, state: TagState, node: AnyTagNode) -> Optional[bool]:
        if not isinstance(node, TagNode) or current != Tokens.ASSIGNMENT_OPERATOR:
            return None

        # Объявление допустимо только сразу после имени
        if node.children:
            raise fail(UnexpectedToken, "Unexpected token", state.i)
        if not node.method:
            raise fail(InvalidMethodOrVariableName, "Invalid method or variable name", state.i)

        engine.node = VariableDeclarationTagNode(
            parent=node.parent,
            name=node.method,
            text_length=node.text_length + 1,
        )
        logger.debug(f"Tag reclassified as declaration of '{node.method}'")

        state.arg_state = 1
        state.i += 1
        return True

    def handle_method(engine: ParsingEngine, current: str, state: TagState, node: AnyTagNode) -> Optional[bool]:
        if not isinstance(node, TagNode) or state.arg_state != 0:
            return None

        if is_whitespace(current):
            # Пробел после непустого имени открывает аргументы
            if node.method:
                state.arg_state += 1
        else:
            if not NAME_CHAR.fullmatch(current):
                raise fail(InvalidMethodOrVariableName, "Invalid method or variable name", state.i)
            node.method += current

        node.text_length += 1
        state.i += 1
        return True

    def handle_separator(engine: ParsingEngine, current: str, state: TagState, node: AnyTagNode) -> Optional[bool]:
        if state.arg_state == 0 or not is_whitespace(current):
            return None

        # Повторные пробелы не создают пустых аргументов
        if isinstance(node, TagNode) and len(node.children) >= state.arg_state:
            state.arg_state += 1
        elif isinstance(node, VariableDeclarationTagNode) and node.data is not None:
            state.arg_state += 1

        node.text_length += 1
        state.i += 1
        return True

    def handle_value(engine: ParsingEngine, current: str, state: TagState, node: AnyTagNode) -> Optional[bool]:
        if isinstance(node, CommentTagNode) or is_whitespace(current):
            return None

        # У объявления ровно одно значение
        if isinstance(node, VariableDeclarationTagNode) and (state.arg_state > 1 or node.data is not None):
            raise fail(UnexpectedToken, "Unexpected token", state.i)

        production = _value_productions().get(current)
        if production is None:
            raise fail(InvalidToken, "Invalid token - expected a tag, string, or template string", state.i)

        child = production(data, options.nested(state.i), node, body + state.i)
        if isinstance(node, VariableDeclarationTagNode):
            node.data = child
        else:
            node.children.append(child)

        node.text_length += child.text_length
        state.i += child.text_length
        return True

    def check_complete(engine: ParsingEngine, state: TagState, node: AnyTagNode) -> Optional[bool]:
        unclosed = not state.is_closed and node.parent is not None
        missing_value = isinstance(node, VariableDeclarationTagNode) and node.data is None
        if unclosed or missing_value:
            raise fail(UnexpectedEndOfInput, "Unexpected end of input", state.i - 1)
        return None

    node = (
        ParsingEngine(TagState(), TagNode(parent=parent))
        .use(handle_end)
        .use(handle_comment)
        .use(handle_declaration)
        .use(handle_method)
        .use(handle_separator)
        .use(handle_value)
        .end(check_complete)
        .run(data, body)
    )

    # Учитываем открывающую фигурную скобку
    if parent is not None:
        node.text_length += 1

    logger.debug(f"Parsed {type(node).__name__} of length {node.text_length}")
    return node


__all__ = ["parse_tag", "TagState"]
