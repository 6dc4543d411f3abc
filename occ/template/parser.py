"""
Точка входа компилятора: исходный текст -> синтаксическое дерево.
"""

from __future__ import annotations

import logging

from .nodes import TemplateStringNode
from .template_string import parse_template_string
from .tokens import ParseOptions
from ..errors import NestingTooDeep

logger = logging.getLogger(__name__)


def compile_template(source: str) -> TemplateStringNode:
    """
    Компилирует исходный текст шаблона в дерево.

    Весь ввод разбирается как тело шаблонной строки верхнего уровня
    без обрамляющих обратных кавычек.

    Raises:
        TemplateSyntaxError: При нарушении грамматики (с позицией и трассой)
        NestingTooDeep: Если вложенность не помещается в стек рекурсии
    """
    try:
        tree = parse_template_string(source, ParseOptions(source, 0), None)
    except RecursionError:
        # Продукции рекурсивны: глубина ограничена стеком интерпретатора
        raise NestingTooDeep("Nesting too deep", source=source, index=0) from None
    logger.debug(f"Compiled template of {len(source)} chars into {len(tree.children)} top-level nodes")
    return tree


# Имя из внешнего контракта компилятора
compile = compile_template


__all__ = ["compile_template", "compile"]
