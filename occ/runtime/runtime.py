"""
Вычислитель синтаксического дерева.

Обходит дерево в глубину слева направо против одного изменяемого
контекста и собирает итоговую строку. Отмена кооперативная: дедлайн
вычисляется один раз при старте и проверяется на входе в каждый узел
и после каждого вызова функции тега.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .builtins import BUILTIN_TAGS
from .context import Context, ContextData, TagHandler, constant
from ..errors import EvaluationTooDeep, InternalConsistencyError, TimeoutExceeded, UndefinedTag
from ..template.nodes import (
    BaseNode,
    CommentTagNode,
    DoubleQuoteStringNode,
    SingleQuoteStringNode,
    TagNode,
    TemplateStringNode,
    TextLiteralNode,
    VariableDeclarationTagNode,
)

logger = logging.getLogger(__name__)


@dataclass
class RuntimeOptions:
    """Параметры запуска."""
    context: ContextData = field(default_factory=dict)  # Функции тегов от хоста
    timeout: Optional[float] = None                    # Миллисекунды; None - без ограничения
    seed: Optional[int] = None                         # Зерно для встроенных random-тегов


class Runtime:
    """
    Исполняет дерево, построенное компилятором.

    Usage:
        runtime = Runtime(compile_template("Hello {name}"), RuntimeOptions(context={...}))
        text = runtime.start()
    """

    def __init__(self, tree: BaseNode, options: Union[RuntimeOptions, Mapping[str, Any], None] = None):
        if options is None:
            options = RuntimeOptions()
        elif not isinstance(options, RuntimeOptions):
            options = RuntimeOptions(**dict(options))

        self.tree = tree
        self.timeout = options.timeout

        # Встроенные теги перекрывают одноимённые функции хоста
        data: Dict[str, TagHandler] = dict(options.context)
        data.update(BUILTIN_TAGS)
        self.context = Context(data, rng=random.Random(options.seed))

    def start(self) -> str:
        """
        Запускает вычисление и возвращает итоговую строку.

        Raises:
            UndefinedTag: Тег ссылается на неизвестное имя
            TimeoutExceeded: Вычисление не уложилось в timeout
            EvaluationTooDeep: Дерево не помещается в стек рекурсии
            BuiltinArgumentError: Встроенный тег получил неверные аргументы
        """
        deadline = self._deadline()
        logger.debug(f"Runtime started (timeout={self.timeout}ms, {len(self.context)} tags in context)")

        try:
            result = self.run_node(self.tree, deadline)
        except RecursionError:
            raise EvaluationTooDeep("Template nesting too deep to evaluate") from None

        logger.debug(f"Runtime finished, produced {len(result)} chars")
        return result

    def _deadline(self) -> float:
        if self.timeout is None:
            return float("inf")
        return time.monotonic() + self.timeout / 1000.0

    def run_node(self, node: BaseNode, deadline: float) -> str:
        """Вычисляет один узел в строку."""
        self._check_cancel_needed(deadline)

        if isinstance(node, VariableDeclarationTagNode):
            self.context[node.name] = self._create_context_method(node, deadline)
            return ""

        if isinstance(node, CommentTagNode):
            return ""

        if isinstance(node, (SingleQuoteStringNode, DoubleQuoteStringNode, TextLiteralNode)):
            return node.content

        if isinstance(node, TemplateStringNode):
            return "".join(self.run_node(child, deadline) for child in node.children)

        if isinstance(node, TagNode):
            return self._run_tag(node, deadline)

        raise InternalConsistencyError(f"Unknown node type: {type(node).__name__}")

    def _run_tag(self, node: TagNode, deadline: float) -> str:
        method = self.context.get(node.method)
        if method is None:
            raise UndefinedTag(node.method)

        args = [self.run_node(child, deadline) for child in node.children]
        result = str(method(self.context, *args))

        self._check_cancel_needed(deadline)
        return result

    def _create_context_method(self, node: VariableDeclarationTagNode, deadline: float) -> TagHandler:
        # Значение вычисляется один раз, в точке объявления
        if node.data is None:
            raise InternalConsistencyError(f"Declaration of '{node.name}' has no value")
        value = self.run_node(node.data, deadline)
        logger.debug(f"Declared '{node.name}' = {value[:20]!r}")
        return constant(value)

    def _check_cancel_needed(self, deadline: float) -> None:
        if time.monotonic() > deadline:
            raise TimeoutExceeded(self.timeout)


def render(source: str, options: Union[RuntimeOptions, Mapping[str, Any], None] = None) -> str:
    """Компилирует и сразу исполняет шаблон."""
    from ..template.parser import compile_template

    return Runtime(compile_template(source), options).start()


__all__ = ["Runtime", "RuntimeOptions", "render"]
