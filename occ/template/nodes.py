"""
Узлы синтаксического дерева шаблона.

Каждый узел знает своего родителя (None у корня документа) и число
символов исходника, которые он поглотил вместе со своими разделителями.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, Optional, Union


class NodeType(enum.Enum):
    """Тип узла синтаксического дерева."""
    TEXT_LITERAL = "TEXT_LITERAL"

    TAG = "TAG"
    COMMENT_TAG = "COMMENT_TAG"
    VARIABLE_DECLARATION_TAG = "VARIABLE_DECLARATION_TAG"

    SINGLE_QUOTE_STRING = "SINGLE_QUOTE_STRING"
    DOUBLE_QUOTE_STRING = "DOUBLE_QUOTE_STRING"
    TEMPLATE_STRING = "TEMPLATE_STRING"


@dataclass(eq=False)
class BaseNode:
    """Базовый класс для всех узлов дерева."""
    type: ClassVar[NodeType]

    parent: Optional[BaseNode] = field(default=None, repr=False)
    text_length: int = 0   # Сколько символов исходника поглотил узел, включая разделители

    def __eq__(self, other: object) -> bool:
        # Родитель в сравнении не участвует: иначе сравнение уйдёт в цикл
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    def _fields(self) -> tuple:
        return tuple(v for k, v in vars(self).items() if k != "parent")


@dataclass(eq=False)
class TextLiteralNode(BaseNode):
    """Фрагмент обычного текста внутри шаблонной строки."""
    type: ClassVar[NodeType] = NodeType.TEXT_LITERAL

    content: str = ""


@dataclass(eq=False)
class SingleQuoteStringNode(BaseNode):
    """Строка в одинарных кавычках ('...')."""
    type: ClassVar[NodeType] = NodeType.SINGLE_QUOTE_STRING

    content: str = ""


@dataclass(eq=False)
class DoubleQuoteStringNode(BaseNode):
    """Строка в двойных кавычках ("...")."""
    type: ClassVar[NodeType] = NodeType.DOUBLE_QUOTE_STRING

    content: str = ""


@dataclass(eq=False)
class TagNode(BaseNode):
    """
    Вызов метода: {method arg1 arg2 ...}.

    Аргументы - строки, шаблонные строки или вложенные теги;
    каждый вычисляется в строку в момент вызова.
    """
    type: ClassVar[NodeType] = NodeType.TAG

    method: str = ""
    children: List[BaseNode] = field(default_factory=list)


@dataclass(eq=False)
class CommentTagNode(BaseNode):
    """Комментарий: {!...}. Ничего не выводит."""
    type: ClassVar[NodeType] = NodeType.COMMENT_TAG

    comment_text: str = ""


@dataclass(eq=False)
class VariableDeclarationTagNode(BaseNode):
    """Объявление переменной: {name=value}."""
    type: ClassVar[NodeType] = NodeType.VARIABLE_DECLARATION_TAG

    name: str = ""
    data: Optional[BaseNode] = None


TemplateChild = Union[TextLiteralNode, TagNode, CommentTagNode, VariableDeclarationTagNode]
AnyTagNode = Union[TagNode, CommentTagNode, VariableDeclarationTagNode]
StringNode = Union[SingleQuoteStringNode, DoubleQuoteStringNode]


@dataclass(eq=False)
class TemplateStringNode(BaseNode):
    """
    Шаблонная строка: `...`.

    Корень документа - тоже шаблонная строка, но без обрамляющих
    обратных кавычек и без обязательного закрытия.
    """
    type: ClassVar[NodeType] = NodeType.TEMPLATE_STRING

    children: List[BaseNode] = field(default_factory=list)

    def append_text(self, text: str, consumed: Optional[int] = None) -> TextLiteralNode:
        """
        Дописывает текст в последний TextLiteralNode, создавая его при необходимости.

        consumed - сколько символов исходника дал этот текст (по умолчанию len(text)).
        """
        last = self.children[-1] if self.children else None
        if not isinstance(last, TextLiteralNode):
            last = TextLiteralNode(parent=self)
            self.children.append(last)
        last.content += text
        last.text_length += len(text) if consumed is None else consumed
        return last


def iter_nodes(node: BaseNode) -> Iterator[BaseNode]:
    """Обходит дерево в глубину в порядке документа, начиная с node."""
    yield node
    if isinstance(node, (TemplateStringNode, TagNode)):
        for child in node.children:
            yield from iter_nodes(child)
    elif isinstance(node, VariableDeclarationTagNode) and node.data is not None:
        yield from iter_nodes(node.data)


def collect_tag_names(node: BaseNode) -> List[str]:
    """Имена методов всех тегов дерева (с повторами, в порядке документа)."""
    return [n.method for n in iter_nodes(node) if isinstance(n, TagNode)]


def collect_declared_names(node: BaseNode) -> List[str]:
    """Имена всех объявленных переменных в порядке документа."""
    return [n.name for n in iter_nodes(node) if isinstance(n, VariableDeclarationTagNode)]


__all__ = [
    "NodeType",
    "BaseNode",
    "TextLiteralNode",
    "SingleQuoteStringNode",
    "DoubleQuoteStringNode",
    "TagNode",
    "CommentTagNode",
    "VariableDeclarationTagNode",
    "TemplateStringNode",
    "TemplateChild",
    "AnyTagNode",
    "StringNode",
    "iter_nodes",
    "collect_tag_names",
    "collect_declared_names",
]
