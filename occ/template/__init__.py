"""
Компилятор шаблонов OCC.

Рукописная рекурсивная грамматика поверх общего посимвольного движка:
строки, шаблонные строки и теги (включая комментарии и объявления).
"""

from __future__ import annotations

from .engine import EngineState, ParsingEngine
from .nodes import (
    BaseNode,
    CommentTagNode,
    DoubleQuoteStringNode,
    NodeType,
    SingleQuoteStringNode,
    TagNode,
    TemplateStringNode,
    TextLiteralNode,
    VariableDeclarationTagNode,
    collect_declared_names,
    collect_tag_names,
    iter_nodes,
)
from .parser import compile_template
from .strings import parse_string
from .tag import parse_tag
from .template_string import parse_template_string
from .tokens import ParseOptions, Tokens

__all__ = [
    "EngineState",
    "ParsingEngine",
    "BaseNode",
    "CommentTagNode",
    "DoubleQuoteStringNode",
    "NodeType",
    "SingleQuoteStringNode",
    "TagNode",
    "TemplateStringNode",
    "TextLiteralNode",
    "VariableDeclarationTagNode",
    "collect_declared_names",
    "collect_tag_names",
    "iter_nodes",
    "compile_template",
    "parse_string",
    "parse_tag",
    "parse_template_string",
    "ParseOptions",
    "Tokens",
]
