"""
OCC: небольшой язык шаблонов.

Исходный текст смешивает обычные символы с тегами {...}, которые вызывают
именованные функции; аргументами служат строки, шаблонные строки
и вложенные теги. Компилятор строит дерево, Runtime исполняет его.
"""

from __future__ import annotations

from .errors import (
    BuiltinArgumentError,
    EmptyChoiceSet,
    EvaluationError,
    EvaluationTooDeep,
    ExpressionExpected,
    InternalConsistencyError,
    InvalidMethodOrVariableName,
    InvalidRangeArguments,
    InvalidToken,
    MissingSeparator,
    NestingTooDeep,
    OccUserError,
    RangeOrderViolation,
    TemplateSyntaxError,
    TimeoutExceeded,
    UndefinedTag,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from .runtime import Context, Runtime, RuntimeOptions, render
from .template import compile_template
from .template.nodes import (
    BaseNode,
    CommentTagNode,
    DoubleQuoteStringNode,
    NodeType,
    SingleQuoteStringNode,
    TagNode,
    TemplateStringNode,
    TextLiteralNode,
    VariableDeclarationTagNode,
)

# Имя из внешнего контракта компилятора
compile = compile_template

__all__ = [
    "compile",
    "compile_template",
    "render",
    "Runtime",
    "RuntimeOptions",
    "Context",
    # Дерево
    "BaseNode",
    "CommentTagNode",
    "DoubleQuoteStringNode",
    "NodeType",
    "SingleQuoteStringNode",
    "TagNode",
    "TemplateStringNode",
    "TextLiteralNode",
    "VariableDeclarationTagNode",
    # Ошибки
    "OccUserError",
    "TemplateSyntaxError",
    "ExpressionExpected",
    "InvalidMethodOrVariableName",
    "UnexpectedToken",
    "UnexpectedEndOfInput",
    "InvalidToken",
    "NestingTooDeep",
    "EvaluationError",
    "EvaluationTooDeep",
    "UndefinedTag",
    "TimeoutExceeded",
    "BuiltinArgumentError",
    "MissingSeparator",
    "EmptyChoiceSet",
    "InvalidRangeArguments",
    "RangeOrderViolation",
    "InternalConsistencyError",
]
