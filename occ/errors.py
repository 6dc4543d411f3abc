"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from OccUserError.

Programming errors and bugs should NOT inherit from OccUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional

from .diagnostics import create_trace, locate


class OccUserError(Exception):
    """
    Base class for all user-facing errors in OCC.

    These errors indicate problems that the user can fix:
    template syntax, unknown tags, invalid tag arguments, bad config, etc.
    """
    pass


# -------------------- Compile time --------------------

class TemplateSyntaxError(OccUserError):
    """
    Синтаксическая ошибка шаблона с привязкой к позиции в исходнике.

    Хранит полный исходный текст и абсолютный индекс символа,
    строку и колонку (с 1), а также двухстрочную трассу с кареткой.
    """

    def __init__(self, message: str, *, source: str, index: int):
        super().__init__(message)
        self.message = message
        self.source = source
        self.index = index
        self.line, self.column = locate(source, index)
        self.trace = create_trace(source, index)

    def __str__(self) -> str:
        return f"{self.message}\n{self.trace}"


class ExpressionExpected(TemplateSyntaxError):
    pass


class InvalidMethodOrVariableName(TemplateSyntaxError):
    pass


class UnexpectedToken(TemplateSyntaxError):
    pass


class UnexpectedEndOfInput(TemplateSyntaxError):
    pass


class InvalidToken(TemplateSyntaxError):
    pass


class NestingTooDeep(TemplateSyntaxError):
    """Вложенность конструкций превышает глубину рекурсии интерпретатора."""
    pass


# -------------------- Run time --------------------

class EvaluationError(OccUserError):
    """Ошибка выполнения шаблона (без позиции в исходнике)."""
    pass


class UndefinedTag(EvaluationError, LookupError):
    """Тег вызывает имя, которого нет в контексте."""

    def __init__(self, name: str):
        super().__init__(f"{name} is not defined")
        self.name = name


class EvaluationTooDeep(EvaluationError):
    """Дерево слишком глубокое для рекурсивного вычисления."""
    pass


class TimeoutExceeded(EvaluationError):
    """Выполнение не уложилось в отведённое время."""

    def __init__(self, timeout: Optional[float]):
        super().__init__(f"Script execution timed out after {timeout}ms")
        self.timeout = timeout


class BuiltinArgumentError(EvaluationError, ValueError):
    """Встроенный тег получил недопустимые аргументы."""
    pass


class MissingSeparator(BuiltinArgumentError):
    pass


class EmptyChoiceSet(BuiltinArgumentError):
    pass


class InvalidRangeArguments(BuiltinArgumentError):
    pass


class RangeOrderViolation(BuiltinArgumentError):
    pass


# -------------------- Config --------------------

class ConfigLoadError(OccUserError, ValueError):
    """Ошибка типизированной загрузки конфигурации с указанием пути поля."""
    pass


# -------------------- Internal --------------------

class InternalConsistencyError(RuntimeError):
    """Вычислитель встретил узел неизвестной формы: дефект компилятора, а не ввода."""
    pass


__all__ = [
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
    "ConfigLoadError",
    "InternalConsistencyError",
]
