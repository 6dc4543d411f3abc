"""
Контекст выполнения: изменяемое отображение имя тега -> функция.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Optional

# Функция тега получает контекст и уже вычисленные строковые аргументы
TagHandler = Callable[..., object]
ContextData = Dict[str, TagHandler]


class Context(Dict[str, TagHandler]):
    """
    Одно отображение на весь запуск.

    Объявленные переменные дописываются сюда и видны всем тегам,
    вычисляемым позже. Генератор случайных чисел используют встроенные теги.
    """

    def __init__(self, data: Optional[ContextData] = None, *, rng: Optional[random.Random] = None):
        super().__init__(data or {})
        self.rng: random.Random = rng or random.Random()

    def __repr__(self) -> str:
        return f"Context({sorted(self.keys())!r})"


def constant(value: str) -> TagHandler:
    """Функция тега без аргументов, всегда возвращающая value."""
    def handler(_context: Context, *_args: str) -> str:
        return value
    return handler


__all__ = ["Context", "ContextData", "TagHandler", "constant"]
