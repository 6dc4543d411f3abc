"""
Встроенные теги: join, random, randomNumber.
"""

from __future__ import annotations

import math
from typing import Optional

from .context import Context, ContextData
from ..errors import EmptyChoiceSet, InvalidRangeArguments, MissingSeparator, RangeOrderViolation

DEFAULT_RANGE = (0.0, 99.0)


def join(_context: Context, separator: Optional[str] = None, *args: str) -> str:
    """Склеивает аргументы через разделитель."""
    if separator is None:
        raise MissingSeparator("Must provide a separator")
    return separator.join(args)


def random(context: Context, *args: str) -> str:
    """Возвращает случайный аргумент."""
    if not args:
        raise EmptyChoiceSet("Must provide arguments to choose from")
    return args[math.floor(context.rng.random() * len(args))]


def _parse_number(value: str, role: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise InvalidRangeArguments(f'"{role}" argument must be a number, got {value!r}')
    if not math.isfinite(number):
        raise InvalidRangeArguments(f'"{role}" argument must be a number, got {value!r}')
    return number


def _format_number(number: float) -> str:
    if number.is_integer():
        return str(int(number))
    return repr(number)


def random_number(context: Context, from_: Optional[str] = None, to: Optional[str] = None, *_rest: str) -> str:
    """
    Случайное число от from (включительно) до to (не включительно).

    Без аргументов диапазон 0..99, то есть результат от 0 до 98.
    """
    if from_ is not None and to is None:
        raise InvalidRangeArguments('If a "from" argument is provided, a "to" one must be as well.')

    if from_ is not None and to is not None:
        from_num, to_num = _parse_number(from_, "from"), _parse_number(to, "to")
    else:
        from_num, to_num = DEFAULT_RANGE

    if from_num > to_num:
        raise RangeOrderViolation('"from" argument cannot be larger than "to" argument')

    return _format_number(from_num + math.floor(context.rng.random() * (to_num - from_num)))


BUILTIN_TAGS: ContextData = {
    "join": join,
    "random": random,
    "randomNumber": random_number,
}


__all__ = ["join", "random", "random_number", "BUILTIN_TAGS"]
