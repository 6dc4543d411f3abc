"""
Посимвольный движок разбора, общий для всех продукций грамматики.

Движок не содержит грамматики: он только перебирает символы и вызывает
зарегистрированные обработчики в порядке приоритета. Вся семантика
живёт в обработчиках, которые регистрирует каждая продукция.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

from .nodes import BaseNode

logger = logging.getLogger(__name__)


@dataclass
class EngineState:
    """Курсор движка. Продукции расширяют его своими флагами."""
    i: int = 0               # Смещение внутри разбираемого среза
    finished: bool = False   # Продукция завершилась досрочно (например, закрылась)


StateT = TypeVar("StateT", bound=EngineState)
NodeT = TypeVar("NodeT", bound=BaseNode)

# Обработчик символа: вернуть True, чтобы символ считался обработанным
LetterHandler = Callable[["ParsingEngine", str, StateT, NodeT], Optional[bool]]
# Обработчик конца ввода: вернуть True, чтобы остановить цепочку
EndHandler = Callable[["ParsingEngine", StateT, NodeT], Optional[bool]]


class ParsingEngine(Generic[StateT, NodeT]):
    """
    Драйвер разбора на цепочке обработчиков.

    Для каждого символа data[start + state.i] обработчики вызываются по порядку
    регистрации, пока один из них не вернёт True. Обработчик, не
    принявший решения, пропускает символ дальше по цепочке.
    После окончания ввода (или state.finished) вызываются обработчики
    конца в обратном порядке регистрации.

    Узел в self.node может быть заменён обработчиком во время разбора:
    последующие обработчики получают уже новый узел.
    """

    def __init__(self, state: StateT, node: NodeT):
        state.finished = False
        self.state: StateT = state
        self.node: NodeT = node
        self._handlers: List[LetterHandler] = []
        self._end_handlers: List[EndHandler] = []

    def use(self, handler: LetterHandler) -> "ParsingEngine[StateT, NodeT]":
        """Добавляет обработчик символа в конец цепочки."""
        self._handlers.append(handler)
        return self

    def end(self, handler: EndHandler) -> "ParsingEngine[StateT, NodeT]":
        """Добавляет обработчик конца ввода (вызываются в обратном порядке)."""
        self._end_handlers.insert(0, handler)
        return self

    def run(self, data: str, start: int = 0) -> NodeT:
        """
        Прогоняет обработчики по data, начиная с индекса start, и возвращает построенный узел.

        state.i отсчитывается от start: продукции разбирают общий исходник
        без копирования его хвоста.

        Raises:
            RuntimeError: Если ни один обработчик не сдвинул курсор
        """
        state = self.state
        length = len(data) - start

        while state.i < length and not state.finished:
            position = state.i
            current = data[start + position]

            for handler in self._handlers:
                if handler(self, current, state, self.node):
                    break

            if state.i == position and not state.finished:
                raise RuntimeError(
                    f"No handler consumed {current!r} at offset {position} "
                    f"while building {type(self.node).__name__}"
                )

        for end_handler in self._end_handlers:
            if end_handler(self, state, self.node):
                break

        return self.node


__all__ = ["EngineState", "ParsingEngine", "LetterHandler", "EndHandler"]
