"""
Общая инфраструктура тестов OCC.

Modules:
- file_utils: Утилиты для создания файлов в тестах
- cli_utils: Запуск occ.cli в дочернем процессе
- runtime_utils: Компиляция и исполнение шаблонов, заглушки генератора случайных чисел
"""

from .cli_utils import run_cli
from .file_utils import write
from .runtime_utils import FixedRandom, run

__all__ = ["write", "run_cli", "FixedRandom", "run"]
