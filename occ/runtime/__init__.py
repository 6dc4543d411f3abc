"""
Исполнение скомпилированных шаблонов.
"""

from __future__ import annotations

from .builtins import BUILTIN_TAGS
from .context import Context, ContextData, TagHandler, constant
from .runtime import Runtime, RuntimeOptions, render

__all__ = [
    "BUILTIN_TAGS",
    "Context",
    "ContextData",
    "TagHandler",
    "constant",
    "Runtime",
    "RuntimeOptions",
    "render",
]
