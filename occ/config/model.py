from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..runtime.context import constant
from ..runtime.runtime import RuntimeOptions


@dataclass
class OccConfig:
    timeout: Optional[float] = None   # Миллисекунды
    seed: Optional[int] = None
    variables: Dict[str, str] = field(default_factory=dict)
    """Константные теги, доступные любому шаблону: {name}."""

    def to_runtime_options(self) -> RuntimeOptions:
        return RuntimeOptions(
            context={name: constant(value) for name, value in self.variables.items()},
            timeout=self.timeout,
            seed=self.seed,
        )
