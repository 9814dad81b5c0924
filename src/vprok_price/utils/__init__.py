from __future__ import annotations

from .currency import parse_cost
from .strings import trim

__all__ = ["parse_cost", "trim"]
