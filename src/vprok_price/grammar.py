"""Grammar of the pack-size token found in catalog titles.

A title such as "Багет замороженный 2шт*150г" carries one token made of

  [multiplier "*"] quantity [ws] unit ["*" multiplier] boundary

where a multiplier is a count followed by a package marker ("2шт", "3пак").
Each piece is built separately so it can be exercised on its own; `compile()`
joins them into a single pattern with the named groups `leading`, `quantity`,
`unit` and `trailing`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property

MULTIPLIER_MARKERS: tuple[str, ...] = ("пак", "уп", "шт")
UNIT_TOKENS: tuple[str, ...] = (
  "шт",
  "мг",
  "г",
  "кг",
  "мл",
  "л",
  "рулон",
  "рулона",
  "рулонов",
  "пар",
  "пара",
  "пары",
)


@dataclass(frozen=True, slots=True)
class QuantityMatch:
  """Raw strings captured for the first pack-size token of a title."""

  quantity: str
  unit: str
  leading: str | None = None
  trailing: str | None = None
  start: int = 0
  end: int = 0


def _alternation(tokens: tuple[str, ...]) -> str:
  return "|".join(re.escape(token) for token in tokens)


@dataclass(frozen=True)
class TitleGrammar:
  markers: tuple[str, ...] = MULTIPLIER_MARKERS
  units: tuple[str, ...] = UNIT_TOKENS

  def __post_init__(self) -> None:
    if not self.markers:
      raise ValueError("markers must not be empty")
    if not self.units:
      raise ValueError("units must not be empty")
    if any(not token for token in (*self.markers, *self.units)):
      raise ValueError("grammar tokens must be non-empty strings")

  def multiplier_pattern(self, group: str) -> str:
    """`<digits><marker>` with the count captured under `group`."""
    return rf"(?P<{group}>\d+)(?:{_alternation(self.markers)})"

  def quantity_pattern(self) -> str:
    return r"(?P<quantity>\d+(?:[.,]\d+)?)"

  def unit_pattern(self) -> str:
    # Alternatives are tried in declaration order; the boundary forces
    # backtracking into longer inflections ("рулон" -> "рулонов").
    return rf"(?P<unit>{_alternation(self.units)})"

  def boundary_pattern(self) -> str:
    return r"(?=\s|\Z)"

  def source(self) -> str:
    return "".join(
      [
        rf"(?:{self.multiplier_pattern('leading')}\*)?",
        self.quantity_pattern(),
        r"\s*",
        self.unit_pattern(),
        rf"(?:\*{self.multiplier_pattern('trailing')})?",
        self.boundary_pattern(),
      ]
    )

  @cached_property
  def _compiled(self) -> re.Pattern[str]:
    return re.compile(self.source())

  def compile(self) -> re.Pattern[str]:
    return self._compiled

  def match(self, title: str) -> QuantityMatch | None:
    """Return the leftmost pack-size token in `title`, or None."""
    found = self._compiled.search(title)
    if found is None:
      return None
    return QuantityMatch(
      quantity=found.group("quantity"),
      unit=found.group("unit"),
      leading=found.group("leading"),
      trailing=found.group("trailing"),
      start=found.start(),
      end=found.end(),
    )


DEFAULT_GRAMMAR = TitleGrammar()
