from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

PIECE_UNIT = "шт"


@dataclass(frozen=True, slots=True)
class ConversionRule:
  """Scale factor from a raw unit to the canonical unit prices are quoted in.

  A price per raw unit times `scale` gives the price per `canonical_unit`
  (e.g. grams to kilograms is 1000).
  """

  scale: Decimal
  canonical_unit: str

  def __post_init__(self) -> None:
    if self.scale <= 0:
      raise ValueError("scale must be positive")
    if not self.canonical_unit:
      raise ValueError("canonical_unit must not be empty")


DEFAULT_RULE = ConversionRule(Decimal(1), PIECE_UNIT)


def _freeze(rules: Mapping[str, ConversionRule]) -> Mapping[str, ConversionRule]:
  return MappingProxyType(dict(rules))


@dataclass(frozen=True, slots=True)
class ConversionTable(Mapping[str, ConversionRule]):
  """Immutable lookup from raw unit tokens to conversion rules.

  Lookup is exact and case-sensitive. `resolve` never fails: tokens missing
  from the table, including empty ones, get `default`.
  """

  rules: Mapping[str, ConversionRule] = field(default_factory=dict)
  default: ConversionRule = DEFAULT_RULE

  def __post_init__(self) -> None:
    object.__setattr__(self, "rules", _freeze(self.rules))

  def __getitem__(self, unit: str) -> ConversionRule:
    return self.rules[unit]

  def __iter__(self) -> Iterator[str]:
    return iter(self.rules)

  def __len__(self) -> int:
    return len(self.rules)

  def resolve(self, unit: str | None) -> ConversionRule:
    if unit is None:
      return self.default
    return self.rules.get(unit, self.default)

  def with_rules(self, rules: Mapping[str, ConversionRule]) -> ConversionTable:
    """Return a copy with `rules` added, replacing existing tokens."""
    merged = dict(self.rules)
    merged.update(rules)
    return ConversionTable(rules=merged, default=self.default)

  def canonical_units(self) -> frozenset[str]:
    return frozenset(rule.canonical_unit for rule in self.rules.values()) | {
      self.default.canonical_unit
    }


_ROLL = ConversionRule(Decimal(1), "рулон")
_PAIR = ConversionRule(Decimal(1), "пара")

DEFAULT_CONVERSION_TABLE = ConversionTable(
  rules={
    "мг": ConversionRule(Decimal(1000), "г"),
    "г": ConversionRule(Decimal(1000), "кг"),
    "кг": ConversionRule(Decimal(1), "кг"),
    "шт": ConversionRule(Decimal(1), PIECE_UNIT),
    "мл": ConversionRule(Decimal(1000), "л"),
    "л": ConversionRule(Decimal(1), "л"),
    "рулон": _ROLL,
    "рулона": _ROLL,
    "рулонов": _ROLL,
    "пар": _PAIR,
    "пара": _PAIR,
    "пары": _PAIR,
  }
)


def resolve_unit(
  unit: str | None, table: ConversionTable = DEFAULT_CONVERSION_TABLE
) -> ConversionRule:
  return table.resolve(unit)
