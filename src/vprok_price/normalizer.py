from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import TYPE_CHECKING

from .grammar import DEFAULT_GRAMMAR, TitleGrammar
from .parser import ParsedQuantity, parse_title
from .render import format_unit_price
from .term import ActivityLog
from .units import DEFAULT_CONVERSION_TABLE, ConversionRule, ConversionTable
from .utils.currency import parse_cost

if TYPE_CHECKING:
  from .config import AppConfig

type Numeric = Decimal | int | float

CENT = Decimal("0.01")
WHOLE = Decimal(1)


class RoundingMode(StrEnum):
  # Round the total once and split it; minor units always land in 0..99.
  SINGLE = "single"
  # Round the total, truncate, then round the scaled remainder again in
  # binary floating point. Minor units are not guaranteed to stay in 0..99.
  TWO_STAGE = "two_stage"


@dataclass(frozen=True, slots=True)
class NormalizedPrice:
  """A unit price split into whole roubles and kopecks."""

  major_units: int
  minor_units: Decimal

  @property
  def amount(self) -> Decimal:
    return Decimal(self.major_units) + self.minor_units / 100

  @property
  def is_whole(self) -> bool:
    return self.minor_units == 0


def _as_decimal(value: Numeric) -> Decimal:
  if isinstance(value, Decimal):
    return value
  if isinstance(value, float):
    return Decimal(repr(value))
  return Decimal(value)


def _to_fixed(value: float, digits: int = 2) -> float:
  """Number.prototype.toFixed: round the exact binary value, ties away from zero."""
  exponent = WHOLE.scaleb(-digits)
  return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def _normalize_single(
  cost: Decimal, quantity: Decimal, multiplier: int, scale: Decimal
) -> NormalizedPrice:
  total = (scale * cost / (quantity * multiplier)).quantize(CENT, rounding=ROUND_HALF_UP)
  major = int(total)
  minor = ((total - major) * 100).quantize(WHOLE, rounding=ROUND_HALF_UP)
  return NormalizedPrice(major_units=major, minor_units=minor)


def _normalize_two_stage(
  cost: Decimal, quantity: Decimal, multiplier: int, scale: Decimal
) -> NormalizedPrice:
  divisor = float(quantity) * multiplier
  if divisor == 0:
    raise ValueError(f"quantity {quantity} is too small to divide by")
  total = _to_fixed(float(scale) * float(cost) / divisor)
  major = int(total)
  minor = _to_fixed((total - major) * 100)
  return NormalizedPrice(major_units=major, minor_units=Decimal(repr(minor)))


def normalize(
  provided_cost: Numeric,
  quantity: Numeric,
  multiplier: int,
  scale: Numeric,
  *,
  rounding: RoundingMode = RoundingMode.SINGLE,
) -> NormalizedPrice:
  """Price per canonical unit: `scale * provided_cost / (quantity * multiplier)`.

  Raises ValueError when `quantity` or `multiplier` would make the divisor
  non-positive, when `scale` is not positive, or when the result cannot be
  represented (a quantity so small or a cost so large that rounding overflows).
  """
  cost = _as_decimal(provided_cost)
  qty = _as_decimal(quantity)
  factor = _as_decimal(scale)
  try:
    if multiplier < 1:
      raise ValueError("multiplier must be at least 1")
    if qty <= 0:
      raise ValueError("quantity must be greater than zero")
    if factor <= 0:
      raise ValueError("scale must be greater than zero")

    if rounding is RoundingMode.TWO_STAGE:
      return _normalize_two_stage(cost, qty, multiplier, factor)
    return _normalize_single(cost, qty, multiplier, factor)
  except ArithmeticError as exc:
    raise ValueError(
      f"cannot normalize cost {cost} for quantity {qty} * {multiplier}"
    ) from exc


@dataclass(frozen=True, slots=True)
class UnitPrice:
  title: str
  provided_cost: Decimal
  parsed: ParsedQuantity
  rule: ConversionRule
  price: NormalizedPrice

  @property
  def canonical_unit(self) -> str:
    return self.rule.canonical_unit

  def label(self, currency: str = "₽") -> str:
    return format_unit_price(self.price, self.canonical_unit, currency=currency)


@dataclass(slots=True)
class PriceNormalizer:
  """Title parser, conversion table and price normalizer wired together."""

  table: ConversionTable = DEFAULT_CONVERSION_TABLE
  grammar: TitleGrammar = DEFAULT_GRAMMAR
  rounding: RoundingMode = RoundingMode.SINGLE
  log: ActivityLog | None = None

  @classmethod
  def from_config(cls, config: AppConfig, *, log: ActivityLog | None = None) -> PriceNormalizer:
    return cls(rounding=config.rounding, log=log)

  def price_title(self, title: str, provided_cost: Numeric | str) -> UnitPrice:
    """Compute the per-unit price for one catalog title and its batch cost."""
    if isinstance(provided_cost, str):
      cost = parse_cost(provided_cost)
    else:
      cost = _as_decimal(provided_cost)
    parsed = parse_title(title, grammar=self.grammar, log=self.log)
    rule = self.table.resolve(parsed.unit)
    if self.log is not None:
      self.log.normalizer.debug(
        f"{parsed.quantity} {parsed.unit} * {parsed.multiplier} "
        f"with conversion rule ({rule.scale}, {rule.canonical_unit})"
      )
    price = normalize(
      cost,
      parsed.quantity,
      parsed.multiplier,
      rule.scale,
      rounding=self.rounding,
    )
    if self.log is not None:
      self.log.normalizer.debug(
        f"Normalized cost {cost} => {price.major_units} {price.minor_units}"
      )
    return UnitPrice(
      title=title.strip(),
      provided_cost=cost,
      parsed=parsed,
      rule=rule,
      price=price,
    )
