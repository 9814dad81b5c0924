from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
  from .normalizer import NormalizedPrice

DEFAULT_CURRENCY = "₽"


def format_minor_units(minor_units: Decimal) -> str:
  """Kopecks as two digits; a non-integral remainder keeps its decimals."""
  if minor_units == minor_units.to_integral_value():
    return f"{int(minor_units):02d}"
  return f"{minor_units.normalize():f}"


def format_unit_price(
  price: NormalizedPrice, unit: str, *, currency: str = DEFAULT_CURRENCY
) -> str:
  """Render a unit price as '71,43 ₽/л', or '300 ₽/кг' when there are no kopecks."""
  if price.is_whole:
    return f"{price.major_units} {currency}/{unit}"
  return f"{price.major_units},{format_minor_units(price.minor_units)} {currency}/{unit}"
