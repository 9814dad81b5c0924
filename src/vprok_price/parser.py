"""Extract pack size (quantity, unit, multiplier) from catalog titles.

Typical titles:
- Коктейль из морепродуктов Placeholder в масле 415г
- Багет Placeholder замороженный 2шт*150г
- Молоко Placeholder пастеризованное 2.5% 1.4л
- Туалетная бумага Placeholder 4 рулона 3 слоя

Multiplier variants: 250г, 150г*2шт, 2шт*150г, 1л, 2пак*150г, 8 рулонов, 5 пар.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .grammar import DEFAULT_GRAMMAR, QuantityMatch, TitleGrammar
from .term import ActivityLog
from .units import PIECE_UNIT


@dataclass(frozen=True, slots=True)
class ParsedQuantity:
  quantity: Decimal
  unit: str
  multiplier: int = 1

  def __post_init__(self) -> None:
    if self.multiplier < 1:
      raise ValueError("multiplier must be at least 1")


FALLBACK_QUANTITY = ParsedQuantity(quantity=Decimal(1), unit=PIECE_UNIT, multiplier=1)


def _to_decimal(raw: str) -> Decimal | None:
  try:
    return Decimal(raw.replace(",", "."))
  except InvalidOperation:
    return None


def _to_multiplier(raw: str | None) -> int:
  if raw is None:
    return 1
  try:
    return int(raw)
  except ValueError:
    return 1


def resolve_match(match: QuantityMatch) -> ParsedQuantity | None:
  """Turn raw captured strings into a ParsedQuantity, or None if unusable.

  Both multiplier slots are honoured by taking the larger count; they are
  never multiplied together.
  """
  quantity = _to_decimal(match.quantity)
  if quantity is None or quantity <= 0:
    return None
  multiplier = max(1, _to_multiplier(match.leading), _to_multiplier(match.trailing))
  return ParsedQuantity(quantity=quantity, unit=match.unit, multiplier=multiplier)


def parse_title(
  title: str,
  *,
  grammar: TitleGrammar = DEFAULT_GRAMMAR,
  log: ActivityLog | None = None,
) -> ParsedQuantity:
  """Parse the pack size out of `title`.

  Never raises: titles without a usable pack-size token (including a zero
  quantity such as "0г") yield one piece.
  """
  text = title.strip()
  match = grammar.match(text)
  if match is None:
    if log is not None:
      log.parser.debug(f"No pack size in '{text}', assuming 1 {PIECE_UNIT}")
    return FALLBACK_QUANTITY

  parsed = resolve_match(match)
  if parsed is None:
    if log is not None:
      log.parser.debug(
        f"Unusable quantity '{match.quantity}' in '{text}', assuming 1 {PIECE_UNIT}"
      )
    return FALLBACK_QUANTITY

  if log is not None:
    log.parser.debug(
      f"'{text}' -> {parsed.quantity} {parsed.unit} * {parsed.multiplier}"
    )
  return parsed
