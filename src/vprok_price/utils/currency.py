"""Utilities for parsing listed batch prices."""

from decimal import Decimal, InvalidOperation


def _normalize_cost_text(cost_text: str) -> str:
  """Strip currency fluff while preserving the decimal separator."""

  allowed = {".", ",", "-"}
  chars: list[str] = []
  for ch in cost_text.strip():
    if ch.isdigit() or ch in allowed:
      chars.append(ch)
  normalized = "".join(chars).strip(".,")
  if normalized.count(",") == 1 and normalized.count(".") == 0:
    # Rouble prices use a comma as the decimal separator.
    normalized = normalized.replace(",", ".")
  else:
    # Otherwise assume commas group thousands.
    normalized = normalized.replace(",", "")
  if not any(ch.isdigit() for ch in normalized):
    raise ValueError(f"cost_text '{cost_text}' lacks digits")
  return normalized


def parse_cost(cost_text: str) -> Decimal:
  """Parse a batch cost from text like '89.90', '1 299,00 ₽' or '100'."""

  normalized = _normalize_cost_text(cost_text)
  try:
    cost = Decimal(normalized)
  except InvalidOperation as exc:
    raise ValueError(f"cost_text '{cost_text}' is not numeric") from exc
  if cost < 0:
    raise ValueError("cost_text must not be negative")
  return cost
