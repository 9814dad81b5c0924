NBSP = "\xa0"


def trim(value: str | None) -> str | None:
  """Strip whitespace, including the non-breaking spaces catalog pages use."""
  if value is None:
    return None
  trimmed = value.replace(NBSP, " ").strip()
  if not trimmed:
    return None
  return trimmed
