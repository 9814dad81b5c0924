#!/usr/bin/env -S uv run
"""Show how titles are parsed and priced.

Usage:
  ./normalize.py "Багет замороженный 2шт*150г=90" "Молоко 2.5% 1.4л=100"

Each argument is TITLE=COST; without a cost only the parse is shown.
"""

from __future__ import annotations

import sys

from rich import print

from vprok_price.normalizer import PriceNormalizer
from vprok_price.parser import parse_title
from vprok_price.term import ActivityLog


def main() -> None:
  if len(sys.argv) < 2:
    print("Usage: ./normalize.py TITLE[=COST] [TITLE[=COST] ...]", file=sys.stderr)
    print("\nExample:", file=sys.stderr)
    print('  ./normalize.py "Багет замороженный 2шт*150г=90"', file=sys.stderr)
    sys.exit(1)

  log = ActivityLog(verbose=True)
  normalizer = PriceNormalizer(log=log)

  items = sys.argv[1:]
  print(f"Pricing {len(items)} title(s)...\n")

  for idx, item in enumerate(items, start=1):
    title, sep, cost = item.rpartition("=")
    if not sep:
      title, cost = item, ""
    print(f"[{idx}/{len(items)}] Input: {title!r}")
    if not cost:
      print(parse_title(title, log=log))
      print()
      continue
    try:
      print(normalizer.price_title(title, cost).label())
    except ValueError as exc:
      print(f"  ERROR: {exc}", file=sys.stderr)
    print()


if __name__ == "__main__":
  main()
