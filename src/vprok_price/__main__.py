from __future__ import annotations

from vprok_price.cli import run


def main() -> int:
  return run()


if __name__ == "__main__":
  raise SystemExit(main())
