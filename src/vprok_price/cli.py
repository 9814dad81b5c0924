from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import clypi.parsers as cp
from clypi import Command, arg
from rich.table import Table
from structlog import get_logger
from typing_extensions import override

from vprok_price.catalog import CatalogAnnotator, load_catalog
from vprok_price.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from vprok_price.log import setup_logging
from vprok_price.normalizer import PriceNormalizer, RoundingMode
from vprok_price.term import ActivityLog, render_light_table, set_activity_log


def _rounding_parser() -> Callable[[Sequence[str] | str], RoundingMode]:
  def _parser(raw: Sequence[str] | str) -> RoundingMode:
    value = raw if isinstance(raw, str) else (raw[0] if raw else "")
    normalized = value.strip().lower().replace("-", "_")
    try:
      return RoundingMode(normalized)
    except ValueError as exc:
      choices = ", ".join(mode.value for mode in RoundingMode)
      raise ValueError(f"rounding must be one of: {choices}") from exc

  return _parser


def _prepare(
  config_path: Path | None, rounding: RoundingMode | None, verbose: bool
) -> tuple[AppConfig, PriceNormalizer, ActivityLog]:
  config = load_config(config_path.expanduser() if config_path else None)
  setup_logging(config.log_level)
  log = ActivityLog(verbose=verbose or config.verbose)
  set_activity_log(log)
  normalizer = PriceNormalizer.from_config(config, log=log)
  if rounding is not None:
    normalizer.rounding = rounding
  get_logger().debug("Configuration loaded", rounding=normalizer.rounding.value)
  return config, normalizer, log


class Price(Command):
  """Print the per-unit price for one product title and batch cost"""

  title: str = arg(help="Product title, e.g. 'Молоко пастеризованное 2.5% 1.4л'")
  cost: str = arg(help="Listed batch price, e.g. '89.90'")
  rounding: RoundingMode | None = arg(
    None, help="Rounding mode: single or two_stage", parser=_rounding_parser()
  )
  verbose: bool = arg(False, help="Print parsing and normalization details")
  config: Path | None = arg(
    None, help=f"Path to config.yaml (defaults to {DEFAULT_CONFIG_PATH})"
  )

  @override
  async def run(self) -> None:
    config, normalizer, log = _prepare(self.config, self.rounding, self.verbose)
    try:
      unit_price = normalizer.price_title(self.title, self.cost)
    except ValueError as exc:
      log.normalizer.failure(f"Cannot price '{self.title}': {exc}")
      raise SystemExit(1) from exc
    if log.verbose:
      print(
        render_light_table(
          [
            ("quantity", unit_price.parsed.quantity),
            ("unit", unit_price.parsed.unit),
            ("multiplier", unit_price.parsed.multiplier),
            ("scale", unit_price.rule.scale),
            ("canonical unit", unit_price.canonical_unit),
          ],
          title=unit_price.title,
        )
      )
    print(unit_price.label(config.currency_symbol))


class Catalog(Command):
  """Annotate every card of a YAML catalog with its per-unit price"""

  path: Path = arg(help="Catalog YAML with an 'items' list", parser=cp.Path(exists=True))
  rounding: RoundingMode | None = arg(
    None, help="Rounding mode: single or two_stage", parser=_rounding_parser()
  )
  verbose: bool = arg(False, help="Print parsing and normalization details")
  config: Path | None = arg(
    None, help=f"Path to config.yaml (defaults to {DEFAULT_CONFIG_PATH})"
  )

  @override
  async def run(self) -> None:
    config, normalizer, log = _prepare(self.config, self.rounding, self.verbose)
    try:
      cards = load_catalog(self.path)
    except ValueError as exc:
      log.catalog.failure(str(exc))
      raise SystemExit(1) from exc
    log.catalog.operation(f"Annotating {len(cards)} card(s) from {self.path}")

    annotator = CatalogAnnotator(normalizer=normalizer, currency=config.currency_symbol, log=log)
    report = annotator.annotate(cards)

    table = Table(title="Unit prices")
    table.add_column("Title", style="white")
    table.add_column("Pack", style="cyan", no_wrap=True)
    table.add_column("Unit price", style="green", justify="right", no_wrap=True)
    for annotation in report.annotated:
      parsed = annotation.unit_price.parsed
      pack = f"{parsed.quantity} {parsed.unit}"
      if parsed.multiplier > 1:
        pack = f"{parsed.multiplier} × {pack}"
      table.add_row(annotation.card.title, pack, annotation.label)
    log.print_table(table)

    if report.out_of_stock:
      log.catalog.warning(f"Out of stock: {', '.join(report.out_of_stock)}")
    if report.already_processed:
      log.catalog.warning(f"Already processed: {', '.join(report.already_processed)}")
    if report.invalid:
      log.catalog.failure(f"Invalid cost: {', '.join(report.invalid)}")
    log.catalog.success(f"Annotated {len(report.annotated)} of {len(cards)} card(s)")


class Cli(Command):
  """Unit price calculator for vprok.ru catalog titles."""

  subcommand: Price | Catalog


def run() -> int:
  try:
    cmd = Cli.parse()
    cmd.start()
    return 0
  except KeyboardInterrupt:
    print("\nInterrupted by user (Ctrl+C). Exiting cleanly.")
    return 130


__all__ = ["run", "Cli", "Price", "Catalog"]
