from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .normalizer import PriceNormalizer, UnitPrice
from .render import DEFAULT_CURRENCY
from .term import ActivityLog, activity_log
from .utils.strings import trim


class ProductCard(BaseModel):
  """One catalog entry as scraped from a listing page."""

  model_config = ConfigDict(extra="allow", frozen=True)

  id: str | None = None
  title: str = ""
  cost: str | None = None

  @field_validator("id", "cost", mode="before")
  @classmethod
  def _coerce_optional_str(cls, value: object) -> str | None:
    if value is None:
      return None
    return trim(str(value))

  @field_validator("title", mode="before")
  @classmethod
  def _coerce_title(cls, value: object) -> str:
    if value is None:
      return ""
    return str(value).strip()

  @property
  def card_id(self) -> str:
    return self.id or self.title


class CatalogDocumentModel(BaseModel):
  model_config = ConfigDict(extra="allow")

  @staticmethod
  def _empty_items() -> list[ProductCard]:
    return []

  items: list[ProductCard] = Field(default_factory=_empty_items)

  @field_validator("items", mode="before")
  @classmethod
  def _coerce_items(cls, value: object) -> list[dict[str, object]]:
    if value is None:
      return []
    if isinstance(value, list):
      typed_items: list[dict[str, object]] = []
      for item in cast(list[object], value):
        if isinstance(item, dict):
          typed_items.append(cast(dict[str, object], item))
      return typed_items
    return []


def load_catalog(path: Path) -> list[ProductCard]:
  """Read product cards from a YAML document of the form `{items: [...]}`."""
  p = path.expanduser()
  if not p.exists():
    raise FileNotFoundError(f"Catalog file not found: {p}")
  try:
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
  except yaml.YAMLError as exc:
    raise ValueError(f"Failed to parse YAML from {p}") from exc
  if data is None:
    return []
  if isinstance(data, list):
    data = {"items": data}
  if not isinstance(data, dict):
    raise ValueError(f"Catalog file {p} must contain a mapping or a list at the top level")
  try:
    return CatalogDocumentModel.model_validate(data).items
  except ValidationError as e:
    raise ValueError(f"Invalid catalog in {p}: {e}") from e


@dataclass(frozen=True, slots=True)
class CardAnnotation:
  card: ProductCard
  unit_price: UnitPrice
  label: str


def _empty_annotations() -> list[CardAnnotation]:
  return []


def _empty_str_list() -> list[str]:
  return []


@dataclass(slots=True)
class CatalogReport:
  annotated: list[CardAnnotation] = field(default_factory=_empty_annotations)
  out_of_stock: list[str] = field(default_factory=_empty_str_list)
  already_processed: list[str] = field(default_factory=_empty_str_list)
  invalid: list[str] = field(default_factory=_empty_str_list)


@dataclass(slots=True)
class CatalogAnnotator:
  """Adds unit prices to catalog cards, each card at most once.

  Cards are processed one at a time in the order given. Cards with no cost
  are out of stock and skipped; cards already seen by this annotator are
  skipped as well.
  """

  normalizer: PriceNormalizer = field(default_factory=PriceNormalizer)
  currency: str = DEFAULT_CURRENCY
  log: ActivityLog | None = None
  _processed: set[str] = field(default_factory=set, init=False, repr=False)

  def is_processed(self, card: ProductCard) -> bool:
    return card.card_id in self._processed

  def annotate(self, cards: Iterable[ProductCard]) -> CatalogReport:
    log = self.log or activity_log()
    report = CatalogReport()
    for card in cards:
      if self.is_processed(card):
        report.already_processed.append(card.card_id)
        continue
      if card.cost is None:
        log.catalog.debug(f"No cost for '{card.title}', skipping")
        report.out_of_stock.append(card.card_id)
        continue
      try:
        unit_price = self.normalizer.price_title(card.title, card.cost)
      except ValueError as exc:
        log.catalog.warning(f"Skipping '{card.title}': {exc}")
        report.invalid.append(card.card_id)
        continue
      self._processed.add(card.card_id)
      report.annotated.append(
        CardAnnotation(card=card, unit_price=unit_price, label=unit_price.label(self.currency))
      )
    return report
