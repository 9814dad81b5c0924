from __future__ import annotations

# catalog.py exports
from vprok_price.catalog import (
  CardAnnotation,
  CatalogAnnotator,
  CatalogReport,
  ProductCard,
  load_catalog,
)

# config.py exports
from vprok_price.config import DEFAULT_CONFIG_PATH, AppConfig, load_config

# grammar.py exports
from vprok_price.grammar import DEFAULT_GRAMMAR, QuantityMatch, TitleGrammar

# log.py exports
from vprok_price.log import setup_logging

# normalizer.py exports
from vprok_price.normalizer import (
  NormalizedPrice,
  PriceNormalizer,
  RoundingMode,
  UnitPrice,
  normalize,
)

# parser.py exports
from vprok_price.parser import FALLBACK_QUANTITY, ParsedQuantity, parse_title

# render.py exports
from vprok_price.render import format_unit_price

# term.py exports
from vprok_price.term import ActivityLog, activity_log, set_activity_log

# units.py exports
from vprok_price.units import (
  DEFAULT_CONVERSION_TABLE,
  DEFAULT_RULE,
  ConversionRule,
  ConversionTable,
  resolve_unit,
)

__all__ = [
  # catalog.py
  "CardAnnotation",
  "CatalogAnnotator",
  "CatalogReport",
  "ProductCard",
  "load_catalog",
  # config.py
  "DEFAULT_CONFIG_PATH",
  "AppConfig",
  "load_config",
  # grammar.py
  "DEFAULT_GRAMMAR",
  "QuantityMatch",
  "TitleGrammar",
  # log.py
  "setup_logging",
  # normalizer.py
  "NormalizedPrice",
  "PriceNormalizer",
  "RoundingMode",
  "UnitPrice",
  "normalize",
  # parser.py
  "FALLBACK_QUANTITY",
  "ParsedQuantity",
  "parse_title",
  # render.py
  "format_unit_price",
  # term.py
  "ActivityLog",
  "activity_log",
  "set_activity_log",
  # units.py
  "DEFAULT_CONVERSION_TABLE",
  "DEFAULT_RULE",
  "ConversionRule",
  "ConversionTable",
  "resolve_unit",
]
