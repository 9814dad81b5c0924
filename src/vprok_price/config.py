from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vprok_price.normalizer import RoundingMode
from vprok_price.render import DEFAULT_CURRENCY
from vprok_price.utils.strings import trim

DEFAULT_CONFIG_PATH = Path("~/.config/vprok-price/config.yaml").expanduser()


class AppConfig(BaseModel):
  model_config = ConfigDict(extra="forbid", frozen=True)

  rounding: RoundingMode = RoundingMode.SINGLE
  currency_symbol: str = Field(default=DEFAULT_CURRENCY)
  verbose: bool = False
  log_level: str = "INFO"

  @field_validator("rounding", mode="before")
  @classmethod
  def _coerce_rounding(cls, value: object) -> object:
    if isinstance(value, str):
      return value.strip().lower().replace("-", "_")
    return value

  @field_validator("currency_symbol", mode="after")
  @classmethod
  def _normalize_currency(cls, value: str) -> str:
    trimmed = trim(value)
    if trimmed is None:
      raise ValueError("currency_symbol must be a non-empty string")
    return trimmed

  @field_validator("log_level", mode="after")
  @classmethod
  def _validate_log_level(cls, value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
      raise ValueError(f"unknown log level '{value}'")
    return level


def load_config(path: Path | None) -> AppConfig:
  """Load config YAML, raising on any deviation.

  Without an explicit path a missing default file yields the defaults.
  """
  p = (path or DEFAULT_CONFIG_PATH).expanduser()
  if not p.exists():
    if path is None:
      return AppConfig()
    raise FileNotFoundError(f"Config file not found: {p}")

  try:
    raw = p.read_text(encoding="utf-8")
  except OSError as exc:
    raise ValueError(f"Failed to read configuration from {p}") from exc

  try:
    data = yaml.safe_load(raw)
  except yaml.YAMLError as exc:
    raise ValueError(f"Failed to parse YAML from {p}") from exc

  if data is None:
    return AppConfig()
  if not isinstance(data, dict):
    raise ValueError(f"Configuration file {p} must contain a mapping at the top level")

  try:
    return AppConfig.model_validate(data)
  except ValidationError as e:
    raise ValueError(f"Invalid configuration in {p}: {e}") from e
