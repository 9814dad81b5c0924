from __future__ import annotations

from decimal import Decimal

from vprok_price.normalizer import NormalizedPrice
from vprok_price.render import format_minor_units, format_unit_price


def test_price_with_kopecks() -> None:
  price = NormalizedPrice(major_units=71, minor_units=Decimal(43))
  assert format_unit_price(price, "л") == "71,43 ₽/л"


def test_whole_price_omits_the_fraction() -> None:
  price = NormalizedPrice(major_units=300, minor_units=Decimal(0))
  assert format_unit_price(price, "кг") == "300 ₽/кг"


def test_single_digit_kopecks_are_padded() -> None:
  price = NormalizedPrice(major_units=71, minor_units=Decimal(5))
  assert format_unit_price(price, "л") == "71,05 ₽/л"


def test_two_stage_minor_units() -> None:
  price = NormalizedPrice(major_units=71, minor_units=Decimal("43.0"))
  assert format_unit_price(price, "л") == "71,43 ₽/л"
  assert format_unit_price(NormalizedPrice(300, Decimal("0.0")), "кг") == "300 ₽/кг"


def test_custom_currency() -> None:
  price = NormalizedPrice(major_units=50, minor_units=Decimal(0))
  assert format_unit_price(price, "шт", currency="руб.") == "50 руб./шт"


def test_format_minor_units() -> None:
  assert format_minor_units(Decimal(7)) == "07"
  assert format_minor_units(Decimal("99.00")) == "99"
  assert format_minor_units(Decimal("12.50")) == "12.5"
  assert format_minor_units(Decimal(100)) == "100"
