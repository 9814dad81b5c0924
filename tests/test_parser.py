from __future__ import annotations

from decimal import Decimal

import pytest

from vprok_price.grammar import UNIT_TOKENS, TitleGrammar
from vprok_price.parser import FALLBACK_QUANTITY, ParsedQuantity, parse_title
from vprok_price.term import ActivityLog


def test_milk_with_decimal_litres() -> None:
  parsed = parse_title("Молоко X пастеризованное 2.5% 1.4л")
  assert parsed == ParsedQuantity(quantity=Decimal("1.4"), unit="л", multiplier=1)


def test_baguette_with_leading_multiplier() -> None:
  parsed = parse_title("Багет X замороженный 2шт*150г")
  assert parsed == ParsedQuantity(quantity=Decimal(150), unit="г", multiplier=2)


def test_trailing_multiplier() -> None:
  parsed = parse_title("Йогурт питьевой 150г*4шт")
  assert parsed.multiplier == 4
  assert parsed.quantity == Decimal(150)


def test_both_multipliers_take_the_larger_not_the_product() -> None:
  parsed = parse_title("Печенье 2пак*150г*3шт")
  assert parsed.multiplier == 3
  assert parsed.quantity == Decimal(150)


def test_comma_decimal_separator() -> None:
  parsed = parse_title("Масло подсолнечное 0,9л")
  assert parsed.quantity == Decimal("0.9")
  assert parsed.unit == "л"


def test_title_is_stripped_before_matching() -> None:
  parsed = parse_title("  Сок яблочный 1л  ")
  assert parsed == ParsedQuantity(quantity=Decimal(1), unit="л")


def test_roll_count_with_space() -> None:
  parsed = parse_title("Туалетная бумага X 4 рулона 3 слоя")
  assert parsed == ParsedQuantity(quantity=Decimal(4), unit="рулона")


@pytest.mark.parametrize(
  "title",
  ["Подарочный набор", "", "   ", "Сыр 500гр", "Батон нарезной"],
)
def test_unparseable_titles_fall_back_to_one_piece(title: str) -> None:
  assert parse_title(title) == FALLBACK_QUANTITY
  assert FALLBACK_QUANTITY == ParsedQuantity(quantity=Decimal(1), unit="шт", multiplier=1)


@pytest.mark.parametrize("title", ["Вода 0л", "Вода 0.0л", "Пакеты 0шт"])
def test_zero_quantity_falls_back(title: str) -> None:
  assert parse_title(title) == FALLBACK_QUANTITY


def test_zero_multiplier_is_ignored() -> None:
  parsed = parse_title("Багет 0шт*150г")
  assert parsed.multiplier == 1


@pytest.mark.parametrize(
  "title",
  [
    "Коктейль из морепродуктов в масле 415г",
    "Сахар 1кг",
    "Витамин С 500мг",
    "Сок 200мл*3шт",
    "Яйцо куриное С1 10шт",
    "Бумага 8 рулонов",
    "Носки 3 пары",
    "Кефир 1% 0,93л",
  ],
)
def test_matched_titles_have_positive_quantity_and_known_unit(title: str) -> None:
  parsed = parse_title(title)
  assert parsed.quantity > 0
  assert parsed.unit in UNIT_TOKENS
  assert parsed.multiplier >= 1


def test_parse_is_idempotent() -> None:
  title = "Багет X замороженный 2шт*150г"
  assert parse_title(title) == parse_title(title)


def test_custom_grammar() -> None:
  grammar = TitleGrammar(markers=("pk",), units=("g", "kg"))
  parsed = parse_title("Bread 2pk*150g", grammar=grammar)
  assert parsed == ParsedQuantity(quantity=Decimal(150), unit="g", multiplier=2)


def test_parsed_quantity_rejects_zero_multiplier() -> None:
  with pytest.raises(ValueError):
    ParsedQuantity(quantity=Decimal(1), unit="шт", multiplier=0)


class TestLogging:
  def test_verbose_log_traces_the_parse(self, recording_log: ActivityLog) -> None:
    parse_title("Сок 1.4л", log=recording_log)
    output = recording_log.console.export_text()
    assert "[parser]" in output
    assert "1.4 л * 1" in output

  def test_verbose_log_traces_the_fallback(self, recording_log: ActivityLog) -> None:
    parse_title("Подарочный набор", log=recording_log)
    assert "No pack size" in recording_log.console.export_text()

  def test_quiet_log_prints_nothing(self, quiet_recording_log: ActivityLog) -> None:
    parse_title("Сок 1.4л", log=quiet_recording_log)
    assert quiet_recording_log.console.export_text() == ""
