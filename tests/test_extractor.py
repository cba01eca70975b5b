"""Field extractor tests."""

from __future__ import annotations

from datetime import date

from betledger.extraction import GENERIC_LAYOUT, FieldExtractor, field_extractor, select_layout
from betledger.utils.dates import normalize_date_token
from betledger.utils.numbers import find_decimals, parse_decimal

TODAY = date(2024, 6, 1)

BET365_SLIP = """Bet365
Flamengo x Palmeiras
Resultado Final: Flamengo
Aposta: R$ 10,00
@ 2,50
hoje 18:00
"""

GENERIC_SLIP = """Flamengo x Palmeiras
Valor: R$ 25,00
Odds: 1,85
Data 15/03/24
"""


def test_hoje_normalizes_to_today() -> None:
    fields = field_extractor.extract(BET365_SLIP, today=TODAY)
    assert fields is not None
    assert fields.date == "2024-06-01"


def test_bookmaker_layout_reads_named_fields() -> None:
    fields = field_extractor.extract(BET365_SLIP, today=TODAY)
    assert fields.layout == "bet365"
    assert fields.bookmaker == "Bet365"
    assert fields.stake == 10.0
    assert fields.odds == 2.5
    assert fields.market == "Resultado Final: Flamengo"
    assert fields.event == "Flamengo x Palmeiras"
    assert fields.confidence == 0.95


def test_two_digit_year_date_is_in_2000s() -> None:
    fields = field_extractor.extract(GENERIC_SLIP, today=TODAY)
    assert fields.date == "2024-03-15"


def test_generic_layout_fills_stake_then_odds() -> None:
    fields = field_extractor.extract(GENERIC_SLIP, today=TODAY)
    assert fields.layout == "generic"
    assert fields.bookmaker is None
    assert fields.stake == 25.0
    assert fields.odds == 1.85


def test_odds_hunt_skips_the_stake() -> None:
    fields = field_extractor.extract("Total R$ 50,00\nretorno 3,40\n", today=TODAY)
    assert fields.stake == 50.0
    assert fields.odds == 3.4


def test_market_lines_joined_and_deduplicated() -> None:
    text = "Resultado Final: Flamengo\nAmbas Marcam: Sim\nresultado final: flamengo\nR$ 10,00 @ 2,00\n"
    fields = field_extractor.extract(text, today=TODAY)
    assert fields.market == "Resultado Final: Flamengo + Ambas Marcam: Sim"


def test_promotion_keyword_detected() -> None:
    text = "Betano\nConversão Freebet\nValor da aposta R$ 20,00\nOdds 3,10\n"
    fields = field_extractor.extract(text, today=TODAY)
    assert fields.layout == "betano"
    assert fields.promotion == "Conversão Freebet"
    assert fields.stake == 20.0
    assert fields.odds == 3.1


def test_layout_selection_first_anchor_wins() -> None:
    assert select_layout("comprovante sportingbet").id == "sportingbet"
    assert select_layout("pixbet odds").id == "pixbet"
    assert select_layout("casa desconhecida") is GENERIC_LAYOUT


def test_no_text_returns_none() -> None:
    assert field_extractor.extract(None) is None
    assert field_extractor.extract("") is None
    assert field_extractor.extract("short") is None


def test_text_without_fields_returns_none() -> None:
    assert field_extractor.extract("Hello world, nothing useful here", today=TODAY) is None


def test_internal_failure_returns_none(monkeypatch) -> None:
    extractor = FieldExtractor()

    def boom(*args, **kwargs):
        raise RuntimeError("broken rule")

    monkeypatch.setattr(extractor, "_apply_rule", boom)
    assert extractor.extract(BET365_SLIP, today=TODAY) is None


def test_date_token_normalization() -> None:
    assert normalize_date_token("ontem", TODAY) == "2024-05-31"
    assert normalize_date_token("yesterday", TODAY) == "2024-05-31"
    assert normalize_date_token("05/07", TODAY) == "2024-07-05"
    assert normalize_date_token("1/2/2023", TODAY) == "2023-02-01"
    assert normalize_date_token("31/02/24", TODAY) is None


def test_thousands_separated_stake_is_read_in_full() -> None:
    fields = field_extractor.extract("Bet365\nAposta: R$ 1.234,56\n@ 2,50\n", today=TODAY)
    assert fields.stake == 1234.56
    assert fields.odds == 2.5


def test_parse_decimal_handles_brazilian_thousands() -> None:
    assert parse_decimal("R$ 1.234,56") == 1234.56
    assert parse_decimal("12.50") == 12.5
    assert find_decimals("total 2.500,00 odds 1,90") == [2500.0, 1.9]
