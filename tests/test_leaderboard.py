"""Bookmaker and month leaderboard tests."""

from __future__ import annotations

from datetime import date

import pytest

from betledger.models import Bet, Leg, Status
from betledger.reporting import NO_PROMOTION, attribute_profits, rank_bookmakers, rank_months


def _leg(bookmaker_id: str, stake: float, odds: float, status: Status) -> Leg:
    return Leg(id=f"leg-{bookmaker_id}", bookmaker_id=bookmaker_id, odds=odds, stake=stake, status=status)


def _bet(
    legs: list[Leg],
    main: str = "A",
    day: date = date(2024, 3, 10),
    promotion: str | None = None,
    extra_gain: float | None = None,
    status: Status = Status.WON,
) -> Bet:
    return Bet(
        id=f"bet-{day.isoformat()}",
        date=day,
        event="Event",
        main_bookmaker_id=main,
        status=status,
        legs=legs,
        promotion_type=promotion,
        extra_gain=extra_gain,
    )


def test_double_win_credits_each_leg_bookmaker() -> None:
    bet = _bet(
        [_leg("A", 100, 2.0, Status.WON), _leg("B", 50, 3.0, Status.WON)],
        promotion="Super Odds",
    )
    buckets = attribute_profits([bet])
    assert buckets["A"] == {"Super Odds": 100.0}
    assert buckets["B"] == {NO_PROMOTION: 100.0}


def test_hedge_cost_goes_entirely_to_main_bookmaker() -> None:
    bet = _bet(
        [_leg("A", 100, 2.5, Status.WON), _leg("B", 80, 2.0, Status.LOST)],
        promotion="Freebet",
    )
    buckets = attribute_profits([bet])
    assert buckets == {"A": {"Freebet": pytest.approx(70.0)}}


def test_hedge_loss_also_goes_to_main_bookmaker() -> None:
    bet = _bet([_leg("A", 100, 2.0, Status.LOST), _leg("B", 100, 1.8, Status.WON)])
    buckets = attribute_profits([bet])
    assert buckets == {"A": {NO_PROMOTION: pytest.approx(-20.0)}}


def test_losing_freebet_conversion_credits_main_bookmaker() -> None:
    bet = _bet(
        [_leg("A", 100, 3.0, Status.LOST), _leg("B", 60, 2.0, Status.WON)],
        promotion="Conversão Freebet",
    )
    assert attribute_profits([bet]) == {"A": {"Conversão Freebet": 60.0}}


def test_extra_gain_always_goes_to_main() -> None:
    bet = _bet(
        [_leg("A", 100, 2.0, Status.WON), _leg("B", 50, 2.0, Status.WON)],
        extra_gain=12.0,
    )
    buckets = attribute_profits([bet])
    assert buckets["A"][NO_PROMOTION] == 112.0
    assert buckets["B"][NO_PROMOTION] == 50.0


def test_unsettled_bets_are_not_attributed() -> None:
    bets = [
        _bet([_leg("A", 100, 2.0, Status.PENDING)], status=Status.PENDING),
        _bet([_leg("A", 100, 2.0, Status.WON)], status=Status.DRAFT),
    ]
    assert attribute_profits(bets) == {}


def test_rank_bookmakers_top_n_with_promotions() -> None:
    bets = [
        _bet([_leg("A", 100, 2.0, Status.WON)], promotion="Super Odds", day=date(2024, 3, 1)),
        _bet([_leg("A", 100, 1.5, Status.WON)], promotion="Freebet", day=date(2024, 3, 2)),
        _bet([_leg("A", 100, 1.1, Status.WON)], promotion="Missão", day=date(2024, 3, 3)),
        _bet([_leg("A", 100, 1.2, Status.WON)], day=date(2024, 3, 4)),
        _bet([_leg("B", 100, 3.0, Status.WON)], main="B", day=date(2024, 3, 5)),
        _bet([_leg("C", 100, 1.5, Status.WON)], main="C", day=date(2024, 3, 6)),
        _bet([_leg("D", 100, 2.0, Status.LOST)], main="D", day=date(2024, 3, 7)),
    ]
    ranking = rank_bookmakers(bets, bookmaker_names={"A": "Betano", "B": "Bet365"})

    assert [b.bookmaker_id for b in ranking] == ["B", "A", "C"]
    assert ranking[0].name == "Bet365"
    assert ranking[2].name == "C"

    betano = ranking[1]
    assert betano.name == "Betano"
    assert betano.total_profit == pytest.approx(180.0)
    assert [p.promotion for p in betano.promotions] == ["Super Odds", "Freebet", NO_PROMOTION]


def test_rank_months_is_global_and_sorted() -> None:
    bets = [
        _bet([_leg("A", 100, 2.0, Status.WON)], day=date(2024, 1, 5)),
        _bet([_leg("A", 100, 3.0, Status.WON)], day=date(2024, 2, 5)),
        _bet([_leg("A", 100, 1.5, Status.WON)], day=date(2024, 2, 20)),
        _bet([_leg("A", 100, 2.0, Status.LOST)], day=date(2023, 12, 1)),
        _bet([_leg("A", 100, 1.1, Status.WON)], day=date(2024, 4, 1), extra_gain=5.0),
        _bet([_leg("A", 900, 9.0, Status.PENDING)], day=date(2024, 5, 1), status=Status.PENDING),
    ]
    ranking = rank_months(bets)
    assert [m.month for m in ranking] == ["2024-02", "2024-01", "2024-04"]
    assert ranking[0].profit == pytest.approx(250.0)
    assert ranking[2].profit == pytest.approx(15.0)
