"""Settlement engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from betledger.models import Bet, Leg, Status
from betledger.settlement import bet_profit, calculate_leg_return, settle


def _leg(
    stake: float = 100.0,
    odds: float = 2.0,
    status: Status = Status.WON,
    bookmaker_id: str = "A",
    manual_return: float | None = None,
) -> Leg:
    return Leg(
        id=f"leg-{bookmaker_id}",
        bookmaker_id=bookmaker_id,
        market="Resultado Final",
        odds=odds,
        stake=stake,
        status=status,
        manual_return=manual_return,
    )


def _bet(legs: list[Leg], promotion: str | None = None, extra_gain: float | None = None) -> Bet:
    return Bet(
        id="bet-1",
        date=date(2024, 3, 10),
        event="Flamengo x Palmeiras",
        main_bookmaker_id="A",
        status=Status.WON,
        legs=legs,
        promotion_type=promotion,
        extra_gain=extra_gain,
    )


@pytest.mark.parametrize(
    "status, expected",
    [
        (Status.WON, 250.0),
        (Status.LOST, 0.0),
        (Status.VOID, 100.0),
        (Status.CASHED_OUT, 100.0),
        (Status.HALF_WON, 175.0),
        (Status.HALF_LOST, 50.0),
        (Status.PENDING, 0.0),
        (Status.UNKNOWN, 0.0),
    ],
)
def test_leg_return_by_status(status: Status, expected: float) -> None:
    assert calculate_leg_return(100.0, 2.5, status) == pytest.approx(expected)


def test_lost_leg_returns_nothing_regardless_of_stake_and_odds() -> None:
    for stake, odds in [(0.0, 0.0), (10.0, 1.5), (999.0, 50.0)]:
        result = settle(_bet([_leg(stake=stake, odds=odds, status=Status.LOST)]))
        assert result.total_return == 0.0
        assert result.profit == -stake


def test_manual_return_overrides_status() -> None:
    result = settle(_bet([_leg(stake=100, odds=3.0, status=Status.CASHED_OUT, manual_return=140.0)]))
    assert result.total_return == 140.0
    assert result.profit == pytest.approx(40.0)


def test_manual_return_wins_over_lost_status() -> None:
    result = settle(_bet([_leg(stake=100, status=Status.LOST, manual_return=30.0)]))
    assert result.total_return == 30.0


def test_manual_return_of_zero_is_honoured() -> None:
    result = settle(_bet([_leg(stake=100, odds=2.0, status=Status.WON, manual_return=0.0)]))
    assert result.total_return == 0.0
    assert result.profit == -100.0


def test_single_green_leg_end_to_end() -> None:
    bet = Bet.from_dict(
        {
            "id": "b1",
            "date": "2024-03-10",
            "mainBookmakerId": "A",
            "status": "Green",
            "coverages": [{"bookmakerId": "A", "odd": 2.0, "stake": 100, "status": "Green"}],
        }
    )
    result = settle(bet)
    assert result.total_stake == 100.0
    assert result.total_return == 200.0
    assert result.profit == 100.0
    assert result.is_double_win is False


def test_freebet_conversion_exempts_first_leg_stake() -> None:
    bet = _bet(
        [
            _leg(stake=100, odds=2.0, status=Status.WON, bookmaker_id="A"),
            _leg(stake=50, odds=1.5, status=Status.LOST, bookmaker_id="B"),
        ],
        promotion="Conversão Freebet",
    )
    result = settle(bet)
    assert result.total_stake == 50.0
    assert result.legs[0].returned == 100.0
    assert result.legs[1].returned == 0.0
    assert result.total_return == 100.0
    assert result.profit == 50.0


def test_freebet_conversion_match_is_case_insensitive() -> None:
    bet = _bet([_leg(stake=100, odds=2.0)], promotion="CONVERSÃO FREEBET semanal")
    assert settle(bet).total_stake == 0.0


def test_freebet_conversion_only_touches_first_leg() -> None:
    bet = _bet(
        [
            _leg(stake=100, odds=2.0, status=Status.LOST, bookmaker_id="A"),
            _leg(stake=50, odds=2.0, status=Status.WON, bookmaker_id="B"),
        ],
        promotion="Conversão Freebet",
    )
    result = settle(bet)
    assert result.total_stake == 50.0
    assert result.legs[0].returned == 0.0
    assert result.legs[1].returned == 100.0
    assert result.profit == 50.0
    assert result.is_double_win is False


def test_plain_freebet_does_not_change_settlement() -> None:
    bet = _bet([_leg(stake=100, odds=2.0)], promotion="Freebet")
    assert settle(bet).total_stake == 100.0


def test_profit_is_return_minus_stake() -> None:
    bets = [
        _bet([_leg(stake=33.3, odds=1.87), _leg(stake=12.1, odds=4.2, status=Status.HALF_WON)]),
        _bet([_leg(stake=10, odds=3.1, status=Status.HALF_LOST)], promotion="Conversão Freebet"),
        _bet([]),
    ]
    for bet in bets:
        result = settle(bet)
        assert result.profit == result.total_return - result.total_stake


def test_leg_net_profits_sum_to_bet_profit() -> None:
    bet = _bet(
        [_leg(stake=100, odds=2.0), _leg(stake=40, odds=2.5, status=Status.LOST, bookmaker_id="B")],
        promotion="Conversão Freebet",
    )
    result = settle(bet)
    assert sum(leg.net_profit for leg in result.legs) == pytest.approx(result.profit)
    assert result.per_leg_profit == [pytest.approx(0.0), pytest.approx(-40.0)]


def test_settle_is_idempotent() -> None:
    bet = _bet([_leg(stake=25, odds=3.0), _leg(stake=10, status=Status.PENDING, bookmaker_id="B")])
    assert settle(bet) == settle(bet)


def test_zero_legs_settle_to_zero() -> None:
    result = settle(_bet([]))
    assert result.total_stake == 0.0
    assert result.total_return == 0.0
    assert result.profit == 0.0
    assert result.is_double_win is False


def test_zero_odds_and_zero_stake_do_not_fail() -> None:
    assert settle(_bet([_leg(stake=100, odds=0.0)])).total_return == 0.0
    assert settle(_bet([_leg(stake=0.0, odds=3.0)])).profit == 0.0


def test_malformed_numbers_count_as_zero() -> None:
    bet = Bet.from_dict(
        {
            "id": "b2",
            "date": "2024-03-10",
            "mainBookmakerId": "A",
            "status": "Green",
            "coverages": [
                {"bookmakerId": "A", "odd": "abc", "stake": None, "status": "Green"},
                {"bookmakerId": "B", "odd": float("nan"), "stake": "50", "status": "Red"},
                "not a leg",
            ],
        }
    )
    result = settle(bet)
    assert len(result.legs) == 2
    assert result.total_stake == 50.0
    assert result.total_return == 0.0


def test_missing_coverages_becomes_empty() -> None:
    bet = Bet.from_dict({"id": "b3", "status": "Green", "coverages": "oops"})
    assert bet.legs == []
    assert settle(bet).profit == 0.0


def test_pending_leg_stake_counts_but_not_for_double_win() -> None:
    bet = _bet(
        [
            _leg(stake=100, odds=2.0, bookmaker_id="A"),
            _leg(stake=50, odds=2.0, status=Status.PENDING, bookmaker_id="B"),
        ]
    )
    result = settle(bet)
    assert result.total_stake == 150.0
    assert result.is_double_win is False


def test_double_win_needs_two_non_negative_resolved_legs() -> None:
    both_won = _bet([_leg(stake=100, odds=2.0), _leg(stake=50, odds=1.8, bookmaker_id="B")])
    one_lost = _bet([_leg(stake=100, odds=2.0), _leg(stake=50, status=Status.LOST, bookmaker_id="B")])
    with_void = _bet([_leg(stake=100, odds=2.0), _leg(stake=50, status=Status.VOID, bookmaker_id="B")])

    assert settle(both_won).is_double_win is True
    assert settle(one_lost).is_double_win is False
    assert settle(with_void).is_double_win is True


def test_extra_gain_is_left_to_callers() -> None:
    bet = _bet([_leg(stake=100, odds=2.0)], extra_gain=15.0)
    assert settle(bet).profit == 100.0
    assert bet_profit(bet) == 115.0


def test_losing_freebet_leg_counts_its_full_stake_as_loss() -> None:
    bet = _bet(
        [
            _leg(stake=100, odds=3.0, status=Status.LOST, bookmaker_id="A"),
            _leg(stake=60, odds=2.0, status=Status.WON, bookmaker_id="B"),
        ],
        promotion="Conversão Freebet",
    )
    result = settle(bet)
    assert result.total_stake == 60.0
    assert result.profit == 60.0
    assert result.per_leg_profit == [-100.0, 60.0]
    assert result.legs[0].counted_stake == 0.0
    assert result.is_double_win is False


def test_winning_freebet_leg_profit_uses_recorded_stake() -> None:
    bet = _bet([_leg(stake=100, odds=2.0, status=Status.WON)], promotion="Conversão Freebet")
    leg = settle(bet).legs[0]
    assert leg.returned == 100.0
    assert leg.profit == 0.0
    assert leg.net_profit == 100.0
