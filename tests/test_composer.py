"""Pick composer tests."""

from __future__ import annotations

import pytest

from pickcopilot.picks import composer as pc
from pickcopilot.picks.types import BetLeg, BetType, Pick


def _leg(odds: str, market: str = "Over/Under", selection: str = "Over 2.5") -> BetLeg:
    return BetLeg(market=market, selection=selection, odds=odds)


def _parlay_composer(*odds: str) -> pc.PickComposer:
    composer = pc.PickComposer(Pick(home_team="Real Madrid", away_team="Barcelona"))
    composer.set_bet_type(BetType.PARLAY)
    for idx, value in enumerate(odds):
        if idx:
            composer.add_leg()
        composer.update_leg(idx, market="1X2", selection=f"Leg {idx + 1}", odds=value)
    return composer


def test_combined_odds_single_leg() -> None:
    assert pc.combined_odds([_leg("1.85")]) == "1.85"


def test_combined_odds_rounds_half_up() -> None:
    assert pc.combined_odds([_leg("1.85"), _leg("2.10")]) == "3.89"


def test_combined_odds_is_product_of_legs() -> None:
    assert pc.combined_odds([_leg("1.5"), _leg("2"), _leg("1.3")]) == "3.90"


def test_combined_odds_treats_unparseable_leg_as_identity() -> None:
    assert pc.combined_odds([_leg("2.00"), _leg(""), _leg("abc"), _leg("-3")]) == "2.00"


def test_combined_odds_accepts_comma_separator() -> None:
    assert pc.combined_odds([_leg("1,50"), _leg("2")]) == "3.00"


def test_combined_odds_undefined_without_legs() -> None:
    assert pc.combined_odds([]) is None
    assert pc.compute_effective_odds(BetType.PARLAY, [], "") == pc.ODDS_PLACEHOLDER


def test_effective_odds_simple_uses_manual_value() -> None:
    assert pc.compute_effective_odds(BetType.SIMPLE, [_leg("9.0")], " 1.85 ") == "1.85"
    assert pc.compute_effective_odds(BetType.SIMPLE, [_leg("9.0")], "  ") == pc.ODDS_PLACEHOLDER


def test_format_odds_display() -> None:
    assert pc.format_odds_display("3.89") == "3,89"
    assert pc.format_odds_display(pc.ODDS_PLACEHOLDER) == pc.ODDS_PLACEHOLDER


def test_parlay_offered_odds_track_leg_edits() -> None:
    composer = _parlay_composer("1.85", "2.10")
    assert composer.pick.offered_odds == "3.89"
    composer.update_leg(1, odds="2.00")
    assert composer.pick.offered_odds == "3.70"
    composer.remove_leg(1)
    assert composer.pick.offered_odds == "1.85"


def test_parlay_ignores_manual_odds() -> None:
    composer = _parlay_composer("2.00")
    composer.set_offered_odds("7.77")
    assert composer.pick.offered_odds == "2.00"


def test_simple_odds_never_overwritten() -> None:
    composer = pc.PickComposer()
    composer.set_offered_odds("1.95")
    composer.update_leg(0, market="1X2", selection="Home", odds="3.10")
    assert composer.pick.offered_odds == "1.95"


def test_switch_simple_to_parlay_keeps_leg() -> None:
    composer = pc.PickComposer()
    composer.update_leg(0, market="Handicap", selection="Home -1", odds="2.40")
    composer.set_bet_type(BetType.PARLAY)
    assert composer.pick.legs[0] == BetLeg("Handicap", "Home -1", "2.40")
    assert composer.pick.offered_odds == "2.40"


def test_switch_parlay_to_simple_keeps_first_leg() -> None:
    composer = _parlay_composer("1.50", "2.00", "3.00")
    first = composer.pick.legs[0]
    composer.set_bet_type("simple")
    assert composer.pick.legs == [first]


def test_switch_to_parlay_seeds_empty_leg() -> None:
    composer = pc.PickComposer(Pick(legs=[]))
    composer.set_bet_type(BetType.PARLAY)
    assert composer.pick.legs == [BetLeg()]


def test_remove_leg_keeps_at_least_one() -> None:
    composer = _parlay_composer("1.50")
    composer.remove_leg(0)
    assert len(composer.pick.legs) == 1


def test_update_leg_rejects_unknown_field() -> None:
    with pytest.raises(TypeError):
        pc.PickComposer().update_leg(0, stake="10")


@pytest.mark.parametrize("blank", ["market", "selection", "odds"])
def test_blank_leg_field_blocks_submission(blank: str) -> None:
    composer = _parlay_composer("1.85", "2.10")
    composer.update_leg(1, **{blank: "   "})
    calls: list[dict] = []
    assert not composer.is_valid
    with pytest.raises(pc.PickValidationError):
        composer.submit(calls.append)
    assert calls == []


def test_blank_team_blocks_submission() -> None:
    composer = _parlay_composer("1.85")
    composer.set_teams(away_team=" ")
    assert "Away team is required." in pc.validate_pick(composer.pick)


def test_simple_requires_offered_odds() -> None:
    composer = pc.PickComposer(Pick(home_team="A", away_team="B"))
    composer.update_leg(0, market="1X2", selection="Home", odds="1.80")
    assert "Offered odds are required." in pc.validate_pick(composer.pick)
    composer.set_offered_odds("1.80")
    assert composer.is_valid


def test_submit_sends_effective_odds_payload() -> None:
    composer = _parlay_composer("1.85", "2.10")
    composer.set_notes("Key striker doubtful")
    sent: list[dict] = []
    composer.submit(lambda payload: sent.append(payload) or "ok")
    assert sent == [
        {
            "homeTeam": "Real Madrid",
            "awayTeam": "Barcelona",
            "offeredOdds": "3.89",
            "betType": "parlay",
            "legs": [
                {"market": "1X2", "selection": "Leg 1", "odds": "1.85"},
                {"market": "1X2", "selection": "Leg 2", "odds": "2.10"},
            ],
            "notes": "Key striker doubtful",
        }
    ]
    assert composer.pick.home_team == "Real Madrid"


def test_duplicate_submit_suppressed_while_outstanding() -> None:
    composer = _parlay_composer("1.85")
    calls: list[dict] = []

    def send(payload: dict) -> str:
        calls.append(payload)
        assert composer.is_submitting
        assert composer.submit(send) is None
        return "analysis"

    assert composer.submit(send) == "analysis"
    assert len(calls) == 1
    assert not composer.is_submitting


def test_failed_submit_releases_guard() -> None:
    composer = _parlay_composer("1.85")

    def send(payload: dict) -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        composer.submit(send)
    assert not composer.is_submitting
