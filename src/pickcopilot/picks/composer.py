"""Pick composition: combined odds, validation and submission."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, TypeVar

from pickcopilot.picks.types import BetLeg, BetType, Pick

logger = logging.getLogger(__name__)

ODDS_PLACEHOLDER = "-"
_TWO_PLACES = Decimal("0.01")
_LEG_FIELDS = ("market", "selection", "odds")

T = TypeVar("T")


class PickValidationError(ValueError):
    """Raised when a pick is not complete enough to submit."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


def parse_odds(text: str | None) -> Decimal | None:
    """Parse decimal odds text, returning None unless it is a positive finite number."""

    if not text:
        return None
    try:
        value = Decimal(text.strip().replace(",", "."))
    except InvalidOperation:
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def combined_odds(legs: Iterable[BetLeg]) -> str | None:
    """Multiply leg odds into a two-decimal string.

    Legs whose odds do not parse count as 1.0 so the preview stays stable while
    the user is typing. Without any legs there is nothing to combine.
    """

    legs = list(legs)
    if not legs:
        return None
    product = Decimal(1)
    for leg in legs:
        product *= parse_odds(leg.odds) or Decimal(1)
    return str(product.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def compute_effective_odds(bet_type: BetType, legs: Iterable[BetLeg], manual_odds: str) -> str:
    if bet_type is BetType.PARLAY:
        return combined_odds(legs) or ODDS_PLACEHOLDER
    return manual_odds.strip() or ODDS_PLACEHOLDER


def format_odds_display(value: str, decimal_separator: str = ",") -> str:
    if value == ODDS_PLACEHOLDER:
        return value
    return value.replace(".", decimal_separator)


def validate_pick(pick: Pick) -> list[str]:
    """Return the problems that block submission; an empty list means ready."""

    problems: list[str] = []
    if not pick.home_team.strip():
        problems.append("Home team is required.")
    if not pick.away_team.strip():
        problems.append("Away team is required.")
    if not pick.legs:
        problems.append("At least one selection is required.")
    elif pick.bet_type is BetType.SIMPLE and len(pick.legs) != 1:
        problems.append("A simple bet holds exactly one selection.")
    for idx, leg in enumerate(pick.legs, start=1):
        missing = [name for name in _LEG_FIELDS if not getattr(leg, name).strip()]
        if missing:
            problems.append(f"Selection {idx} is missing {', '.join(missing)}.")
    if compute_effective_odds(pick.bet_type, pick.legs, pick.offered_odds) == ODDS_PLACEHOLDER:
        problems.append("Offered odds are required.")
    return problems


class PickComposer:
    """Holds a pick for one form session and keeps parlay odds in sync."""

    def __init__(self, pick: Pick | None = None) -> None:
        self.pick = pick or Pick()
        self._submitting = False
        self._sync_offered_odds()

    @property
    def effective_odds(self) -> str:
        return compute_effective_odds(self.pick.bet_type, self.pick.legs, self.pick.offered_odds)

    @property
    def is_valid(self) -> bool:
        return not validate_pick(self.pick)

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def set_teams(self, home_team: str | None = None, away_team: str | None = None) -> None:
        if home_team is not None:
            self.pick.home_team = home_team
        if away_team is not None:
            self.pick.away_team = away_team

    def set_notes(self, notes: str) -> None:
        self.pick.notes = notes

    def set_offered_odds(self, odds: str) -> None:
        # Parlay odds are derived from the legs.
        if self.pick.bet_type is BetType.PARLAY:
            return
        self.pick.offered_odds = odds

    def set_bet_type(self, bet_type: BetType | str) -> None:
        bet_type = BetType(bet_type)
        legs = self.pick.legs
        if bet_type is BetType.SIMPLE:
            legs = [legs[0] if legs else BetLeg()]
        elif not legs:
            legs = [BetLeg()]
        self.pick.bet_type = bet_type
        self.pick.legs = legs
        self._sync_offered_odds()

    def add_leg(self) -> None:
        if self.pick.bet_type is BetType.SIMPLE:
            return
        self.pick.legs.append(BetLeg())
        self._sync_offered_odds()

    def update_leg(self, index: int, **fields: str) -> None:
        unknown = set(fields) - set(_LEG_FIELDS)
        if unknown:
            raise TypeError(f"Unknown leg fields: {sorted(unknown)}")
        self.pick.legs[index] = replace(self.pick.legs[index], **fields)
        self._sync_offered_odds()

    def remove_leg(self, index: int) -> None:
        if len(self.pick.legs) <= 1:
            return
        del self.pick.legs[index]
        self._sync_offered_odds()

    def _sync_offered_odds(self) -> None:
        if self.pick.bet_type is not BetType.PARLAY:
            return
        computed = combined_odds(self.pick.legs)
        if computed is not None and computed != self.pick.offered_odds:
            self.pick.offered_odds = computed

    def build_payload(self) -> dict[str, Any]:
        problems = validate_pick(self.pick)
        if problems:
            raise PickValidationError(problems)
        payload = self.pick.to_payload()
        payload["offeredOdds"] = self.effective_odds
        return payload

    def submit(self, send: Callable[[dict[str, Any]], T]) -> T | None:
        """Send the pick once; a submit while one is outstanding is ignored."""

        if self._submitting:
            logger.info("Ignoring submit while an analysis request is outstanding")
            return None
        payload = self.build_payload()
        self._submitting = True
        try:
            return send(payload)
        finally:
            self._submitting = False
