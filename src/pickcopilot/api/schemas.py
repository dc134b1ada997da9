"""Pydantic schemas for the Pick Copilot API."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from pickcopilot.picks.types import BetLeg, BetType, Pick


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_number(value: str) -> float:
    return float(value.strip().rstrip("%").strip().replace(",", "."))


class LegPayload(_CamelModel):
    market: str = ""
    selection: str = ""
    odds: str = ""


class PickPayload(_CamelModel):
    home_team: str
    away_team: str
    offered_odds: str = ""
    bet_type: BetType = BetType.SIMPLE
    legs: list[LegPayload] = Field(default_factory=list)
    notes: str | None = None

    def to_pick(self) -> Pick:
        return Pick(
            home_team=self.home_team,
            away_team=self.away_team,
            bet_type=self.bet_type,
            legs=[BetLeg(market=leg.market, selection=leg.selection, odds=leg.odds) for leg in self.legs],
            offered_odds=self.offered_odds,
            notes=self.notes or "",
        )


class Analysis(_CamelModel):
    """Value-betting analysis returned by the model, checked field by field."""

    recommended_stake: StrictStr
    is_ev_positive: StrictBool
    fair_odds: StrictStr
    value_verdict: StrictStr
    executive_summary: StrictStr
    ev_opportunities: list[StrictStr]
    advanced_signals: list[StrictStr]
    action_plan: list[StrictStr]

    @field_validator("recommended_stake", "fair_odds", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("recommended_stake")
    @classmethod
    def _stake_within_bankroll_range(cls, value: str) -> str:
        try:
            stake = _as_number(value)
        except ValueError as exc:
            raise ValueError(f"recommendedStake is not numeric: {value!r}") from exc
        if not 0 <= stake <= 10:
            raise ValueError(f"recommendedStake must be between 0 and 10, got {value!r}")
        return value

    @field_validator("fair_odds")
    @classmethod
    def _fair_odds_are_decimal(cls, value: str) -> str:
        try:
            odds = _as_number(value)
        except ValueError as exc:
            raise ValueError(f"fairOdds is not numeric: {value!r}") from exc
        if not math.isfinite(odds) or odds < 1.0:
            raise ValueError(f"fairOdds must be decimal odds of at least 1.0, got {value!r}")
        return value


class ErrorResponse(BaseModel):
    error: str
