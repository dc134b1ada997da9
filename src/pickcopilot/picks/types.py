"""Dataclasses for bet legs and picks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List


class BetType(str, Enum):
    SIMPLE = "simple"
    PARLAY = "parlay"


@dataclass
class BetLeg:
    market: str = ""
    selection: str = ""
    odds: str = ""

    def to_payload(self) -> dict[str, str]:
        return {"market": self.market, "selection": self.selection, "odds": self.odds}


@dataclass
class Pick:
    home_team: str = ""
    away_team: str = ""
    bet_type: BetType = BetType.SIMPLE
    legs: List[BetLeg] = field(default_factory=lambda: [BetLeg()])
    offered_odds: str = ""
    notes: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the wire field names the gateway expects."""

        return {
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "offeredOdds": self.offered_odds,
            "betType": self.bet_type.value,
            "legs": [leg.to_payload() for leg in self.legs],
            "notes": self.notes,
        }
