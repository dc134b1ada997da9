"""Prompt templates for the pick analysis agent."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Dict, List

from pickcopilot.picks.types import BetLeg, Pick

SYSTEM_PROMPT = """You are an expert sports-betting value analyst. Judge whether the bet has positive expected value (EV), estimate approximate fair odds and propose an actionable plan. ALWAYS return strict JSON with exactly this format:

{
  "recommendedStake": "Number between 0-10 as a string, the recommended % of bankroll",
  "isEvPositive": true,
  "fairOdds": "Estimated fair decimal odds as a string. E.g. 1.92",
  "valueVerdict": "Short sentence stating EV+, neutral or EV- and why",
  "executiveSummary": "Concise 2-3 sentence summary of the key conclusions",
  "evOpportunities": [
    "Value opportunity or adjustment 1",
    "Value opportunity or adjustment 2",
    "Value opportunity or adjustment 3"
  ],
  "advancedSignals": [
    "Advanced signal or flag (injuries, market moves, pace, weather, etc.)",
    "Another signal",
    "Another signal"
  ],
  "actionPlan": [
    "Action step 1",
    "Action step 2",
    "Action step 3",
    "Action step 4"
  ]
}

isEvPositive must be a JSON boolean. evOpportunities and advancedSignals hold 2-4 items, actionPlan holds 3-5 items. Do not add any other keys or any text outside the JSON object."""

NO_LEGS_TEXT = "No selections provided."


def describe_legs(legs: Sequence[BetLeg]) -> str:
    if not legs:
        return NO_LEGS_TEXT
    return "\n".join(
        f"{idx}. Market: {leg.market} | Selection: {leg.selection} | Odds: {leg.odds}"
        for idx, leg in enumerate(legs, start=1)
    )


def build_user_prompt(pick: Pick) -> str:
    notes = pick.notes.strip() if pick.notes else ""
    return (
        "Analyze this bet:\n"
        f"Match: {pick.home_team} vs {pick.away_team}\n"
        f"Type: {pick.bet_type.value}\n"
        f"Offered odds: {pick.offered_odds}\n"
        "Selections:\n"
        f"{describe_legs(pick.legs)}\n"
        f"Additional notes from the user: {notes or 'N/A'}\n\n"
        "State whether it is EV+ or not, estimate the fair odds and the recommended stake."
    )


def build_messages(pick: Pick) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(pick)},
    ]
