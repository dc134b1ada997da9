"""Streamlit interface for Pick Copilot."""

from __future__ import annotations

import streamlit as st

from pickcopilot.api.schemas import Analysis
from pickcopilot.client.analysis_client import AnalysisClient, AnalysisRequestError
from pickcopilot.picks.composer import PickComposer, PickValidationError, format_odds_display
from pickcopilot.picks.types import BetType

st.set_page_config(page_title="Pick Copilot", layout="wide", page_icon="🎯")
st.title("🎯 Pick Copilot")
st.caption("Expected value, fair odds and an action plan for your pick. Entertainment purposes only.")

LEG_KEY_PREFIX = "leg_"


def _composer() -> PickComposer:
    if "composer" not in st.session_state:
        st.session_state.composer = PickComposer()
    return st.session_state.composer


def _analysis_client() -> AnalysisClient:
    if "analysis_client" not in st.session_state:
        st.session_state.analysis_client = AnalysisClient()
    return st.session_state.analysis_client


def _request_analysis() -> None:
    # Set in the click callback, before the rerun that sends the request.
    st.session_state.pending = True


def _reset_leg_widgets() -> None:
    for key in [k for k in st.session_state if str(k).startswith(LEG_KEY_PREFIX)]:
        del st.session_state[key]


def render_pick_form(composer: PickComposer, busy: bool) -> None:
    pick = composer.pick
    col_home, col_away = st.columns(2)
    home = col_home.text_input("Home team", value=pick.home_team, placeholder="e.g. Real Madrid", disabled=busy)
    away = col_away.text_input("Away team", value=pick.away_team, placeholder="e.g. Barcelona", disabled=busy)
    composer.set_teams(home, away)

    col_type, col_odds = st.columns(2)
    bet_type = col_type.selectbox(
        "Bet type",
        options=[BetType.SIMPLE, BetType.PARLAY],
        index=0 if pick.bet_type is BetType.SIMPLE else 1,
        format_func=lambda value: "Simple" if value is BetType.SIMPLE else "Parlay",
        disabled=busy,
    )
    if bet_type is not pick.bet_type:
        composer.set_bet_type(bet_type)
        _reset_leg_widgets()

    if pick.bet_type is BetType.SIMPLE:
        odds = col_odds.text_input("Offered odds", value=pick.offered_odds, placeholder="e.g. 1.85", disabled=busy)
        composer.set_offered_odds(odds)

    st.markdown("**Selections**" if pick.bet_type is BetType.PARLAY else "**Selection**")
    for idx, leg in enumerate(list(pick.legs)):
        cols = st.columns([3, 3, 2, 1])
        market = cols[0].text_input(
            "Market", value=leg.market, key=f"{LEG_KEY_PREFIX}market_{idx}",
            placeholder="Over/Under, 1X2, Handicap", disabled=busy,
        )
        selection = cols[1].text_input(
            "Selection", value=leg.selection, key=f"{LEG_KEY_PREFIX}selection_{idx}",
            placeholder="Over 2.5, Home ML", disabled=busy,
        )
        leg_odds = cols[2].text_input(
            "Odds", value=leg.odds, key=f"{LEG_KEY_PREFIX}odds_{idx}", disabled=busy,
        )
        composer.update_leg(idx, market=market, selection=selection, odds=leg_odds)
        if pick.bet_type is BetType.PARLAY and len(pick.legs) > 1:
            if cols[3].button("Remove", key=f"{LEG_KEY_PREFIX}remove_{idx}", disabled=busy):
                composer.remove_leg(idx)
                _reset_leg_widgets()
                st.rerun()

    if pick.bet_type is BetType.PARLAY:
        if st.button("Add selection", disabled=busy):
            composer.add_leg()
            st.rerun()
        col_odds.metric("Combined odds", format_odds_display(composer.effective_odds))

    notes = st.text_area(
        "Optional context",
        value=pick.notes,
        placeholder="Injuries, weather, motivation, market trend...",
        disabled=busy,
    )
    composer.set_notes(notes)

    st.button(
        "Analyze pick",
        key="analyze_pick",
        on_click=_request_analysis,
        type="primary",
        use_container_width=True,
        disabled=busy or not composer.is_valid,
    )


def render_analysis(analysis: Analysis) -> None:
    st.subheader("Analysis")
    cols = st.columns(3)
    cols[0].metric("Recommended stake", f"{analysis.recommended_stake}% bankroll")
    cols[1].metric("Fair odds", analysis.fair_odds)
    cols[2].metric("Verdict", "EV+" if analysis.is_ev_positive else "EV-")
    st.info(analysis.value_verdict)
    st.write(analysis.executive_summary)
    for title, items in (
        ("EV opportunities", analysis.ev_opportunities),
        ("Advanced signals", analysis.advanced_signals),
        ("Action plan", analysis.action_plan),
    ):
        st.markdown(f"**{title}**")
        st.markdown("\n".join(f"{idx}. {item}" for idx, item in enumerate(items, start=1)))


# ----- Page Layout ------------------------------------------------------------
composer = _composer()
st.session_state.setdefault("pending", False)
busy = st.session_state.pending

if "flash" in st.session_state:
    message, icon = st.session_state.pop("flash")
    st.toast(message, icon=icon)

col_form, col_result = st.columns([0.55, 0.45], gap="large")

with col_form:
    render_pick_form(composer, busy)

with col_result:
    if busy:
        st.session_state.pop("analysis", None)
        try:
            with st.spinner("Analyzing pick..."):
                result = composer.submit(_analysis_client().analyze)
        except (AnalysisRequestError, PickValidationError) as exc:
            st.session_state.flash = (f"Analysis failed: {exc}", "⚠️")
        else:
            if result is not None:
                st.session_state.analysis = result
                st.session_state.flash = ("Analysis complete.", "✅")
        finally:
            st.session_state.pending = False
        st.rerun()
    if "analysis" in st.session_state:
        render_analysis(st.session_state.analysis)
    else:
        st.caption("Results appear here once the analysis completes.")
