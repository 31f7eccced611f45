"""Party Optimizer - Streamlit party builder.

Single page with three sections:
- Home: d20 roll and a short introduction
- Party: create, edit and delete the party
- Adventures: pick an encounter and the acting character, then analyze

All state lives in ``st.session_state``; nothing is persisted.
"""

from __future__ import annotations

import streamlit as st

from party_optimizer.ai.tactician import get_tactician
from party_optimizer.core.config import get_settings
from party_optimizer.core.constants import MAX_STAT_POINTS
from party_optimizer.core.exceptions import AnalysisError, ValidationError
from party_optimizer.core.logging import configure_logging, get_logger
from party_optimizer.engine.dice import roll_d20
from party_optimizer.engine.orchestrator import PartyAnalyzer
from party_optimizer.models.analysis import AnalysisResult
from party_optimizer.models.classes import CLASS_PROFILES, change_class, create_character, get_class_profile
from party_optimizer.models.encounters import ENCOUNTER_CATALOG
from party_optimizer.models.enums import Attribute, CharacterClass
from party_optimizer.models.party import Character, Encounter, Party


logger = get_logger(__name__)

settings = get_settings()


# =============================================================================
# Page Configuration
# =============================================================================


st.set_page_config(
    page_title=settings.ui.page_title,
    page_icon="🐉",
    layout="wide",
)


@st.cache_resource
def get_analyzer() -> PartyAnalyzer:
    """Build the analyzer once per Streamlit server."""
    configure_logging(settings)
    return PartyAnalyzer(
        tactician=get_tactician(settings),
        default_success_chance=settings.model.default_success_chance,
    )


def init_state() -> None:
    """Seed session state on first run."""
    st.session_state.setdefault("party", None)
    st.session_state.setdefault("party_name", "")
    st.session_state.setdefault("members", [create_character()])
    st.session_state.setdefault("editing", True)
    st.session_state.setdefault("analysis", None)
    st.session_state.setdefault("last_roll", None)


# =============================================================================
# Home
# =============================================================================


def render_home() -> None:
    st.markdown("# 🐉 Party Optimizer")
    st.caption("Build a party, choose an adventure, and see how your heroes would fare.")

    if st.button("🎲 Roll the d20", key="roll_d20"):
        st.session_state.last_roll = roll_d20()

    roll = st.session_state.last_roll
    if roll is not None:
        st.metric("You rolled", roll.value)
        if roll.is_critical:
            st.success("Natural 20!")
        elif roll.is_fumble:
            st.error("Natural 1...")


# =============================================================================
# Party Editor
# =============================================================================


def _stat_key(index: int, attribute: Attribute) -> str:
    return f"member_{index}_{attribute.value}"


def _on_class_change(index: int) -> None:
    members: list[Character] = st.session_state.members
    new_class = st.session_state[f"member_{index}_class"]
    members[index] = change_class(members[index], new_class)
    # Stat inputs are keyed widgets, so they have to be reset explicitly.
    for attribute in Attribute:
        st.session_state[_stat_key(index, attribute)] = members[index].get(attribute)


def _clear_member_widgets() -> None:
    for key in [k for k in st.session_state if str(k).startswith("member_")]:
        del st.session_state[key]


def _on_member_count_change() -> None:
    count = st.session_state.member_count
    members: list[Character] = st.session_state.members
    st.session_state.members = [
        members[i] if i < len(members) else create_character() for i in range(count)
    ]


def render_class_card(character_class: CharacterClass) -> None:
    profile = get_class_profile(character_class)
    badge = " · Beginner friendly" if profile.beginner_friendly else ""
    st.markdown(f"**{profile.name.value}**{badge}")
    st.markdown("Strengths: " + ", ".join(profile.strengths))
    st.markdown("Weaknesses: " + ", ".join(profile.weaknesses))
    st.caption(profile.tip)


def render_member_editor(index: int, character: Character) -> Character:
    """Render one member's inputs and return the edited character."""
    with st.container(border=True):
        name = st.text_input("Name", value=character.name, key=f"member_{index}_name")
        class_names = [c.value for c in CLASS_PROFILES]
        current_class = character.type if character.type in class_names else CharacterClass.MAGE.value
        st.selectbox(
            "Class",
            class_names,
            index=class_names.index(current_class),
            key=f"member_{index}_class",
            on_change=_on_class_change,
            args=(index,),
        )
        render_class_card(CharacterClass(current_class))

        stats: dict[str, int] = {}
        columns = st.columns(3)
        for position, attribute in enumerate(Attribute):
            key = _stat_key(index, attribute)
            st.session_state.setdefault(key, character.get(attribute))
            with columns[position % 3]:
                stats[attribute.value] = int(
                    st.number_input(attribute.label, min_value=0, max_value=MAX_STAT_POINTS, step=1, key=key)
                )

        edited = Character(name=name, type=current_class, **stats)
        if edited.within_point_cap:
            st.caption(f"Points: {edited.total_points}/{MAX_STAT_POINTS}")
        else:
            st.error(f"Points: {edited.total_points}/{MAX_STAT_POINTS} (over the limit)")
        return edited


def render_party() -> None:
    st.markdown("## Your Party")
    party: Party | None = st.session_state.party

    if party is not None and not st.session_state.editing:
        st.markdown(f"### {party.name}")
        for member in party.members:
            st.markdown(f"- **{member.name}** ({member.type}), {member.total_points} points")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Edit Party", key="edit_party"):
                st.session_state.editing = True
                st.rerun()
        with col2:
            if st.button("Delete Party", key="delete_party", type="primary"):
                _clear_member_widgets()
                st.session_state.party = None
                st.session_state.party_name = ""
                st.session_state.members = [create_character()]
                st.session_state.analysis = None
                st.session_state.editing = True
                st.rerun()
        return

    st.text_input("Party name", key="party_name")
    st.number_input(
        "Members",
        min_value=1,
        max_value=settings.ui.max_party_size,
        value=len(st.session_state.members),
        key="member_count",
        on_change=_on_member_count_change,
    )

    edited = [
        render_member_editor(index, member)
        for index, member in enumerate(st.session_state.members)
    ]
    st.session_state.members = edited

    if st.button("Save Party", key="save_party"):
        candidate = Party(name=st.session_state.party_name, members=edited)
        try:
            candidate.validate_for_analysis()
        except ValidationError as exc:
            st.warning(exc.message)
            return
        st.session_state.party = candidate
        st.session_state.analysis = None
        st.session_state.editing = False
        st.rerun()


# =============================================================================
# Adventures
# =============================================================================


def render_analysis(analysis: AnalysisResult) -> None:
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Party success chance", f"{analysis.party_success_chance}%")
    with col2:
        st.metric("Difficulty", analysis.encounter_difficulty)

    st.markdown("### Heroes")
    for rate in analysis.individual_success_rates:
        st.markdown(f"**{rate.character}**: {rate.success_rate}%, {rate.recommended_action}")
        st.progress(rate.success_rate / 100)

    st.markdown("### Strategy")
    for line in analysis.strategic_recommendations:
        st.markdown(f"- {line}")

    if analysis.current_turn_actions:
        st.markdown("### This Turn")
        for action in analysis.current_turn_actions:
            st.markdown(f"- {action}")


def render_adventures() -> None:
    st.markdown("## Choose Your Adventure")
    party: Party | None = st.session_state.party
    if party is None:
        st.info("You must create a party before starting an adventure!")
        return

    labels = [f"{p.event_type.value} ({p.difficulty.value})" for p in ENCOUNTER_CATALOG]
    choice = st.radio("Adventure", labels, key="adventure")
    profile = ENCOUNTER_CATALOG[labels.index(choice)]
    st.caption(f"{profile.description} Enemy: {profile.enemy}.")

    current = st.selectbox("Whose turn is it?", [m.name for m in party.members], key="current_turn")

    if st.button("Analyze", key="analyze", type="primary"):
        try:
            st.session_state.analysis = get_analyzer().analyze(
                party.members,
                Encounter(event_type=profile.event_type.value),
                current,
            )
        except AnalysisError as exc:
            logger.error("Analysis failed in UI", error=exc.message)
            st.error("Failed to analyze party composition")

    if st.session_state.analysis is not None:
        render_analysis(st.session_state.analysis)


def main() -> None:
    """Render the app."""
    init_state()
    section = st.sidebar.radio("Go to", ["Home", "Party", "Adventures"], key="section")
    if section == "Home":
        render_home()
    elif section == "Party":
        render_party()
    else:
        render_adventures()


main()
