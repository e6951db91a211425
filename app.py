"""
BAR-latro Web App
Streamlit table for playing rounds against the score goal.
"""

import random

import streamlit as st

from barlatro.campaign import Campaign
from barlatro.engine.game import RoundOutcome
from barlatro.presets import PRESETS

# Page config
st.set_page_config(
    page_title="BAR-latro",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 BAR-latro")
st.markdown("*Poker hands against the house goal*")

# Sidebar for settings
st.sidebar.header("Settings")

preset_options = list(PRESETS.keys())
selected_preset = st.sidebar.selectbox(
    "Preset",
    options=preset_options,
    format_func=lambda x: PRESETS[x].name
)
st.sidebar.markdown(f"*{PRESETS[selected_preset].description}*")
seed = st.sidebar.number_input("Seed", min_value=0, value=0, step=1)


def new_campaign() -> Campaign:
    campaign = Campaign.from_preset(selected_preset, rng=random.Random(int(seed) or None))
    campaign.start_next_round()
    campaign.deal()
    return campaign


if st.sidebar.button("🔄 New Game", use_container_width=True) or "campaign" not in st.session_state:
    st.session_state.campaign = new_campaign()
    st.session_state.message = None

campaign: Campaign = st.session_state.campaign
session = campaign.session
stats = session.get_stats()

# Top-level metrics
col1, col2, col3, col4, col5 = st.columns(5)
with col1:
    st.metric("Round", f"{campaign.round_number} ({campaign.difficulty_for(campaign.round_number)})")
with col2:
    st.metric("Score", f"{stats.score:,} / {stats.goal:,}")
with col3:
    st.metric("Hands Left", stats.hands_remaining)
with col4:
    st.metric("Discards Left", stats.discards_remaining)
with col5:
    st.metric("Deck", f"{stats.deck_size} (discard {stats.discard_size})")

st.progress(min(1.0, stats.score / stats.goal) if stats.goal else 0.0)

if st.session_state.get("message"):
    st.info(st.session_state.message)

st.divider()

# Hand and selection
st.subheader(f"🂠 Hand ({stats.hand_size}/{stats.max_hand_size})")
hand_cards = list(session.hand.cards)
selected = st.multiselect(
    "Select up to 5 cards",
    options=list(range(len(hand_cards))),
    format_func=lambda i: str(hand_cards[i]),
    max_selections=session.config.max_selection,
)
selection = [hand_cards[i] for i in selected]

if selection:
    evaluation, preview = session.preview(selection)
    st.markdown(f"**{evaluation.hand_rank.label}** - {evaluation.description}  \n"
                f"Scoring cards: {', '.join(str(c) for c in evaluation.cards)}  \n"
                f"Points: `{preview.formatted}`")

col1, col2, col3, col4 = st.columns(4)
with col1:
    if st.button("▶️ Play Hand", disabled=not (selection and stats.can_play), use_container_width=True):
        result = campaign.play(selection)
        if result.accepted:
            st.session_state.message = (f"{result.evaluation.hand_rank.label}: "
                                        f"{result.score.formatted}")
        else:
            st.session_state.message = f"⚠️ {result.reason}"
        st.rerun()
with col2:
    if st.button("🗑️ Discard", disabled=not (selection and stats.can_discard), use_container_width=True):
        result = campaign.discard(selection)
        st.session_state.message = (f"Discarded {len(result.cards)} cards" if result.accepted
                                    else f"⚠️ {result.reason}")
        st.rerun()
with col3:
    if st.button("🃏 Draw", disabled=not stats.can_draw, use_container_width=True):
        drawn = campaign.draw(session.hand.free_slots)
        st.session_state.message = f"Drew {drawn.count} cards"
        st.rerun()
with col4:
    if st.button("🤖 Auto-play Round", disabled=not stats.can_play, use_container_width=True):
        round_result = campaign.auto_play()
        st.session_state.message = (f"Auto-play: {round_result.score:,} / {round_result.goal:,} "
                                    f"in {round_result.hands_used} hands")
        st.rerun()

# Round outcome
if stats.outcome is RoundOutcome.VICTORY:
    st.success("🏆 VICTORY! The goal doubles next round.")
    if st.button("➡️ Next Round", type="primary"):
        campaign.start_next_round()
        campaign.deal()
        st.session_state.message = None
        st.rerun()
elif stats.outcome is RoundOutcome.DEFEAT:
    st.error("💀 DEFEAT - out of hands.")

st.divider()

# History
st.subheader("📜 Hands Played")
df = campaign.history.to_dataframe()
if df.empty:
    st.markdown("*No hands played yet*")
else:
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.line_chart(df.set_index("hand")["score_after"])

# Footer
st.divider()
st.markdown("*Built with the BAR-latro engine*")
