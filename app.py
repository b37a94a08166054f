# app.py - Main Streamlit entrypoint: the dilution calculator page.
# # Loads env, restores the last session, recomputes on every rerun and saves what changed.
import streamlit as st
from dotenv import load_dotenv

load_dotenv()  # # picks up DATA_DIR / SESSION_FILE from .env

from agent.agent_tools.calculator import (
    EXCEEDS_CURRENT_MESSAGE,
    PRESETS_DILUTE,
    PRESETS_RAW,
    DilutionInput,
    Mode,
    apply_preset,
    compute,
    exceeds_current,
    proportions,
)
from components.dilution_widgets import render_helper_banner, render_proportion_bar, render_results
from db.session_store import TEXT_KEYS, PersistedSession, SessionStore

st.set_page_config(
    page_title="Dilution Helper",
    page_icon="🧪",
    layout="centered",
)

store = SessionStore()

# --- State Management ---
if "session" not in st.session_state:
    restored = store.load()
    st.session_state.session = restored
    st.session_state.helper_visible = restored.helper_visible
    st.session_state.mode = Mode.DILUTE.value
    st.session_state.last_saved = None

saved = st.session_state.session
# # Streamlit drops state for widgets that were not drawn last run (the other mode's strength field)
for key in TEXT_KEYS:
    if key not in st.session_state:
        st.session_state[key] = getattr(saved, key)


def _hide_helper():
    st.session_state.helper_visible = False


def _use_preset(preset):
    mode = Mode(st.session_state.mode)
    updated = apply_preset(st.session_state.session, mode, preset)
    for key in TEXT_KEYS:
        st.session_state[key] = getattr(updated, key)


# # --- Header
st.title("Dilution Helper")
st.caption("How much concentrate and how much solvent for a finished amount.")

if st.session_state.helper_visible:
    render_helper_banner(_hide_helper)

mode = Mode(st.radio(
    "Starting from",
    [Mode.DILUTE.value, Mode.RAW.value],
    format_func=lambda m: "Existing stock (dilute)" if m == Mode.DILUTE.value else "Pure material (raw)",
    horizontal=True,
    key="mode",
))

presets = PRESETS_RAW if mode == Mode.RAW else PRESETS_DILUTE
cols = st.columns(len(presets))
for i, preset in enumerate(presets):
    label = f"{preset}%" if mode == Mode.RAW else f"{preset[0]}% → {preset[1]}%"
    cols[i].button(label, key=f"preset_{mode.value}_{i}", on_click=_use_preset, args=(preset,))

# --- Inputs ---
col1, col2, col3 = st.columns(3)
strength_key = "material" if mode == Mode.RAW else "existing"
with col1:
    st.text_input("Current Strength (%)", key=strength_key)
with col2:
    st.text_input("New Strength (%)", key="target")
with col3:
    st.text_input("Total Amount (ml)", key="volume")

session = PersistedSession(
    volume=st.session_state.volume,
    material=st.session_state.get("material", saved.material),
    existing=st.session_state.get("existing", saved.existing),
    target=st.session_state.target,
    helper_visible=st.session_state.helper_visible,
)
if st.session_state.last_saved != (session, mode):
    store.save(session, mode)
    st.session_state.session = session
    st.session_state.last_saved = (session, mode)

# --- Results ---
inp = DilutionInput(
    mode=mode,
    current_strength_text=session.current_strength(mode),
    target_strength_text=session.target,
    volume_text=session.volume,
)
if exceeds_current(inp):
    st.warning(EXCEEDS_CURRENT_MESSAGE)

result = compute(inp)
render_results(result)
render_proportion_bar(proportions(session.volume, result.material_mass))
