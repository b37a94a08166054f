# File: components/dilution_widgets.py

import streamlit as st

from agent.agent_tools.calculator import DilutionResult, Proportions

HELPER_TEXT = "New strength % is always relative to pure raw material (100%)."


def render_helper_banner(on_dismiss):
    st.info(HELPER_TEXT, icon="💡")
    st.button("Got it, hide this", key="helper_dismiss_button", on_click=on_dismiss)


def render_results(result: DilutionResult):
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Material Needed 🧪", f"{result.material_mass:.2f} g")
    with col2:
        st.metric("Solvent Needed 🍾", f"{result.solvent_mass:.2f} g")


def render_proportion_bar(props: Proportions):
    """Material share of the finished volume; the remainder is solvent."""
    st.progress(
        int(round(props.material_percent)),
        text=f"Material {props.material_percent:.0f}% • Solvent {props.solvent_percent:.0f}%",
    )
