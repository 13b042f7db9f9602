"""
Home Page
=========

Landing page with system overview.
"""

import streamlit as st

from chimera_core.data import DEMO_USERS


def render():
    """Render the home page."""

    st.markdown(
        '<h1 class="main-header">Chimera Partner Risk Exchange</h1>',
        unsafe_allow_html=True,
    )

    st.markdown(
        '<p class="sub-header">'
        'Query a partner exchange for risk flags on a user without either side '
        'exposing its internal investigation data.'
        '</p>',
        unsafe_allow_html=True,
    )

    st.subheader("Quick Start")

    st.markdown("""
    1. **Initialise the Pipeline**: Go to Settings and load a configuration.
    2. **Run a Query**: Enter any combination of email, phone, country and document.
    3. **Compare Views**: Open Partner Data to see what the partner keeps private.
    """)

    st.subheader("Demo Users")

    for email, description in DEMO_USERS.items():
        col1, col2 = st.columns([2, 5])
        with col1:
            st.code(email, language=None)
        with col2:
            st.write(description)

    st.markdown("---")

    st.subheader("Match Outcomes")

    outcomes = [
        ("Full / Clean Match", "Every supplied field matches one partner record"),
        ("Partial Match", "Some supplied fields match, none contradict"),
        ("Conflicted", "One record matches but another supplied field disagrees"),
        ("Ambiguous", "Supplied fields belong to different partner records"),
        ("Unmatched", "No partner record shares any supplied field"),
    ]

    for name, desc in outcomes:
        col1, col2 = st.columns([2, 5])
        with col1:
            st.write(f"**{name}**")
        with col2:
            st.write(desc)
