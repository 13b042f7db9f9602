"""
Chimera Risk Exchange UI
========================

Streamlit demo of privacy-preserving risk queries between two exchanges.

Run with:
    streamlit run chimera_ui/app.py
"""

import streamlit as st
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from chimera_ui.pages import home, risk_query, partner_data, settings


# Page configuration
st.set_page_config(
    page_title="Chimera - Partner Risk Exchange",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="expanded",
)


# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2rem;
        font-weight: normal;
        color: #333;
        text-align: left;
        margin-bottom: 1.5rem;
    }
    .sub-header {
        font-size: 1rem;
        color: #555;
        text-align: left;
        margin-bottom: 1.5rem;
    }
</style>
""", unsafe_allow_html=True)


# Navigation
PAGES = {
    "Home": home,
    "Risk Query": risk_query,
    "Partner Data": partner_data,
    "Settings": settings,
}


def main():
    """Main application entry point."""

    st.sidebar.title("Chimera")
    st.sidebar.markdown("---")

    selection = st.sidebar.radio(
        "Navigation",
        list(PAGES.keys()),
        label_visibility="collapsed",
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown("### System Status")

    if st.session_state.get("pipeline") is not None:
        st.sidebar.success("Pipeline: Ready")
        stats = st.session_state.pipeline.get_statistics()
        st.sidebar.metric("Partner", stats.get("provider", "N/A"))
        st.sidebar.metric("Records", stats.get("total_records", 0))
    else:
        st.sidebar.warning("Pipeline: Not initialised")
        st.sidebar.info("Go to Settings to configure")

    st.sidebar.markdown("---")
    st.sidebar.markdown("<small>Chimera v1.0.0</small>", unsafe_allow_html=True)

    page = PAGES[selection]
    page.render()


if __name__ == "__main__":
    main()
