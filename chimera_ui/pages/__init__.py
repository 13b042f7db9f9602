"""
UI Pages
========

Streamlit pages for the Chimera UI.
"""

from chimera_ui.pages import home, risk_query, partner_data, settings

__all__ = [
    "home",
    "risk_query",
    "partner_data",
    "settings",
]
