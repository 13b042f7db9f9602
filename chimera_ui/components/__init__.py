"""
UI Components
=============

Reusable Streamlit components for the Chimera UI.
"""

import streamlit as st
from typing import List, Optional, Dict, Any


# Colour and headline for each match quality
QUALITY_STYLES = {
    "UNMATCHED": ("#4CAF50", "#E8F5E9", "No match in partner network"),
    "CLEAN_MATCH": ("#4CAF50", "#E8F5E9", "Known user, no risk flags"),
    "FULL_MATCH": ("#F44336", "#FFEBEE", "Full identity match"),
    "PARTIAL_MATCH": ("#FFC107", "#FFF8E1", "Partial identity match"),
    "CONFLICTED": ("#FF7043", "#FBE9E7", "Conflicting identity attributes"),
    "AMBIGUOUS": ("#8E24AA", "#F3E5F5", "Attributes spread over several records"),
}


def quality_style(quality: str) -> tuple:
    """(colour, background, headline) for a match quality."""
    return QUALITY_STYLES.get(quality, ("#9E9E9E", "#FAFAFA", quality.replace("_", " ").title()))


def result_card(result: Dict[str, Any]) -> None:
    """
    Display the partner-safe result block of a receipt.

    Args:
        result: ``ProofReceipt.result``
    """
    quality = result.get("match_quality", "UNMATCHED")
    color, bg_color, headline = quality_style(quality)

    lines = [f"<strong>Recommendation:</strong> {result.get('recommendation', 'N/A')}"]

    if result.get("matched_fields"):
        lines.append(f"<strong>Matched fields:</strong> {', '.join(result['matched_fields'])}")
    if result.get("conflicting_fields"):
        lines.append(f"<strong>Conflicting fields:</strong> {', '.join(result['conflicting_fields'])}")
    if "candidate_count" in result:
        lines.append(f"<strong>Candidate records:</strong> {result['candidate_count']}")
    if "confidence" in result:
        lines.append(f"<strong>Confidence:</strong> {result['confidence']}")
    if "risk_tags" in result:
        tags = ", ".join(result["risk_tags"]) or "None"
        lines.append(f"<strong>Risk tags:</strong> {tags}")
        lines.append(f"<strong>Flagged:</strong> {result.get('flagged_quarter') or 'N/A'}")
        lines.append(f"<strong>Status:</strong> {result.get('status', 'N/A')}")

    body = "<br>".join(lines)

    st.markdown(f"""
    <div style="
        border: 2px solid {color};
        border-radius: 10px;
        padding: 1rem;
        margin: 0.5rem 0;
        background-color: {bg_color};
    ">
        <h4 style="margin: 0; color: {color};">{headline}</h4>
        <p style="margin: 0.5rem 0 0 0;">{body}</p>
    </div>
    """, unsafe_allow_html=True)


def metric_card(
    label: str,
    value: Any,
    delta: Optional[str] = None,
    help_text: Optional[str] = None,
) -> None:
    """
    Display a metric card.

    Args:
        label: Metric label
        value: Metric value
        delta: Change indicator
        help_text: Help text
    """
    st.markdown(f"""
    <div style="
        background-color: #f0f2f6;
        border-radius: 10px;
        padding: 1rem;
        text-align: center;
    ">
        <p style="margin: 0; color: #666; font-size: 0.9rem;">{label}</p>
        <h2 style="margin: 0.5rem 0; color: #1E88E5;">{value}</h2>
        {f'<p style="margin: 0; color: #4CAF50;">{delta}</p>' if delta else ''}
    </div>
    """, unsafe_allow_html=True)

    if help_text:
        st.caption(help_text)


def tag_list(tags: List[str]) -> None:
    """Display risk tags as inline badges."""
    if not tags:
        st.write("No risk tags")
        return

    badges = " ".join(
        f'<span style="background-color: #FFEBEE; color: #C62828; '
        f'border-radius: 4px; padding: 0.1rem 0.4rem; margin-right: 0.25rem;">{tag}</span>'
        for tag in tags
    )
    st.markdown(badges, unsafe_allow_html=True)
