"""
Partner Data Page
=================

Side by side: what the querying exchange sees and what the partner keeps.
"""

import streamlit as st

from chimera_ui.components import result_card, tag_list


def render():
    """Render the partner data page."""

    st.title("Partner Data")

    if st.session_state.get("pipeline") is None:
        st.warning("Pipeline not initialised. Please go to Settings first.")
        return

    pipeline = st.session_state.pipeline
    receipt = st.session_state.get("last_receipt")

    if receipt is None:
        st.info("Run a query on the Risk Query page first.")
        return

    show_internal = st.toggle(
        "Show Partner's Internal Data",
        value=pipeline.config.ui.show_internal_by_default,
    )

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("What you receive")
        result_card(receipt.result)
        st.json(receipt.partner_view())

    with col2:
        st.subheader(f"{receipt.provider} internal record")
        if not show_internal:
            st.markdown("🔒 Internal data is never shared with the querying exchange.")
            return

        internal = pipeline.view_internal(receipt)["internal"]

        if "note" in internal:
            st.write(internal["note"])
        if "candidate_record_ids" in internal:
            st.write("**Candidate records:**")
            for record_id in internal["candidate_record_ids"]:
                record = pipeline.table.get(record_id)
                with st.expander(record.internal_case_id or record_id[:16]):
                    tag_list(record.sorted_tags)
                    st.json(record.to_dict())
        if "record_id" in internal:
            st.write(f"**Case:** {internal.get('internal_case_id') or 'N/A'}")
            st.write(f"**Officer:** {internal.get('compliance_officer') or 'N/A'}")
            st.write(f"**Flagged:** {internal.get('exact_flagged_date') or 'N/A'}")
            st.write(f"**Notes:** {internal.get('investigation_notes') or 'N/A'}")
            st.write("**Wallets:**")
            for wallet in internal.get("wallet_addresses", []):
                st.code(wallet, language=None)

        with st.expander("Original query"):
            st.json(internal.get("original_query", {}))
