"""
Risk Query Page
===============

Submit a partial identity to the partner exchange and show the receipt.
"""

import time

import streamlit as st

from chimera_ui.components import result_card


def render():
    """Render the risk query page."""

    st.title("Risk Query")
    st.markdown(
        "Fill in any fields you know. Only a hash of the query and the "
        "partner-safe result cross the exchange boundary."
    )

    if st.session_state.get("pipeline") is None:
        st.warning("Pipeline not initialised. Please go to Settings first.")
        return

    pipeline = st.session_state.pipeline

    st.markdown("---")

    with st.form("risk_query"):
        col1, col2 = st.columns(2)

        with col1:
            email = st.text_input("Email", placeholder="alex.chen@gmail.com")
            phone = st.text_input("Phone", placeholder="+1-555-0123")
            country = st.text_input("Country", placeholder="United States")

        with col2:
            document_type = st.selectbox(
                "Document Type",
                options=["", "Passport", "National_ID", "Driver_License"],
            )
            document_number = st.text_input("Document Number", placeholder="US123456789")

        submitted = st.form_submit_button("Check User", type="primary")

    if submitted:
        query = {
            "email": email,
            "phone": phone,
            "country": country,
            "document_type": document_type,
            "document_number": document_number,
        }

        with st.spinner("Querying partner..."):
            latency = pipeline.config.ui.simulated_latency_ms
            if latency:
                time.sleep(latency / 1000)
            receipt = pipeline.query(query)

        st.session_state.last_receipt = receipt

    receipt = st.session_state.get("last_receipt")
    if receipt is None:
        return

    st.subheader("Result")
    result_card(receipt.result)

    show_technical = st.checkbox("Show technical details")
    if show_technical:
        col1, col2 = st.columns(2)
        with col1:
            st.write(f"**Provider:** {receipt.provider}")
            st.write(f"**Query ID:** {receipt.query_id}")
            st.write(f"**Timestamp:** {receipt.timestamp}")
        with col2:
            st.write("**Query hash:**")
            st.code(receipt.query_hash, language=None)
            st.write("**Signature:**")
            st.code(receipt.signature, language=None)
            if receipt.verify_signature():
                st.success("Signature matches receipt content")
            else:
                st.error("Signature does not match receipt content")

        with st.expander("Receipt JSON"):
            st.json(receipt.partner_view())
