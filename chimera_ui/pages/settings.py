"""
Settings Page
=============

Configure and initialise the Chimera pipeline.
"""

import streamlit as st
from datetime import datetime, timedelta, timezone
from pathlib import Path
import yaml


def render():
    """Render the settings page."""

    st.title("Settings")
    st.markdown("Configure the Chimera risk query pipeline.")

    st.markdown("---")

    st.subheader("Pipeline Initialisation")

    col1, col2 = st.columns([2, 1])

    with col1:
        config_source = st.radio(
            "Configuration Source",
            options=["Default", "Custom Config File", "Manual"],
            horizontal=True,
        )

        if config_source == "Custom Config File":
            config_path = st.text_input(
                "Config File Path",
                placeholder="/path/to/config.yaml",
                help="Path to YAML configuration file",
            )
        else:
            config_path = None

    if config_source == "Manual":
        st.subheader("Manual Configuration")

        tab1, tab2, tab3 = st.tabs(["Matching", "Provider", "Compliance"])

        with tab1:
            min_full = st.slider(
                "Fields Required for Full Match",
                min_value=1,
                max_value=2,
                value=2,
            )
            bypass = st.checkbox(
                "Single-field queries are never ambiguous",
                value=True,
            )
            case_insensitive = st.checkbox("Case-insensitive country", value=True)

        with tab2:
            provider_name = st.text_input("Provider Name", value="MapleCEX")
            records_path = st.text_input(
                "Record Table Path",
                value="",
                help="JSON/YAML record table; leave empty for the reference data",
            )

        with tab3:
            comp_enabled = st.checkbox("Enable Audit Log", value=True)
            comp_anonymize = st.checkbox("Anonymize User IDs", value=False)
            comp_retention_days = st.number_input(
                "Log Retention (days)",
                min_value=1,
                max_value=3650,
                value=365,
            )

        st.session_state.manual_config = {
            "matching": {
                "min_full_match_fields": min_full,
                "single_field_bypass_ambiguity": bypass,
                "case_insensitive_country": case_insensitive,
            },
            "provider": {
                "name": provider_name,
                "records_path": records_path or None,
            },
            "compliance": {
                "enabled": comp_enabled,
                "anonymize": comp_anonymize,
                "log_retention_days": int(comp_retention_days),
            },
        }

    with col2:
        st.write("")
        st.write("")

        if st.button("Initialise Pipeline", type="primary"):
            with st.spinner("Initialising pipeline..."):
                try:
                    from chimera_core.config import SystemConfig
                    from chimera_core.pipeline import RiskQueryPipeline

                    if config_path and Path(config_path).exists():
                        pipeline = RiskQueryPipeline.from_config(config_path)
                    elif config_source == "Manual":
                        config = SystemConfig.model_validate(st.session_state.manual_config)
                        pipeline = RiskQueryPipeline(config)
                    else:
                        pipeline = RiskQueryPipeline(SystemConfig())

                    st.session_state.pipeline = pipeline
                    st.session_state.last_receipt = None
                    st.session_state.audit_export = None
                    st.success("Pipeline initialised")
                    st.json(pipeline.get_statistics())

                except (ValueError, OSError) as e:
                    st.error(f"Failed to initialise pipeline: {e}")

    st.markdown("---")

    st.subheader("Current Status")

    if st.session_state.get("pipeline") is not None:
        pipeline = st.session_state.pipeline
        stats = pipeline.get_statistics()

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Partner", stats["provider"])
        with col2:
            st.metric("Records", stats["total_records"])
        with col3:
            st.metric("Audit Log", "On" if stats["audit_enabled"] else "Off")

        with st.expander("View Full Statistics"):
            st.json(stats)

        st.markdown("**Export Configuration**")
        yaml_str = yaml.dump(pipeline.config.model_dump(), default_flow_style=False, sort_keys=False)
        st.download_button(
            "Download YAML",
            data=yaml_str,
            file_name="chimera_config.yaml",
            mime="text/yaml",
        )

        if stats["audit_enabled"]:
            st.markdown("**Export Audit Log**")
            col1, col2 = st.columns(2)
            with col1:
                days = st.number_input("Days", min_value=1, max_value=365, value=30)
            with col2:
                export_format = st.selectbox("Format", options=["json", "csv"])

            if st.button("Prepare Export"):
                end = datetime.now(timezone.utc)
                st.session_state.audit_export = (
                    export_format,
                    pipeline.export_audit_log(end - timedelta(days=int(days)), end, format=export_format),
                )

            if st.session_state.get("audit_export"):
                export_format, data = st.session_state.audit_export
                st.download_button(
                    "Download Audit Log",
                    data=data,
                    file_name=f"chimera_audit.{export_format}",
                    mime="text/csv" if export_format == "csv" else "application/json",
                )
    else:
        st.info("Pipeline not initialised. Use the section above to initialise.")
