#!/usr/bin/env python3
"""
Data Processor Scan - Browser Interface

Upload a DPA, processing schedule or contract clauses and check them
against Article 28(3) of the UK GDPR.

Usage:
    streamlit run app.py

Environment:
    GEMINI_API_KEY              Gemini API key (API_KEY also accepted)
    GEMINI_MODEL                Model override (default gemini-2.5-flash)
    PROCESSOR_SCAN_LOG_LEVEL    Logging level (default INFO)
"""

import streamlit as st

from processor_scan.agent import AppState, ComplianceAgent
from processor_scan.config import get_config, setup_logging
from processor_scan.ui.components import (
    render_document_type_select,
    render_input_panel,
    render_report,
)


# =============================================================================
# Setup
# =============================================================================

st.set_page_config(
    page_title="Data Processor Scan",
    page_icon="⚖️",
    layout="wide",
)


@st.cache_resource
def get_agent() -> ComplianceAgent:
    """One pipeline per server process; sessions share its HTTP client."""
    config = get_config()
    setup_logging(config.log_level)
    return ComplianceAgent(config=config)


def get_controller():
    """One controller per browser session."""
    ss = st.session_state
    if "controller" not in ss:
        ss["controller"] = get_agent().new_session()
    return ss["controller"]


# =============================================================================
# Page
# =============================================================================

controller = get_controller()

header_col, reset_col = st.columns([5, 1])
with header_col:
    st.markdown("### ⚖️ Data Processor Scan")
with reset_col:
    if controller.report is not None and st.button("🔄 Start Over"):
        controller.reset()
        st.rerun()

if controller.state is AppState.READY and controller.report is not None:
    render_report(controller.report, controller)
else:
    st.title("Controller-Processor Contract Analysis")
    st.write(
        "Upload a DPA, processing schedule, or contract clauses to verify "
        "compliance with Article 28(3) of the UK GDPR."
    )
    render_document_type_select(controller)
    render_input_panel(controller)
