"""
Streamlit view components for Data Processor Scan.

Pure view layer: components read the SessionController and call its
actions. Widget state (active tab, expanded rows) stays in Streamlit.
"""

import streamlit as st

from processor_scan.agent.controller import AppState, SessionController
from processor_scan.models.schemas import (
    ComplianceReport,
    ComplianceStatus,
    DocumentType,
    OverallAssessment,
    RequirementAnalysis,
    RiskLevel,
    severity_class,
)
from processor_scan.tools.document_loader import DocumentLoader


# =============================================================================
# Status Formatting
# =============================================================================

SEVERITY_COLORS = {
    "compliant": "green",
    "partial": "orange",
    "non-compliant": "red",
}

SEVERITY_ICONS = {
    "compliant": "🛡️✅",
    "partial": "🛡️❔",
    "non-compliant": "🛡️⚠️",
}

RISK_COLORS = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "orange",
    RiskLevel.HIGH: "red",
}


def status_badge(status: ComplianceStatus) -> str:
    """Colored markdown badge for a status or rating."""
    severity = severity_class(status)
    return f":{SEVERITY_COLORS[severity]}[{SEVERITY_ICONS[severity]} **{status.value}**]"


# =============================================================================
# Input Components
# =============================================================================

def render_document_type_select(controller: SessionController):
    """Document type picker; the choice is sent with the next analysis."""
    options = list(DocumentType)
    selected = st.selectbox(
        "Document type",
        options,
        index=options.index(controller.document_type),
        format_func=lambda t: t.value,
        disabled=controller.is_loading,
    )
    controller.select_document_type(selected)


def render_input_panel(controller: SessionController):
    """Upload / paste tabs. Reruns the page once an analysis has finished."""
    upload_tab, paste_tab = st.tabs(["Upload Document", "Paste Text"])
    disabled = not controller.can_submit
    
    with upload_tab:
        uploaded = st.file_uploader(
            "Drag & drop or click to upload",
            type=list(DocumentLoader.get_supported_formats().values()),
            help="Supports PDF, DOCX, TXT",
            disabled=disabled,
        )
        if st.button("Analyze Document", disabled=disabled or uploaded is None):
            with st.spinner("Analysing Contract... The \"AI Lawyer\" is reviewing your clauses against Art 28."):
                ran = controller.submit_file(uploaded.name, uploaded.getvalue(), uploaded.type)
            if ran:
                st.rerun()
    
    with paste_tab:
        text = st.text_area(
            "Contract text",
            height=260,
            placeholder="Paste the relevant contract clauses here...",
            disabled=disabled,
        )
        if st.button("Analyze Text", disabled=disabled or not text.strip()):
            with st.spinner("Analysing Contract... The \"AI Lawyer\" is reviewing your clauses against Art 28."):
                ran = controller.submit_text(text)
            if ran:
                st.rerun()
    
    if controller.input_error:
        st.error(controller.input_error, icon="✖️")
    
    if controller.state is AppState.ERROR and controller.error:
        st.error(controller.error)


# =============================================================================
# Report Components
# =============================================================================

def render_assessment_summary(assessment: OverallAssessment, controller: SessionController):
    """Overall rating, summary, strengths and risks, with the export button."""
    with st.container(border=True):
        title_col, export_col = st.columns([4, 1])
        with title_col:
            st.subheader("Overall Assessment")
            st.markdown(status_badge(assessment.rating))
        with export_col:
            export = controller.export_report()
            st.download_button(
                "Export Report",
                data=export.content,
                file_name=export.filename,
                mime=export.mime_type,
                icon="⬇️",
            )
        
        st.write(assessment.summary)
        
        strengths_col, risks_col = st.columns(2)
        with strengths_col:
            st.markdown(":green[**✅ KEY STRENGTHS**]")
            for strength in assessment.key_strengths:
                st.markdown(f"- {strength}")
        with risks_col:
            st.markdown(":orange[**⚠️ KEY RISKS & GAPS**]")
            for risk in assessment.key_risks:
                st.markdown(f"- {risk}")


def render_requirement_row(req: RequirementAnalysis):
    """One collapsible checklist row."""
    label = f"{req.name} ({req.article_reference}) | {req.status.value}"
    
    with st.expander(label, expanded=False):
        st.markdown(status_badge(req.status))
        analysis_col, action_col = st.columns(2)
        
        with analysis_col:
            st.caption("ANALYSIS")
            st.write(req.analysis)
            
            if req.excerpt:
                st.caption("IDENTIFIED CLAUSE")
                st.markdown(f'> *"{req.excerpt}"*')
                st.caption(f"Ref: {req.clause_reference or 'N/A'}")
        
        with action_col:
            st.markdown(f":{RISK_COLORS[req.risk_level]}[**Risk Level: {req.risk_level.value}**]")
            
            if req.needs_remediation:
                st.caption("✨ SUGGESTED IMPROVEMENT")
                st.info(req.suggested_improvement or "No specific suggestion provided.")


def render_report(report: ComplianceReport, controller: SessionController):
    """Full results view."""
    if st.button("← Back to Upload"):
        controller.reset()
        st.rerun()
    
    render_assessment_summary(report.overall_assessment, controller)
    
    st.subheader("Requirements")
    for req in report.requirements:
        render_requirement_row(req)
