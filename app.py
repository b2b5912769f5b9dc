from __future__ import annotations
import logging
from datetime import date
import streamlit as st
from dotenv import load_dotenv

from audit_crystal.state import AnalysisSession, AppState
from audit_crystal.graph.workflow import build_graph
from audit_crystal.utils import UPLOAD_EXTENSIONS, build_payload, file_from_upload
from audit_crystal.agents.report_renderer import (
    company_label,
    disclosure_counts,
    json_sections,
    render_gap_analysis_md,
    render_materiality_md,
    render_roadmap_md,
    render_scorecard_md,
    render_summary_md,
    report_to_json,
    safe_color,
)


SESSION_KEY = "analysis_session"


def get_session() -> AnalysisSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = AnalysisSession()
    return st.session_state[SESSION_KEY]


@st.cache_resource
def get_runner():
    return build_graph()


def render_upload(session: AnalysisSession) -> None:
    st.title("Audit Crystal")
    st.caption(
        "Instant CSRD readiness check. Upload your sustainability report, PDF, "
        "or paste text to detect gaps against ESRS standards."
    )

    col1, col2 = st.columns(2)
    with col1:
        uploaded = st.file_uploader(
            "Drop PDF or Click to Upload",
            type=UPLOAD_EXTENSIONS,
            accept_multiple_files=False,
            help="Supports PDF, TXT, MD",
        )
    with col2:
        text = st.text_area(
            "Or paste text / URL content",
            placeholder="Paste your sustainability statement or report content here...",
            height=180,
        )

    payload = build_payload(file_from_upload(uploaded), text)
    if st.button("Generate Analysis", type="primary", disabled=not session.can_submit(payload)):
        if session.submit(payload):
            st.rerun()


def render_analyzing(session: AnalysisSession) -> None:
    st.subheader("Analysing Document")
    with st.spinner("Extracting double materiality indicators & gaps..."):
        session.run(get_runner())
    st.rerun()


def render_error(session: AnalysisSession) -> None:
    st.subheader("Analysis Failed")
    st.error(session.error_message)
    if st.button("Try Again"):
        session.reset()
        st.rerun()


def render_report(session: AnalysisSession) -> None:
    report = session.report_data

    nav_title, nav_json, nav_reset = st.columns([4, 1, 1])
    nav_title.markdown("**Audit Crystal**")
    show_json = nav_json.toggle("View JSON Schemas", key="show_json")
    if nav_reset.button("← Start New Analysis"):
        session.reset()
        st.session_state.pop("show_json", None)
        st.rerun()

    if show_json:
        left, right = st.columns(2)
        sections = json_sections(report)
        for i, (title, data) in enumerate(sections):
            with (left if i % 2 == 0 else right):
                st.caption(title)
                st.json(data)
        with st.expander("Full report JSON"):
            st.code(report_to_json(report), language="json")
        return

    # Schema 3 scorecard + Schema 4 summary
    score_col, summary_col = st.columns([2, 1])
    with score_col:
        st.header(company_label(report))
        st.caption(f"{report.extraction.report_type} · Readiness Assessment Report")
        color = safe_color(report.scoring.score_color)
        st.markdown(
            f'<span style="border:1px solid {color};color:{color};padding:4px 14px;'
            f'border-radius:999px;font-weight:700;text-transform:uppercase">'
            f"{report.scoring.readiness_score}</span>",
            unsafe_allow_html=True,
        )
        st.markdown(render_scorecard_md(report))
    with summary_col:
        st.caption("EXECUTIVE SUMMARY")
        st.markdown(render_summary_md(report))
        met, total = disclosure_counts(report)
        st.metric("Disclosures Met", f"{met} / {total}")

    # Schema 1 materiality + roadmap, Schema 2 gap analysis
    left, right = st.columns(2)
    with left:
        st.subheader("Materiality & Roadmap")
        st.caption("DETECTED MATERIAL TOPICS (ESRS 1)")
        st.markdown(render_materiality_md(report))
        st.markdown(render_roadmap_md(report))
    with right:
        st.subheader("Gap Analysis (ESRS 2)")
        st.markdown(render_gap_analysis_md(report))


def main():
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="Audit Crystal", page_icon="💎", layout="wide")

    session = get_session()
    if session.app_state is AppState.IDLE:
        render_upload(session)
    elif session.app_state is AppState.ANALYZING:
        render_analyzing(session)
    elif session.app_state is AppState.ERROR:
        render_error(session)
    elif session.app_state is AppState.COMPLETE and session.report_data is not None:
        render_report(session)

    st.caption(f"© {date.today().year} Audit Crystal. AI-Powered CSRD Assistant.")


if __name__ == "__main__":
    main()
