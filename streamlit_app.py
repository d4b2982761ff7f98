"""Streamlit Web UI for skillbridge.

Upload a resume, enter a target role, get a gap analysis with missing
skills, certifications and learning resources; download or copy the
result as a plain-text transcript.
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from skillbridge.config import load_config
from skillbridge.export.transcript import format_transcript, transcript_filename
from skillbridge.models.document import EXTENSION_MEDIA_TYPES, CandidateDocument, guess_media_type
from skillbridge.models.session import Phase
from skillbridge.pipeline.gap_analyst import GapAnalyst
from skillbridge.pipeline.session import AnalysisSession, describe_error
from skillbridge.validation import accepted_extensions_display

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Skillbridge",
    page_icon=":bridge_at_night:",
    layout="centered",
)


def _get_session() -> AnalysisSession:
    if "analysis_session" not in st.session_state:
        config = load_config()
        st.session_state.analysis_session = AnalysisSession(
            GapAnalyst(config.llm), limits=config.limits
        )
    return st.session_state.analysis_session


session = _get_session()
limits = session.limits

# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def _upload_key() -> str:
    return f"resume_upload_{st.session_state.get('widget_gen', 0)}"


def _on_file_change():
    uploaded = st.session_state.get(_upload_key())
    if uploaded is None:
        session.clear_document()
        return
    media_type = uploaded.type or guess_media_type(uploaded.name)
    document = CandidateDocument.from_bytes(
        uploaded.getvalue(), media_type=media_type, display_name=uploaded.name
    )
    session.select_document(document)


def _on_role_change():
    session.set_role(st.session_state.get("target_role", ""))


def _on_reset():
    session.reset()
    # A fresh uploader key renders the file input empty
    st.session_state.widget_gen = st.session_state.get("widget_gen", 0) + 1
    st.session_state.target_role = ""


# ---------------------------------------------------------------------------
# Input form
# ---------------------------------------------------------------------------

st.title("Skillbridge")
st.caption("Resume Gap Analyzer")

st.file_uploader(
    "Upload your resume",
    type=[ext.lstrip(".") for ext in EXTENSION_MEDIA_TYPES],
    help=(
        f"Accepted formats: {accepted_extensions_display()}. "
        f"Max size: {limits.max_file_size_bytes // (1024 * 1024)}MB."
    ),
    key=_upload_key(),
    on_change=_on_file_change,
)
st.text_input(
    "Target role",
    placeholder="e.g. Data Scientist",
    max_chars=limits.max_role_length,
    key="target_role",
    on_change=_on_role_change,
)

state = session.state
error = describe_error(state)
if error and state.phase is not Phase.FAILED:
    st.error(error)

col_submit, col_reset = st.columns([3, 1])
with col_submit:
    analyze_clicked = st.button(
        "Analyze Resume",
        type="primary",
        use_container_width=True,
        disabled=(
            session.is_busy
            or state.document is None
            or not state.role.strip()
            or state.issue is not None
        ),
    )
with col_reset:
    st.button("Reset", use_container_width=True, on_click=_on_reset)

if analyze_clicked:
    with st.spinner("Analyzing your resume..."):
        state = asyncio.run(session.submit())

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

if state.phase is Phase.FAILED:
    st.error(state.error_message)
elif state.phase is Phase.SUBMITTING:
    st.info("Analysis in progress...")
elif state.result is not None:
    result = state.result
    role = state.role.strip()

    st.subheader(f"Gap analysis for {role}")
    st.markdown("#### Gap Summary")
    st.write(result.gap_summary)

    for title, items in (
        ("Missing Skills", result.missing_skills),
        ("Recommended Certifications", result.certifications),
        ("Learning Resources", result.learning_resources),
    ):
        st.markdown(f"#### {title}")
        if items:
            st.markdown("\n".join(f"- {item}" for item in items))
        else:
            st.caption("None")

    transcript = format_transcript(role, result)
    st.download_button(
        label="Download report (.txt)",
        data=transcript.encode("utf-8"),
        file_name=transcript_filename(role),
        mime="text/plain",
        type="secondary",
    )
    with st.expander("Copy report"):
        # st.code renders a copy-to-clipboard button
        st.code(transcript, language=None)
