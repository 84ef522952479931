"""Streamlit UI: resume upload, editable fields and the job-hunter chat."""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from resume_agent.config import load_settings
from resume_agent.log import get_logger
from resume_agent.models import ParsedResume, Preferences
from resume_agent.orchestrator import build_orchestrator
from resume_agent.report import HELP_MESSAGE
from resume_agent.resume_parser import SUPPORTED_SUFFIXES, parse_resume_upload

log = get_logger(__name__)

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
[data-testid="stForm"],
[data-testid="stExpander"] {
    background: rgba(255,255,255,0.5);
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.35);
}
.stButton > button[kind="primary"] {
    border-radius: 8px;
    font-weight: 600;
}
h1, h2, h3 {
    color: #1a1a2e;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


@st.cache_resource
def _orchestrator():
    return build_orchestrator(load_settings())


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _resume() -> dict:
    return st.session_state.setdefault("resume", ParsedResume().to_dict())


def _skills() -> list[str]:
    return list(_resume().get("skills", []))


def _preferences() -> Preferences:
    return Preferences.from_dict(st.session_state.get("preferences"))


def _check(label: str, ok: bool) -> str:
    icon = "✅" if ok else "⬜"
    return f"{icon}  {label}"


def _send(message: str, *, auto_suggest: bool = False) -> None:
    history = st.session_state.setdefault("chat", [])
    history.append({"role": "user", "content": message})
    with st.spinner("Searching for openings…"):
        reply = _orchestrator().reply(
            message, _skills(), _preferences(), auto_suggest=auto_suggest,
        )
    history.append({"role": "assistant", "content": reply})


# ── Page: Resume ─────────────────────────────────────────────────────────


def page_resume() -> None:
    st.header("Resume")
    st.write("Upload your resume, then review the extracted fields.")

    uploaded = st.file_uploader(
        "Drop your resume here (PDF, DOCX, or TXT)",
        type=[s.lstrip(".") for s in SUPPORTED_SUFFIXES],
    )
    if uploaded and st.session_state.get("_parsed_name") != uploaded.name:
        with st.spinner("Analyzing your resume…"):
            try:
                parsed = parse_resume_upload(
                    uploaded.getvalue(), uploaded.name, settings=_orchestrator().settings,
                )
                st.session_state["resume"] = parsed.to_dict()
                st.session_state["_parsed_name"] = uploaded.name
                if parsed.fallback:
                    st.info("AI parsing was unavailable — fields were filled by a simple extractor.")
                else:
                    st.success("Resume parsed successfully!")
            except ValueError as exc:
                st.error(str(exc))
            except Exception as exc:
                log.exception("Resume parsing failed")
                st.error(f"Parsing failed: {exc}")

    data = _resume()
    with st.form("resume_fields"):
        c1, c2 = st.columns(2)
        name = c1.text_input("Name", value=data.get("name", ""))
        email = c2.text_input("Email", value=data.get("email", ""))
        skills = st.text_input(
            "Skills (comma-separated, most relevant first)",
            value=", ".join(data.get("skills", [])),
        )
        education = st.text_area(
            "Education (one per line)",
            value="\n".join(str(e) for e in data.get("education", [])),
        )
        experience = st.text_area(
            "Experience (one per line)",
            value="\n".join(str(e) for e in data.get("experience", [])),
        )
        saved = st.form_submit_button("Save", type="primary", use_container_width=True)

    if saved:
        data.update(
            name=name.strip(),
            email=email.strip(),
            skills=[s.strip() for s in skills.split(",") if s.strip()],
            education=_lines(education),
            experience=_lines(experience),
        )
        st.session_state["resume"] = data
        st.success("Resume fields saved for this session.")


# ── Page: Job Hunter ─────────────────────────────────────────────────────


def page_jobs() -> None:
    st.header("Job Hunter")

    prefs = st.session_state.setdefault(
        "preferences", {"title": "", "location": "any", "remote": False},
    )
    with st.expander("Search preferences", expanded=not prefs.get("title")):
        c1, c2, c3 = st.columns([3, 2, 1])
        prefs["title"] = c1.text_input("Target title", value=prefs.get("title", ""), placeholder="e.g. Backend Engineer")
        prefs["location"] = c2.text_input("Location", value=prefs.get("location", "any"), help='"any" means no location filter')
        prefs["remote"] = c3.checkbox("Remote", value=bool(prefs.get("remote")))

    skills = _skills()
    if skills:
        st.caption("Skills: " + ", ".join(skills[:12]))
        if st.button("Suggest jobs from my resume", use_container_width=True):
            _send("Suggest jobs from my resume", auto_suggest=True)
    else:
        st.warning("No skills yet — upload a resume on the **Resume** page first.")

    history = st.session_state.setdefault("chat", [])
    if not history:
        with st.chat_message("assistant"):
            st.markdown(HELP_MESSAGE)
    for msg in history:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])

    prompt = st.chat_input("Ask me to find jobs…")
    if prompt:
        _send(prompt)
        st.rerun()


# ── Layout ───────────────────────────────────────────────────────────────


def _sidebar_status() -> None:
    settings = _orchestrator().settings
    with st.sidebar:
        st.markdown("**Status**")
        st.markdown(_check("Groq API key", bool(settings.groq_api_key)))
        st.markdown(_check("Tavily API key", bool(settings.tavily_api_key)))
        st.markdown(_check("Skills extracted", bool(_skills())))
        st.divider()
        if st.button("🗑️ Clear session", use_container_width=True):
            for key in list(st.session_state.keys()):
                del st.session_state[key]
            st.rerun()


def _wrap(page):
    def run() -> None:
        st.markdown(_CSS, unsafe_allow_html=True)
        _sidebar_status()
        page()

    run.__name__ = page.__name__
    return run


pages = [
    st.Page(_wrap(page_resume), title="Resume", icon="📄", url_path="resume", default=True),
    st.Page(_wrap(page_jobs), title="Job Hunter", icon="🔎", url_path="jobs"),
]

nav = st.navigation(pages)
nav.run()
