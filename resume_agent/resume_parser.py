"""Extract structured fields from an uploaded resume.

Supports PDF (via pdftotext or pypdf), DOCX (via stdlib zipfile) and TXT.
When a Groq API key is available the text is sent to the LLM for JSON
extraction; otherwise, or when the reply is not usable JSON, a heuristic
regex parser fills the same fields.
"""
from __future__ import annotations

import io
import json
import os
import re
import shutil
import subprocess
import tempfile
import zipfile
from pathlib import Path
from typing import IO, Any
from xml.etree import ElementTree

from resume_agent.config import GROQ_BASE_URL, Settings, load_settings
from resume_agent.log import get_logger
from resume_agent.models import ParsedResume
from resume_agent.retry import retry

log = get_logger(__name__)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".pdf", ".docx", ".txt")
MAX_PROMPT_TEXT = 8000
PDFTOTEXT_TIMEOUT = 30

# ── Text extraction ──────────────────────────────────────────────────────


def extract_text(path: Path) -> str:
    """Return plain text from a PDF, DOCX, or TXT file."""
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix == ".docx":
        with open(path, "rb") as f:
            return _extract_docx(f)
    if suffix == ".pdf":
        return _extract_pdf(path.read_bytes())
    raise ValueError(f"Unsupported resume format: {suffix or path.name}")


def extract_text_from_bytes(data: bytes, filename: str) -> str:
    """Same as :func:`extract_text` for an in-memory upload."""
    suffix = Path(filename).suffix.lower()
    if suffix == ".txt":
        return data.decode("utf-8", errors="ignore")
    if suffix == ".docx":
        return _extract_docx(io.BytesIO(data))
    if suffix == ".pdf":
        return _extract_pdf(data)
    raise ValueError(f"Unsupported resume format: {suffix or filename}")


def _fix_spacing(text: str) -> str:
    """Re-insert spaces when PDF extraction merges words together."""
    if not text or len(text) < 50:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%) — applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([.!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _pdftotext(data: bytes) -> str:
    with tempfile.NamedTemporaryFile(suffix=".pdf", delete=False) as tmp:
        tmp.write(data)
        tmp_path = tmp.name
    try:
        result = subprocess.run(
            ["pdftotext", "-layout", tmp_path, "-"],
            capture_output=True,
            text=True,
            timeout=PDFTOTEXT_TIMEOUT,
        )
    except subprocess.TimeoutExpired as exc:
        raise ValueError(f"PDF text extraction timed out after {exc.timeout}s") from exc
    finally:
        os.unlink(tmp_path)
    return result.stdout if result.returncode == 0 else ""


def _extract_pdf(data: bytes) -> str:
    # pdftotext keeps word spacing better than pypdf
    if shutil.which("pdftotext"):
        text = _pdftotext(data)
        if text.strip():
            return text

    from pypdf import PdfReader
    from pypdf.errors import PyPdfError

    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [_fix_spacing(page.extract_text() or "") for page in reader.pages]
    except PyPdfError as exc:
        raise ValueError(f"Not a readable PDF file: {exc}") from exc
    return "\n".join(pages)


def _extract_docx(stream: IO[bytes]) -> str:
    ns = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
    texts: list[str] = []
    try:
        with zipfile.ZipFile(stream) as zf:
            with zf.open("word/document.xml") as f:
                tree = ElementTree.parse(f)
    except (zipfile.BadZipFile, KeyError) as exc:
        raise ValueError(f"Not a readable DOCX file: {exc}") from exc
    for para in tree.iter(f"{ns}p"):
        parts = [node.text for node in para.iter(f"{ns}t") if node.text]
        if parts:
            texts.append("".join(parts))
    return "\n".join(texts)


# ── LLM-based extraction ────────────────────────────────────────────────

_PARSE_PROMPT = """\
Parse this resume and return only JSON:

{{"name":"","email":"","skills":[],"education":[],"experience":[]}}

Rules:
- "skills": technologies, tools and soft skills, most relevant first.
- "education": one string per degree or school.
- "experience": one string per role, e.g. "Title at Company (years)".

Resume: {resume_text}"""

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


@retry(max_attempts=2, base_delay=2.0, retryable=(Exception,))
def _llm_complete(resume_text: str, api_key: str, model: str, timeout: float) -> str:
    from openai import OpenAI

    if len(resume_text) > MAX_PROMPT_TEXT:
        resume_text = resume_text[:MAX_PROMPT_TEXT] + "..."
    client = OpenAI(api_key=api_key, base_url=GROQ_BASE_URL, timeout=timeout)
    resp = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": _PARSE_PROMPT.format(resume_text=resume_text)}],
        max_tokens=1024,
        temperature=0.0,
    )
    return (resp.choices[0].message.content or "").strip()


def json_from_llm(raw: str) -> dict[str, Any]:
    """Pull the JSON object out of an LLM reply (tolerates markdown fences)."""
    cleaned = _FENCE_RE.sub("", raw or "").strip()
    match = _JSON_OBJECT_RE.search(cleaned)
    if not match:
        raise ValueError("No JSON object found in response")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError("LLM JSON is not an object")
    return data


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [s.strip() for s in re.split(r",|\n", value) if s.strip()]
    return []


def normalize_parsed(data: dict[str, Any]) -> ParsedResume:
    skills = _as_list(data.get("skills"))
    return ParsedResume(
        name=str(data.get("name") or "").strip(),
        email=str(data.get("email") or "").strip(),
        skills=[str(s).strip() for s in skills if str(s).strip()],
        education=data.get("education") if isinstance(data.get("education"), list) else [],
        experience=data.get("experience") if isinstance(data.get("experience"), list) else [],
    )


# ── Heuristic fallback ──────────────────────────────────────────────────

_NAME_RE = re.compile(r"name[:\s]*([^\n,]+)", re.IGNORECASE)
_EMAIL_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
_SKILLS_LINE_RE = re.compile(r"skills[:\s]*([^\n]+)", re.IGNORECASE)

_COMMON_SKILLS = [
    "Python", "Java", "JavaScript", "TypeScript", "React", "Node.js", "Angular",
    "Vue", "SQL", "NoSQL", "MongoDB", "PostgreSQL", "MySQL", "Redis",
    "Docker", "Kubernetes", "AWS", "GCP", "Azure", "Terraform",
    "Git", "Linux", "CI/CD", "GraphQL", "Microservices",
    "Machine Learning", "Deep Learning", "NLP", "Pandas",
    "TensorFlow", "PyTorch", "Spark", "Kafka", "Figma",
]


def _heuristic_name(text: str) -> str:
    m = _NAME_RE.search(text)
    if m:
        return m.group(1).strip()
    first = next((line.strip() for line in text.splitlines() if line.strip()), "")
    if first and len(first) <= 60 and not _EMAIL_RE.search(first):
        return first
    return ""


def heuristic_parse(text: str) -> ParsedResume:
    """Best-effort extraction without an LLM."""
    email_match = _EMAIL_RE.search(text)

    skills: list[str] = []
    line = _SKILLS_LINE_RE.search(text)
    if line:
        skills = [s.strip() for s in re.split(r"[,;|]", line.group(1)) if s.strip()]
    if not skills:
        low = text.lower()
        skills = [s for s in _COMMON_SKILLS if re.search(rf"(?<!\w){re.escape(s.lower())}(?!\w)", low)]

    return ParsedResume(
        name=_heuristic_name(text),
        email=email_match.group(1) if email_match else "",
        skills=skills[:20],
        fallback=True,
    )


# ── Public API ───────────────────────────────────────────────────────────


def parse_resume_text(text: str, settings: Settings | None = None) -> ParsedResume:
    """Structured fields from resume text: LLM when a key is set, else heuristics."""
    settings = settings or load_settings()
    api_key, model = settings.groq_api_key, settings.groq_model

    raw = ""
    if api_key:
        log.info("Parsing resume with LLM (%s), %d chars", model, len(text))
        try:
            raw = _llm_complete(text, api_key, model, settings.request_timeout)
            parsed = normalize_parsed(json_from_llm(raw))
            log.info("LLM extraction complete — name=%s, skills=%d", parsed.name, len(parsed.skills))
            return parsed
        except Exception as exc:
            log.warning("LLM parsing failed (%s), falling back to heuristic", exc)

    parsed = heuristic_parse(text)
    parsed.raw = raw
    log.info("Heuristic extraction complete — name=%s, skills=%d", parsed.name, len(parsed.skills))
    return parsed


def parse_resume(path: Path, settings: Settings | None = None) -> ParsedResume:
    log.info("Extracting text from %s", path.name)
    text = extract_text(path)
    if not text.strip():
        raise ValueError(f"Could not extract any text from {path.name}")
    return parse_resume_text(text, settings=settings)


def parse_resume_upload(data: bytes, filename: str, settings: Settings | None = None) -> ParsedResume:
    text = extract_text_from_bytes(data, filename)
    if not text.strip():
        raise ValueError(
            f"Could not extract text from {filename}. Please ensure the file is readable."
        )
    return parse_resume_text(text, settings=settings)
