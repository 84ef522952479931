"""Environment settings and the optional preferences file."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from resume_agent.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PREFERENCES_PATH: Path = CONFIG_DIR / "preferences.yaml"

DEFAULT_TAVILY_URL = "https://api.tavily.com/search"
DEFAULT_GROQ_MODEL = "llama-3.3-70b-versatile"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_int(key: str, default: int) -> int:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring non-integer %s=%r, using %d", key, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Read once at startup and handed to the orchestrator."""

    tavily_api_key: str = ""
    tavily_api_url: str = DEFAULT_TAVILY_URL
    groq_api_key: str = ""
    groq_model: str = DEFAULT_GROQ_MODEL
    search_provider: str = "tavily"
    request_timeout: int = 20
    chat_result_count: int = 10


def load_settings() -> Settings:
    settings = Settings(
        tavily_api_key=get_env("TAVILY_API_KEY"),
        tavily_api_url=get_env("TAVILY_API_URL") or DEFAULT_TAVILY_URL,
        groq_api_key=get_env("GROQ_API_KEY"),
        groq_model=get_env("GROQ_LLM_MODEL") or DEFAULT_GROQ_MODEL,
        search_provider=(get_env("SEARCH_PROVIDER") or "tavily").lower(),
        request_timeout=_env_int("REQUEST_TIMEOUT", 20),
        chat_result_count=max(1, _env_int("CHAT_RESULT_COUNT", 10)),
    )
    if not settings.tavily_api_key:
        log.warning("TAVILY_API_KEY not set — set it in .env for live job search")
    if not settings.groq_api_key:
        log.warning("GROQ_API_KEY not set — resume parsing and query phrasing use fallbacks")
    return settings


def load_preferences(path: Path | None = None) -> dict[str, Any]:
    """Read title/location/remote/skills defaults for the CLI.

    A missing file yields empty defaults rather than an error.
    """
    path = path or PREFERENCES_PATH
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        log.debug("Loaded preferences from %s", path)

    skills = data.get("skills") or []
    if isinstance(skills, str):
        skills = [s.strip() for s in skills.split(",") if s.strip()]

    return {
        "title": str(data.get("title") or ""),
        "location": str(data.get("location") or "any"),
        "remote": bool(data.get("remote", False)),
        "skills": [str(s) for s in skills],
    }
