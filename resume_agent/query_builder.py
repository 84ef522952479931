"""Compose the search-provider query from an intent and user preferences."""
from __future__ import annotations

from resume_agent.models import Preferences

# Biases the provider toward job postings instead of general pages.
JOB_BOARD_SITES: tuple[str, ...] = ("linkedin.com", "indeed.com")
SITE_RESTRICTION = " " + " OR ".join(f"site:{s}" for s in JOB_BOARD_SITES)

# Soft target for the part of the query before the site clause.
SEMANTIC_TARGET_LEN = 50


def semantic_part(base_intent: str, preferences: Preferences) -> str:
    """Intent, then location, then the remote token."""
    location = f" {preferences.location.strip()}" if preferences.has_location else ""
    remote = " remote" if preferences.remote else ""
    return f"{base_intent}{location}{remote}"


def build_query(base_intent: str, preferences: Preferences) -> str:
    return semantic_part(base_intent, preferences) + SITE_RESTRICTION
