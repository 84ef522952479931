"""Data models for search inputs, ranked jobs and parsed resumes."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Generic, Optional, TypedDict, TypeVar

T = TypeVar("T")

ANY_LOCATION = "any"


@dataclass(frozen=True)
class Preferences:
    title: str = ""
    location: str = ""
    remote: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Preferences":
        data = data or {}
        remote = data.get("remote", False)
        if isinstance(remote, str):
            remote = remote.strip().lower() in ("1", "true", "yes", "on")
        return cls(
            title=str(data.get("title") or "").strip(),
            location=str(data.get("location") or "").strip(),
            remote=bool(remote),
        )

    @property
    def has_location(self) -> bool:
        location = self.location.strip()
        return bool(location) and location.lower() != ANY_LOCATION


class RawHit(TypedDict, total=False):
    """One search-provider result; every field may be missing."""

    title: str
    url: str
    content: str
    snippet: str
    published_date: str


@dataclass
class JobResult:
    title: str
    url: str
    snippet: str
    source: str
    matched_skills: list[str] = field(default_factory=list)
    match_score: int = 0
    relevance_score: int = 0
    published: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Wire shape used by the chat layer (camelCase keys)."""
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "source": self.source,
            "matchedSkills": list(self.matched_skills),
            "matchScore": self.match_score,
            "relevanceScore": self.relevance_score,
            "published": self.published,
        }


# Error kinds reported by CallResult.failure
TRANSPORT = "transport"
HTTP = "http"
UNAVAILABLE = "unavailable"
MALFORMED = "malformed"


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """Outcome of an external call: a value, or an error kind and detail."""

    value: Optional[T] = None
    error: Optional[str] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "CallResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: str, detail: str = "") -> "CallResult[T]":
        return cls(error=kind, detail=detail)


@dataclass
class ParsedResume:
    name: str = ""
    email: str = ""
    skills: list[str] = field(default_factory=list)
    education: list[Any] = field(default_factory=list)
    experience: list[Any] = field(default_factory=list)
    fallback: bool = False
    raw: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
