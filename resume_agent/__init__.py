"""Resume intake and skill-matched job search."""
from resume_agent.models import JobResult, ParsedResume, Preferences
from resume_agent.orchestrator import JobSearchOrchestrator, build_orchestrator

__all__ = [
    "JobResult", "ParsedResume", "Preferences",
    "JobSearchOrchestrator", "build_orchestrator",
]

__version__ = "0.1.0"
