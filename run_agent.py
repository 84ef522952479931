#!/usr/bin/env python3
"""Command-line job search: parse a resume (optional) and ask the job hunter.

    python run_agent.py "find jobs" --resume resume.pdf --location Berlin --remote
    python run_agent.py --skills "Python, SQL, Docker" --json
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from resume_agent.config import PREFERENCES_PATH, load_preferences, load_settings
from resume_agent.log import get_logger
from resume_agent.models import Preferences
from resume_agent.orchestrator import build_orchestrator
from resume_agent.resume_parser import parse_resume

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Find job postings that match your resume skills.")
    p.add_argument("message", nargs="?", default="Find jobs based on my resume")
    p.add_argument("--resume", type=Path, help="PDF, DOCX or TXT resume to extract skills from")
    p.add_argument("--skills", help="comma-separated skills (overrides the resume)")
    p.add_argument("--title", help="target job title")
    p.add_argument("--location", help='location, or "any"')
    p.add_argument("--remote", action="store_true", default=None, help="remote roles only")
    p.add_argument("--preferences", type=Path, default=PREFERENCES_PATH, help="YAML defaults")
    p.add_argument("--count", type=int, default=None, help="results wanted (with --json)")
    p.add_argument("--json", action="store_true", help="print ranked jobs as JSON")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    defaults = load_preferences(args.preferences)

    skills: list[str] = defaults["skills"]
    if args.resume:
        try:
            parsed = parse_resume(args.resume, settings=settings)
        except (OSError, ValueError) as exc:
            log.error("Could not read resume: %s", exc)
            return 1
        skills = parsed.skills or skills
        log.info("Resume: name=%s, skills=%s", parsed.name or "?", ", ".join(skills))
    if args.skills:
        skills = [s.strip() for s in args.skills.split(",") if s.strip()]

    preferences = Preferences(
        title=args.title if args.title is not None else defaults["title"],
        location=args.location if args.location is not None else defaults["location"],
        remote=args.remote if args.remote is not None else defaults["remote"],
    )

    orchestrator = build_orchestrator(settings)

    if args.json:
        intent = orchestrator.resolve_intent(skills, preferences)
        results = orchestrator.search(
            intent, skills, preferences, args.count or settings.chat_result_count,
        )
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return 0

    print(orchestrator.reply(args.message, skills, preferences))
    return 0


if __name__ == "__main__":
    sys.exit(main())
