"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


SAMPLE_RESUME: dict[str, Any] = {
    "personalInfo": {
        "name": "Jordan Lee",
        "title": "Backend Engineer",
        "summary": (
            "Backend engineer focused on data pipelines and search. "
            "Enjoys turning messy inputs into reliable services."
        ),
    },
    "experience": [
        {
            "company": "Acme Search",
            "role": "Staff Engineer",
            "highlights": [
                "Designed the document ingestion service handling millions of files per day.",
                "Built embedding-based retrieval for the support knowledge base.",
                "Reduced indexing latency by half through batching and caching.",
            ],
        },
        {
            "company": "Globex",
            "role": "Software Engineer",
            "highlights": [
                "Maintained the billing API and its Postgres schema migrations.",
                "Wrote the on-call runbooks still used by the platform team.",
            ],
        },
    ],
    "education": [{"institution": "State University", "degree": "B.Sc. Computer Science", "year": 2015}],
    "skills": {"languages": ["Python", "Go", "SQL"], "tools": ["Redis", "Chroma", "Docker"]},
    "projects": [{"name": "resume-chat", "description": "Chat with my résumé."}],
    "interests": ["Chess", "Cycling"],
}


@pytest.fixture()
def resume_data() -> dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_RESUME))


@pytest.fixture()
def resume_file(tmp_path: Path, resume_data: dict[str, Any]) -> Path:
    path = tmp_path / "resumeData.json"
    path.write_text(json.dumps(resume_data), encoding="utf-8")
    return path
