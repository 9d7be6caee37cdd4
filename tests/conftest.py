"""Shared fixtures: content trees written to a temporary directory."""

from pathlib import Path
from typing import Any, Dict, Optional
import pytest
import yaml
from app.services.cv_repository import CVRepository
from app.services.post_repository import PostRepository
from app.services.project_repository import ProjectRepository


def write_markdown(path: Path, front_matter: Optional[Dict[str, Any]], body: str = "") -> Path:
    """Write a Markdown file with an optional YAML front-matter block."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if front_matter is None:
        text = body
    else:
        block = yaml.safe_dump(front_matter, sort_keys=False, allow_unicode=True)
        text = f"---\n{block}---\n{body}"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    return tmp_path / "content"


@pytest.fixture
def posts_dir(content_dir: Path) -> Path:
    directory = content_dir / "blog"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def projects_dir(content_dir: Path) -> Path:
    directory = content_dir / "projects"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def post_repository(posts_dir: Path) -> PostRepository:
    return PostRepository(posts_dir, words_per_minute=200)


@pytest.fixture
def project_repository(projects_dir: Path) -> ProjectRepository:
    return ProjectRepository(projects_dir)


@pytest.fixture
def sample_cv() -> Dict[str, Any]:
    return {
        "personal": {
            "name": "Ada Example",
            "title": "Backend Engineer",
            "summary": "Builds reliable services.",
            "email": "ada@example.com",
            "phone": "+1 555 0100",
            "location": "Lisbon",
            "website": "https://ada.example.com",
            "github": "https://github.com/ada",
            "linkedin": "https://linkedin.com/in/ada",
        },
        "experience": [
            {
                "title": "Backend Engineer",
                "company": "Acme",
                "location": "Remote",
                "startDate": "Jan 2021",
                "endDate": "Present",
                "description": ["Designed the billing API", "Cut p99 latency in half"],
                "technologies": ["Python", "PostgreSQL"],
            }
        ],
        "skills": {
            "Languages": ["Python", "Go"],
            "Databases": ["PostgreSQL"],
            "Cloud": ["AWS"],
        },
        "education": [{"degree": "BSc Computer Science", "institution": "Uni", "year": 2018}],
        "certifications": [{"name": "CKA", "issuer": "CNCF", "year": "2022"}],
        "projects": [{"name": "Queue", "description": "Job queue", "technologies": ["Redis"]}],
        "languages": [{"language": "English", "proficiency": "Fluent"}],
    }


@pytest.fixture
def cv_path(content_dir: Path, sample_cv: Dict[str, Any]) -> Path:
    return write_markdown(content_dir / "cv.md", sample_cv, "This body is ignored.\n")


@pytest.fixture
def cv_repository(cv_path: Path) -> CVRepository:
    return CVRepository(cv_path)
