"""Pydantic models for blog posts and projects loaded from Markdown files."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


def parse_iso_datetime(text: str) -> datetime:
    """
    Parse an ISO 8601 date or date-time as an aware UTC ``datetime``.

    A trailing ``Z`` and values without an offset are read as UTC. A bare
    date is midnight of that day.

    Raises:
        ValueError: If the text is not ISO 8601
    """
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _utc_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc).replace(tzinfo=None, microsecond=0)
    return f"{value.isoformat()}Z"


def normalize_iso_date(value: Any) -> Any:
    """
    Normalize a front-matter date so that string order is time order.

    Dates become ``YYYY-MM-DD``; date-times become UTC ``YYYY-MM-DDTHH:MM:SSZ``.
    A date therefore sorts before any time on the same day. YAML turns
    unquoted values into ``date``/``datetime`` objects, quoted ones stay
    strings. Empty values are kept as they are.

    Example: "2024-01-05T12:00:00+02:00" -> "2024-01-05T10:00:00Z"

    Raises:
        ValueError: If the value is not an ISO date or date-time
    """
    if value is None or value == "":
        return value
    if isinstance(value, datetime):
        return _utc_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO date (YYYY-MM-DD), got {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        return _utc_timestamp(parse_iso_datetime(text))
    except ValueError:
        raise ValueError(f"expected an ISO date (YYYY-MM-DD) or date-time, got {value!r}")


class ProjectStatus(str, Enum):
    """Known project statuses."""

    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    ARCHIVED = "archived"


class BlogPost(BaseModel):
    """Blog post parsed from a Markdown file."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    slug: str
    title: str = ""
    date: str = ""
    excerpt: str = ""
    content: str = ""
    readTime: str
    tags: List[str] = []
    published: bool = True

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> Any:
        return normalize_iso_date(value)


class Project(BaseModel):
    """Project showcase entry parsed from a Markdown file."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    slug: str
    title: str = ""
    description: str = ""
    longDescription: str = ""
    technologies: List[str] = []
    category: str = "Other"
    githubUrl: Optional[str] = None
    liveUrl: Optional[str] = None
    imageUrl: Optional[str] = None
    featured: bool = False
    # Unknown statuses pass through unchanged; the repository logs them
    status: str = ProjectStatus.COMPLETED.value
    startDate: str = ""
    endDate: Optional[str] = None

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return normalize_iso_date(value)

    @property
    def has_known_status(self) -> bool:
        return self.status in {s.value for s in ProjectStatus}
