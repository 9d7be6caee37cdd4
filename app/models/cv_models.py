"""Pydantic models for CV data structures."""

from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class CVSection(BaseModel):
    """Base for CV sections: immutable, keeps unknown keys, numbers read as text."""

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)


class CVPersonal(CVSection):
    """Personal and contact information."""

    name: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None


class CVExperience(CVSection):
    """Experience entry model."""

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    description: List[str] = []
    technologies: List[str] = []

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def dates_as_text(cls, value: Any) -> Any:
        # "Present" and partial dates stay as written; YAML dates become ISO text
        if isinstance(value, date):
            return value.isoformat()
        return value


class CVEducation(CVSection):
    """Education entry model."""

    degree: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None
    details: Optional[str] = None


class CVCertification(CVSection):
    """Certification entry model."""

    name: Optional[str] = None
    issuer: Optional[str] = None
    year: Optional[str] = None


class CVProject(CVSection):
    """Project listed on the CV (independent of the project showcase)."""

    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = []
    github: Optional[str] = None
    live: Optional[str] = None


class CVLanguage(CVSection):
    """Language proficiency model."""

    language: Optional[str] = None
    proficiency: Optional[str] = None


class CVData(CVSection):
    """Complete CV data model, taken as-is from the CV front-matter."""

    personal: Optional[CVPersonal] = None
    experience: List[CVExperience] = []
    skills: Dict[str, List[str]] = {}
    education: List[CVEducation] = []
    certifications: List[CVCertification] = []
    projects: List[CVProject] = []
    languages: List[CVLanguage] = []
