"""Site configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


# Repository root (parent of app/)
BASE_DIR = Path(__file__).parent.parent


class SiteSettings(BaseSettings):
    """Content locations and site metadata."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    content_dir: Path = BASE_DIR / "content"
    blog_dir: Optional[Path] = None
    projects_dir: Optional[Path] = None
    cv_file: Optional[Path] = None
    words_per_minute: int = 200

    site_name: str = "Douglas Correa"
    site_url: str = "http://localhost:8000"
    site_description: str = "Software developer portfolio, blog and projects."
    author_email: str = "douglas@example.com"
    github_url: str = "https://github.com"
    linkedin_url: str = "https://linkedin.com"
    code_style: str = "monokai"

    @property
    def posts_path(self) -> Path:
        return self.blog_dir or self.content_dir / "blog"

    @property
    def projects_path(self) -> Path:
        return self.projects_dir or self.content_dir / "projects"

    @property
    def cv_path(self) -> Path:
        return self.cv_file or self.content_dir / "cv.md"


@lru_cache
def get_settings() -> SiteSettings:
    """Return the process-wide settings instance."""
    return SiteSettings()
