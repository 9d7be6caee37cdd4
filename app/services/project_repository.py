"""Repository for showcase projects stored as Markdown files."""

from pathlib import Path
from typing import Any, Dict, List, Optional
from loguru import logger
from pydantic import ValidationError
from app.models.content_models import Project, ProjectStatus
from app.services.content_files import find_content_file, list_content_files, slug_from_filename
from app.services.frontmatter import MalformedDocumentError, read_document
from app.settings import get_settings


class ProjectRepository:
    """Load projects from a directory of Markdown files."""

    def __init__(self, projects_dir: Optional[Path] = None):
        """
        Initialize the project repository.

        Args:
            projects_dir: Directory containing project files. Defaults to the configured projects directory.
        """
        if projects_dir is None:
            projects_dir = get_settings().projects_path
        self.projects_dir = Path(projects_dir)

    def list_all(self) -> List[Project]:
        """
        Load all projects: featured first, then by start date (newest first).

        Projects that tie on both keys are ordered by slug.

        Returns:
            List[Project]: All projects. Empty if the directory is missing.

        Raises:
            MalformedDocumentError: If any project has unusable front-matter
        """
        projects = [self._load(path) for path in list_content_files(self.projects_dir)]

        # Stable sorts, least significant key first
        projects.sort(key=lambda project: project.slug)
        projects.sort(key=lambda project: project.startDate, reverse=True)
        projects.sort(key=lambda project: project.featured, reverse=True)

        logger.debug(f"Loaded {len(projects)} projects from {self.projects_dir}")
        return projects

    def find_by_slug(self, slug: str) -> Optional[Project]:
        """
        Load a single project by slug.

        Args:
            slug: Filename of the project without extension

        Returns:
            Optional[Project]: The project, or None if no readable file matches

        Raises:
            MalformedDocumentError: If the file exists but its front-matter is unusable
        """
        path = find_content_file(self.projects_dir, slug)
        if path is None:
            logger.info(f"Project not found: {slug!r}")
            return None

        try:
            return self._load(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Project {slug!r} could not be read: {e}")
            return None

    def list_categories(self) -> List[str]:
        """Return the sorted, de-duplicated categories of all projects."""
        return sorted({project.category for project in self.list_all()})

    def group_by_category(self) -> Dict[str, List[Project]]:
        """
        Group projects by category.

        Returns:
            Dict[str, List[Project]]: Categories in the order they first appear
            in list_all(), each holding its projects in list_all() order
        """
        grouped: Dict[str, List[Project]] = {}

        for project in self.list_all():
            if project.category not in grouped:
                grouped[project.category] = []
            grouped[project.category].append(project)

        return grouped

    def list_featured(self) -> List[Project]:
        return [project for project in self.list_all() if project.featured]

    def _load(self, path: Path) -> Project:
        data, content = read_document(path)
        return self._build_project(slug_from_filename(path), data, content, source=path)

    def _build_project(self, slug: str, data: Dict[str, Any], content: str, source: Any) -> Project:
        try:
            project = Project(
                slug=slug,
                title=data.get("title") or "",
                description=data.get("description") or "",
                longDescription=content,
                technologies=data.get("technologies") or [],
                category=data.get("category") or "Other",
                githubUrl=data.get("githubUrl"),
                liveUrl=data.get("liveUrl"),
                imageUrl=data.get("imageUrl"),
                featured=data.get("featured") or False,
                status=data.get("status") or ProjectStatus.COMPLETED.value,
                startDate=data.get("startDate") or "",
                endDate=data.get("endDate"),
            )
        except ValidationError as e:
            raise MalformedDocumentError(source, str(e)) from e

        if not project.has_known_status:
            logger.warning(
                f"Project {slug!r} has unknown status {project.status!r}; "
                f"expected one of {[s.value for s in ProjectStatus]}"
            )
        return project


# Singleton instance
_project_repository: Optional[ProjectRepository] = None


def get_project_repository() -> ProjectRepository:
    """Get or create the project repository singleton."""
    global _project_repository
    if _project_repository is None:
        _project_repository = ProjectRepository()
    return _project_repository
