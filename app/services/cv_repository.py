"""Service for loading CV data from the CV Markdown document."""

from pathlib import Path
from typing import Optional
from loguru import logger
from pydantic import ValidationError
from app.models.cv_models import CVData
from app.services.frontmatter import MalformedDocumentError, read_document
from app.settings import get_settings


class CVRepository:
    """Load the CV from the front-matter of a single Markdown file."""

    def __init__(self, cv_path: Optional[Path] = None):
        """
        Initialize the CV repository.

        Args:
            cv_path: Path of the CV document. Defaults to content/cv.md
        """
        if cv_path is None:
            cv_path = get_settings().cv_path
        self.cv_path = Path(cv_path)

    def load(self) -> CVData:
        """
        Load the CV.

        Only the front-matter is used; the Markdown body is discarded.

        Returns:
            CVData: The CV as declared in the document

        Raises:
            FileNotFoundError: If the CV document doesn't exist or can't be read
            MalformedDocumentError: If the front-matter is invalid
        """
        if not self.cv_path.is_file():
            raise FileNotFoundError(
                f"CV document not found: {self.cv_path}. "
                f"Expected file at: {self.cv_path.absolute()}"
            )

        try:
            data, _body = read_document(self.cv_path)
        except (OSError, UnicodeDecodeError) as e:
            raise FileNotFoundError(f"Error reading CV document {self.cv_path}: {e}") from e

        try:
            cv_data = CVData.model_validate(data)
        except ValidationError as e:
            raise MalformedDocumentError(self.cv_path, f"invalid CV structure: {e}") from e

        logger.debug(f"Loaded CV from {self.cv_path}")
        return cv_data


# Singleton instance
_cv_repository: Optional[CVRepository] = None


def get_cv_repository() -> CVRepository:
    """
    Get or create the CV repository singleton.

    Returns:
        CVRepository: The repository instance
    """
    global _cv_repository
    if _cv_repository is None:
        _cv_repository = CVRepository()
    return _cv_repository
