"""Repository for blog posts stored as Markdown files."""

import math
from pathlib import Path
from typing import Any, Dict, List, Optional
from loguru import logger
from pydantic import ValidationError
from app.models.content_models import BlogPost
from app.services.content_files import find_content_file, list_content_files, slug_from_filename
from app.services.frontmatter import MalformedDocumentError, read_document
from app.settings import get_settings


def calculate_read_time(content: str, words_per_minute: int = 200) -> str:
    """
    Estimate reading time for a Markdown body.

    Args:
        content: Raw Markdown text
        words_per_minute: Reading speed

    Returns:
        str: e.g. "3 min read"
    """
    # An empty body still counts as one word
    words = len(content.split()) or 1
    minutes = math.ceil(words / words_per_minute)
    return f"{minutes} min read"


class PostRepository:
    """Load blog posts from a directory of Markdown files."""

    def __init__(self, posts_dir: Optional[Path] = None, words_per_minute: Optional[int] = None):
        """
        Initialize the post repository.

        Args:
            posts_dir: Directory containing post files. Defaults to the configured blog directory.
            words_per_minute: Reading speed for computed read times
        """
        settings = get_settings()
        self.posts_dir = Path(posts_dir) if posts_dir is not None else settings.posts_path
        self.words_per_minute = words_per_minute or settings.words_per_minute

    def list_published(self) -> List[BlogPost]:
        """
        Load all published posts, newest first.

        Posts with the same date are ordered by slug so the result does not
        depend on directory enumeration order. Undated posts come last.

        Returns:
            List[BlogPost]: Published posts. Empty if the directory is missing.

        Raises:
            MalformedDocumentError: If any post has unusable front-matter
        """
        posts = [self._load(path) for path in list_content_files(self.posts_dir)]
        published = [post for post in posts if post.published]

        published.sort(key=lambda post: post.slug)
        # ISO dates compare correctly as strings; "" sorts after every date
        published.sort(key=lambda post: post.date, reverse=True)

        logger.debug(
            f"Loaded {len(published)} published posts "
            f"({len(posts) - len(published)} drafts) from {self.posts_dir}"
        )
        return published

    def find_by_slug(self, slug: str) -> Optional[BlogPost]:
        """
        Load a single post by slug, whether or not it is published.

        Args:
            slug: Filename of the post without extension

        Returns:
            Optional[BlogPost]: The post, or None if no readable file matches

        Raises:
            MalformedDocumentError: If the file exists but its front-matter is unusable
        """
        path = find_content_file(self.posts_dir, slug)
        if path is None:
            logger.info(f"Post not found: {slug!r}")
            return None

        try:
            return self._load(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Post {slug!r} could not be read: {e}")
            return None

    def list_tags(self) -> List[str]:
        """Return the sorted, de-duplicated tags of all published posts."""
        tags = {tag for post in self.list_published() for tag in post.tags}
        return sorted(tags)

    def _load(self, path: Path) -> BlogPost:
        data, content = read_document(path)
        return self._build_post(slug_from_filename(path), data, content, source=path)

    def _build_post(self, slug: str, data: Dict[str, Any], content: str, source: Any) -> BlogPost:
        read_time = data.get("readTime") or calculate_read_time(content, self.words_per_minute)
        try:
            return BlogPost(
                slug=slug,
                title=data.get("title") or "",
                date=data.get("date") or "",
                excerpt=data.get("excerpt") or "",
                content=content,
                readTime=str(read_time),
                tags=data.get("tags") or [],
                published=data.get("published") is not False,
            )
        except ValidationError as e:
            raise MalformedDocumentError(source, str(e)) from e


# Singleton instance
_post_repository: Optional[PostRepository] = None


def get_post_repository() -> PostRepository:
    """
    Get or create the post repository singleton.

    The repository keeps no content between calls, only its directory.
    """
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository
