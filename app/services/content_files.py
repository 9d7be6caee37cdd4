"""Locate Markdown content files on disk."""

from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger


# Tried in this order when looking up a slug
CONTENT_EXTENSIONS = (".md", ".markdown")


def slug_from_filename(path: Path) -> str:
    """Slug is the filename without its extension."""
    return path.stem


def is_content_file(path: Path) -> bool:
    # Must stay in step with find_content_file: hidden files and upper-case
    # extensions can never be looked up by slug
    return path.is_file() and not path.name.startswith(".") and path.suffix in CONTENT_EXTENSIONS


def is_valid_slug(slug: str) -> bool:
    """A slug must name a file directly inside the content directory."""
    if not slug or slug.startswith("."):
        return False
    return "/" not in slug and "\\" not in slug and "\x00" not in slug


def list_content_files(directory: Path) -> List[Path]:
    """
    List content files in a directory, sorted by filename.

    When a slug has both a ``.md`` and a ``.markdown`` file only the one that
    find_content_file resolves to is listed.

    Args:
        directory: Directory to scan

    Returns:
        List[Path]: Content files, one per slug. Empty if the directory does not exist.
    """
    if not directory.is_dir():
        logger.warning(f"Content directory not found: {directory}")
        return []

    candidates = [path for path in directory.iterdir() if is_content_file(path)]
    by_slug: Dict[str, Path] = {}
    for path in sorted(candidates, key=lambda p: (CONTENT_EXTENSIONS.index(p.suffix), p.name)):
        slug = slug_from_filename(path)
        if slug in by_slug:
            logger.warning(f"Ignoring {path.name}: slug {slug!r} is already provided by {by_slug[slug].name}")
            continue
        by_slug[slug] = path

    files = sorted(by_slug.values())
    logger.debug(f"Found {len(files)} content files in {directory}")
    return files


def find_content_file(directory: Path, slug: str) -> Optional[Path]:
    """
    Find the content file for a slug.

    Args:
        directory: Directory holding the content files
        slug: Filename without extension

    Returns:
        Optional[Path]: Path of the first matching file, or None
    """
    if not is_valid_slug(slug):
        return None

    for extension in CONTENT_EXTENSIONS:
        path = directory / f"{slug}{extension}"
        if is_content_file(path):
            return path
    return None
