"""Front-matter parsing for Markdown content files."""

from pathlib import Path
from typing import Any, Dict, Tuple
import yaml


_DELIMITER = "---"


class MalformedDocumentError(ValueError):
    """Raised when a content file's front-matter cannot be used."""

    def __init__(self, source: Any, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed document {source}: {reason}")


def parse_front_matter(text: str, source: Any = "<string>") -> Tuple[Dict[str, Any], str]:
    """
    Split a document into its front-matter mapping and Markdown body.

    The front-matter block must start on the first line with ``---`` and
    end with a line containing only ``---``.

    Args:
        text: Raw file contents
        source: Name used in error messages (usually the file path)

    Returns:
        Tuple of (metadata, body). Documents without a block return ({}, text).

    Raises:
        MalformedDocumentError: If the block is not valid YAML or not a mapping
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _DELIMITER:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].rstrip() == _DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            break
    else:
        # Opening delimiter without a closing one is plain Markdown
        return {}, text

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise MalformedDocumentError(source, f"invalid YAML front-matter: {e}") from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            source, f"front-matter must be a mapping, got {type(data).__name__}"
        )
    return data, body


def read_document(path: Path) -> Tuple[Dict[str, Any], str]:
    """
    Read a UTF-8 content file and parse its front-matter.

    Raises:
        OSError: If the file cannot be read
        MalformedDocumentError: If the front-matter is malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return parse_front_matter(text, source=path)

