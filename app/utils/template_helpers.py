"""Helper functions for Jinja2 templates."""

from datetime import date
from typing import Optional
import markdown as markdown_lib
from jinja2 import Environment
from markupsafe import Markup
from pygments.formatters import HtmlFormatter


MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite", "sane_lists"]

MARKDOWN_EXTENSION_CONFIGS = {
    "codehilite": {
        "css_class": "highlight",
        # Only fences with an explicit language get highlighted
        "guess_lang": False,
    },
}


def render_markdown(text: Optional[str]) -> Markup:
    """
    Convert Markdown to HTML with syntax-highlighted code blocks.

    Example: "```python\\nprint(1)\\n```" -> '<div class="highlight"><pre>...'

    Args:
        text: Markdown source

    Returns:
        Markup: Rendered HTML, safe to insert into an autoescaped template
    """
    if not text:
        return Markup("")
    html = markdown_lib.markdown(
        text,
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        output_format="html",
    )
    return Markup(html)


def highlight_css(style: str = "monokai") -> str:
    """
    Stylesheet for code blocks rendered by render_markdown.

    Args:
        style: Pygments style name

    Returns:
        str: CSS rules scoped to .highlight
    """
    return HtmlFormatter(style=style).get_style_defs(".highlight")


def format_date(value: Optional[str]) -> str:
    """
    Format an ISO date for display.

    Example: "2024-01-05" -> "January 5, 2024"

    Args:
        value: ISO date, or UTC date-time as stored on posts and projects

    Returns:
        str: Long-form date, or the input unchanged if it is not an ISO date
    """
    if not value:
        return ""
    try:
        parsed = date.fromisoformat(str(value)[:10])
    except ValueError:
        return str(value)
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def year_of(value: Optional[str]) -> str:
    """Year part of an ISO date ("2023-04-01" -> "2023")."""
    if not value:
        return ""
    return str(value)[:4]


def status_label(status: Optional[str]) -> str:
    """Human-readable project status ("in-progress" -> "in progress")."""
    if not status:
        return ""
    return status.replace("-", " ")


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters['markdown'] = render_markdown
    env.filters['format_date'] = format_date
    env.filters['year'] = year_of
    env.filters['status_label'] = status_label
