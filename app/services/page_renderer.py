"""Service for rendering site pages from Jinja2 templates."""

from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from app.models.content_models import BlogPost, Project, parse_iso_datetime
from app.models.cv_models import CVData
from app.settings import SiteSettings, get_settings
from app.utils.template_helpers import register_jinja_filters, highlight_css


NAVIGATION = [
    {"name": "Home", "href": "/"},
    {"name": "Blog", "href": "/blog"},
    {"name": "Projects", "href": "/projects"},
    {"name": "CV", "href": "/cv"},
]

RECENT_POSTS_ON_HOME = 3

# Technology badges shown per card on the project list
TECHNOLOGIES_PER_CARD = 4


class PageRenderer:
    """Service to render HTML pages and the RSS feed from Jinja2 templates."""

    def __init__(self, template_dir: Optional[Path] = None, settings: Optional[SiteSettings] = None):
        """
        Initialize the page renderer.

        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to app/templates/
            settings: Site settings. Defaults to the environment configuration.
        """
        if template_dir is None:
            # Get the app directory (parent of services)
            app_dir = Path(__file__).parent.parent
            template_dir = app_dir / "templates"

        self.template_dir = template_dir
        self.settings = settings or get_settings()
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )

        # Register custom filters
        register_jinja_filters(self.env)
        self.env.globals.update(
            site=self.settings,
            navigation=NAVIGATION,
            code_css=Markup(highlight_css(self.settings.code_style)),
        )

    def _render(self, template_name: str, active: str = "", **context: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(active=active, **context)

    def render_home(self, recent_posts: List[BlogPost], featured_projects: List[Project]) -> str:
        return self._render(
            "home.html",
            active="/",
            recent_posts=recent_posts[:RECENT_POSTS_ON_HOME],
            featured_projects=featured_projects,
        )

    def render_blog_index(self, posts: List[BlogPost]) -> str:
        """
        Render the blog listing.

        Args:
            posts: Published posts in display order

        Returns:
            str: Rendered HTML; shows a placeholder message when there are no posts
        """
        return self._render("blog_index.html", active="/blog", posts=posts)

    def render_post(self, post: BlogPost) -> str:
        breadcrumbs = [{"label": "Blog", "href": "/blog"}, {"label": post.title}]
        return self._render("blog_post.html", active="/blog", post=post, breadcrumbs=breadcrumbs)

    def render_projects(self, projects: List[Project], categories: List[str]) -> str:
        """
        Render the project listing.

        Category badges are only shown when there is more than one category.

        Args:
            projects: Projects in display order
            categories: Sorted category names

        Returns:
            str: Rendered HTML
        """
        return self._render(
            "projects_index.html",
            active="/projects",
            projects=projects,
            categories=categories,
            technologies_per_card=TECHNOLOGIES_PER_CARD,
        )

    def render_project(self, project: Project) -> str:
        breadcrumbs = [{"label": "Projects", "href": "/projects"}, {"label": project.title}]
        return self._render("project.html", active="/projects", project=project, breadcrumbs=breadcrumbs)

    def render_cv(self, cv: CVData, for_print: bool = False) -> str:
        """
        Render the CV page.

        Args:
            cv: CV data
            for_print: Render without navigation and footer (used for the PDF)

        Returns:
            str: Rendered HTML
        """
        return self._render("cv.html", active="/cv", cv=cv, for_print=for_print)

    def render_not_found(self, title: str, back_href: str = "/", back_label: str = "Home") -> str:
        return self._render("not_found.html", title=title, back_href=back_href, back_label=back_label)

    def render_error(self, title: str, message: str) -> str:
        return self._render("error.html", title=title, message=message)

    def render_rss(self, posts: List[BlogPost]) -> str:
        """
        Render an RSS 2.0 feed of published posts.

        Args:
            posts: Published posts, newest first

        Returns:
            str: RSS XML document
        """
        items: List[Dict[str, Any]] = []
        for post in posts:
            items.append({
                "post": post,
                "link": f"{self.settings.site_url.rstrip('/')}/blog/{post.slug}",
                "pub_date": _rfc822(post.date),
            })
        return self._render("rss.xml", items=items, build_date=format_datetime(datetime.now(timezone.utc)))


def _rfc822(iso_date: str) -> str:
    if not iso_date:
        return ""
    return format_datetime(parse_iso_datetime(iso_date))
