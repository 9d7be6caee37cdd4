"""FastAPI application for the portfolio site and its content API."""

from io import BytesIO
from typing import Dict, List, Optional
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response, StreamingResponse
from loguru import logger
from app.models.content_models import BlogPost, Project
from app.models.cv_models import CVData
from app.models.response_models import ErrorResponse, HealthResponse, RootResponse
from app.services.cv_repository import CVRepository, get_cv_repository
from app.services.frontmatter import MalformedDocumentError
from app.services.page_renderer import PageRenderer
from app.services.pdf_generator import PDFGenerator
from app.services.post_repository import PostRepository, get_post_repository
from app.services.project_repository import ProjectRepository, get_project_repository
from app.settings import get_settings

API_VERSION = "1.0.0"

app = FastAPI(
    title="Portfolio Content API",
    description="""Personal portfolio site: blog, project showcase and CV, served from Markdown files.

## Content

* **Blog**: one Markdown file per post under `content/blog/`
* **Projects**: one Markdown file per project under `content/projects/`
* **CV**: front-matter of `content/cv.md`

## Usage

1. Browse the rendered site at `/`, `/blog`, `/projects` and `/cv`
2. Use `/api/v1/posts` and `/api/v1/projects` for the content as JSON
3. Use `/api/v1/cv/pdf` to download the CV as a PDF""",
    version=API_VERSION,
    tags_metadata=[
        {
            "name": "health",
            "description": "Health check and status endpoints"
        },
        {
            "name": "posts",
            "description": "Blog posts"
        },
        {
            "name": "projects",
            "description": "Project showcase"
        },
        {
            "name": "cv",
            "description": "Curriculum vitae as JSON or PDF"
        },
        {
            "name": "pages",
            "description": "Server-rendered HTML pages"
        }
    ]
)

_page_renderer: Optional[PageRenderer] = None


def get_page_renderer() -> PageRenderer:
    """Get or create the page renderer (templates are compiled once)."""
    global _page_renderer
    if _page_renderer is None:
        _page_renderer = PageRenderer()
    return _page_renderer


def get_pdf_generator(renderer: PageRenderer = Depends(get_page_renderer)) -> PDFGenerator:
    return PDFGenerator(renderer)


def _content_error_response(request: Request, exc: Exception) -> Response:
    """JSON error for API routes, an HTML error page for site pages."""
    logger.error(f"{request.url.path}: {exc}")
    if request.url.path.startswith("/api"):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )
    html = get_page_renderer().render_error(
        "Something Went Wrong",
        "This page could not be loaded. Please try again later.",
    )
    return HTMLResponse(html, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(MalformedDocumentError)
async def malformed_document_handler(request: Request, exc: MalformedDocumentError):
    return _content_error_response(request, exc)


@app.exception_handler(FileNotFoundError)
async def missing_document_handler(request: Request, exc: FileNotFoundError):
    # Only fixed documents (the CV) raise this; slug lookups return None
    return _content_error_response(request, exc)


ERROR_RESPONSES = {
    404: {
        "description": "Not found - No content file matches the slug",
        "model": ErrorResponse
    },
    500: {
        "description": "Internal server error - Malformed content file",
        "model": ErrorResponse
    }
}


# --- Service endpoints ---

@app.get(
    "/api",
    response_model=RootResponse,
    summary="API information",
    tags=["health"],
)
def api_root():
    """Returns basic API information including name and version."""
    return RootResponse(message="Portfolio Content API", version=API_VERSION)


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    tags=["health"],
)
def health():
    """
    Health check endpoint.

    Returns the health status of the API service.
    """
    return HealthResponse(status="ok")


# --- JSON content API ---

@app.get(
    "/api/v1/posts",
    response_model=List[BlogPost],
    summary="List published posts",
    description="Published posts, newest first. Drafts (`published: false`) are excluded.",
    tags=["posts"],
    responses={500: ERROR_RESPONSES[500]},
)
def list_posts(posts: PostRepository = Depends(get_post_repository)):
    return posts.list_published()


@app.get(
    "/api/v1/posts/tags",
    response_model=List[str],
    summary="List tags",
    description="Sorted, de-duplicated tags of all published posts.",
    tags=["posts"],
)
def list_tags(posts: PostRepository = Depends(get_post_repository)):
    return posts.list_tags()


@app.get(
    "/api/v1/posts/{slug}",
    response_model=BlogPost,
    summary="Get a post",
    description="Returns the post even if it is a draft.",
    tags=["posts"],
    responses=ERROR_RESPONSES,
)
def get_post(slug: str, posts: PostRepository = Depends(get_post_repository)):
    post = posts.find_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Post not found: {slug}")
    return post


@app.get(
    "/api/v1/projects",
    response_model=List[Project],
    summary="List projects",
    description="Featured projects first, then by start date, newest first.",
    tags=["projects"],
    responses={500: ERROR_RESPONSES[500]},
)
def list_projects(projects: ProjectRepository = Depends(get_project_repository)):
    return projects.list_all()


@app.get(
    "/api/v1/projects/categories",
    response_model=List[str],
    summary="List project categories",
    tags=["projects"],
)
def list_categories(projects: ProjectRepository = Depends(get_project_repository)):
    return projects.list_categories()


@app.get(
    "/api/v1/projects/by-category",
    response_model=Dict[str, List[Project]],
    summary="Projects grouped by category",
    tags=["projects"],
)
def projects_by_category(projects: ProjectRepository = Depends(get_project_repository)):
    return projects.group_by_category()


@app.get(
    "/api/v1/projects/{slug}",
    response_model=Project,
    summary="Get a project",
    tags=["projects"],
    responses=ERROR_RESPONSES,
)
def get_project(slug: str, projects: ProjectRepository = Depends(get_project_repository)):
    project = projects.find_by_slug(slug)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project not found: {slug}")
    return project


@app.get(
    "/api/v1/cv",
    response_model=CVData,
    summary="Get the CV",
    tags=["cv"],
    responses={500: {"description": "CV document missing or malformed", "model": ErrorResponse}},
)
def get_cv(cv: CVRepository = Depends(get_cv_repository)):
    return cv.load()


@app.get(
    "/api/v1/cv/pdf",
    response_class=StreamingResponse,
    summary="Download the CV as PDF",
    tags=["cv"],
    responses={
        200: {
            "description": "CV PDF file",
            "content": {
                "application/pdf": {
                    "schema": {
                        "type": "string",
                        "format": "binary"
                    }
                }
            }
        },
        500: {"description": "CV document missing or malformed", "model": ErrorResponse}
    }
)
def download_cv(
    cv: CVRepository = Depends(get_cv_repository),
    pdf_generator: PDFGenerator = Depends(get_pdf_generator),
):
    cv_data = cv.load()
    pdf_bytes = pdf_generator.generate_pdf(cv_data)

    name = get_settings().site_name.replace(" ", "_")
    filename = f"CV_{name}.pdf"

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )


# --- HTML pages ---

@app.get("/", response_class=HTMLResponse, tags=["pages"])
def home_page(
    posts: PostRepository = Depends(get_post_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    return renderer.render_home(posts.list_published(), projects.list_featured())


@app.get("/blog", response_class=HTMLResponse, tags=["pages"])
def blog_page(
    posts: PostRepository = Depends(get_post_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    return renderer.render_blog_index(posts.list_published())


@app.get("/blog/{slug}", response_class=HTMLResponse, tags=["pages"])
def blog_post_page(
    slug: str,
    posts: PostRepository = Depends(get_post_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    post = posts.find_by_slug(slug)
    if post is None:
        return HTMLResponse(
            renderer.render_not_found("Post Not Found", back_href="/blog", back_label="Blog"),
            status_code=404,
        )
    return renderer.render_post(post)


@app.get("/projects", response_class=HTMLResponse, tags=["pages"])
def projects_page(
    projects: ProjectRepository = Depends(get_project_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    return renderer.render_projects(projects.list_all(), projects.list_categories())


@app.get("/projects/{slug}", response_class=HTMLResponse, tags=["pages"])
def project_page(
    slug: str,
    projects: ProjectRepository = Depends(get_project_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    project = projects.find_by_slug(slug)
    if project is None:
        return HTMLResponse(
            renderer.render_not_found("Project Not Found", back_href="/projects", back_label="Projects"),
            status_code=404,
        )
    return renderer.render_project(project)


@app.get("/cv", response_class=HTMLResponse, tags=["pages"])
def cv_page(
    cv: CVRepository = Depends(get_cv_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    return renderer.render_cv(cv.load())


@app.get("/rss.xml", tags=["pages"])
def rss_feed(
    posts: PostRepository = Depends(get_post_repository),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    return Response(
        content=renderer.render_rss(posts.list_published()),
        media_type="application/rss+xml",
    )
