"""Service for generating the CV PDF from HTML."""

from typing import Optional
from app.services.page_renderer import PageRenderer
from app.models.cv_models import CVData

# The print layout has no site navigation, so only a small page margin is needed
PAGE_CSS = """
    @page {
        size: A4;
        margin: 18px;
    }
"""


class PDFGenerator:
    """
    Convert the CV page to PDF with WeasyPrint.

    The PDF is the same cv.html template the site serves at /cv, rendered in
    print mode: navigation, footer and the "Download PDF" link are left out,
    and the page is laid out on A4.
    """

    def __init__(self, page_renderer: Optional[PageRenderer] = None):
        self.page_renderer = page_renderer or PageRenderer()

    def generate_pdf(self, cv: CVData) -> bytes:
        """
        Render the CV in print mode and convert it to PDF.

        Args:
            cv: CV loaded by CVRepository

        Returns:
            bytes: PDF document
        """
        # WeasyPrint loads Pango/Cairo when imported
        from weasyprint import HTML as WeasyHTML, CSS

        html_content = self.page_renderer.render_cv(cv, for_print=True)
        return WeasyHTML(string=html_content).write_pdf(stylesheets=[CSS(string=PAGE_CSS)])
