import logging
import os
from dataclasses import dataclass
from typing import Optional

from weasyprint import HTML, CSS

from jobportal.core.errors import PdfExportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportOptions:
    """Page setup shared by every exported document."""
    margin: str = "0.5in"
    page_size: str = "letter"
    orientation: str = "portrait"
    image_quality: float = 0.98
    # Raster scale of the browser export. WeasyPrint writes vector output.
    scale: int = 2

    @property
    def jpeg_quality(self) -> int:
        """``image_quality`` on WeasyPrint's 0-95 JPEG scale."""
        return max(0, min(95, round(self.image_quality * 95)))

    def page_css(self) -> str:
        # Overrides any @page rule in the template itself
        return (
            f"@page {{ size: {self.page_size} {self.orientation} !important; "
            f"margin: {self.margin} !important; }}"
        )


DEFAULT_EXPORT_OPTIONS = ExportOptions()


def create_pdf(
    html_content: str,
    pdf_path: str,
    css_content: Optional[str] = None,
    options: Optional[ExportOptions] = None,
) -> str:
    """Renders HTML (and optional extra CSS) into a PDF file using WeasyPrint.

    Raises:
        PdfExportError: rendering or writing failed; no partial file is left behind.
    """
    options = options or DEFAULT_EXPORT_OPTIONS
    stylesheets = [CSS(string=options.page_css())]
    if css_content:
        stylesheets.append(CSS(string=css_content))
    try:
        html = HTML(string=html_content, base_url=".")
        html.write_pdf(pdf_path, stylesheets=stylesheets, jpeg_quality=options.jpeg_quality)
    except Exception as e:
        logger.error(f"Error during PDF generation for {pdf_path}: {e}")
        if os.path.exists(pdf_path):
            os.remove(pdf_path)
        raise PdfExportError(f"Failed to generate PDF: {e}") from e
    logger.info(f"PDF successfully generated at: {pdf_path}")
    return pdf_path
