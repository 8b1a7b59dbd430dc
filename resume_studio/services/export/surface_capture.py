"""
Surface Capture

Turns a rendered resume (HTML) into a raster image. WeasyPrint lays the
HTML out on one tall page, PyMuPDF measures where the content ends and
rasterizes the visible area.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import fitz  # PyMuPDF

from .base_template import SURFACE_MIN_HEIGHT_PT, SURFACE_WIDTH_PT
from .exceptions import RenderCaptureError


logger = logging.getLogger(__name__)

# Tall enough for any single resume, content below is never captured
CAPTURE_PAGE_HEIGHT_PT = 14400
CAPTURE_PAGE_CSS = f"@page {{ size: {SURFACE_WIDTH_PT}pt {CAPTURE_PAGE_HEIGHT_PT}pt; margin: 0; }}"
BOTTOM_PADDING_PT = 18


@dataclass(frozen=True)
class CapturedSurface:
    """A laid-out resume ready to be rasterized."""
    pdf_bytes: bytes
    width: float
    height: float

    def rasterize(self, visible_height: Optional[float] = None, scale: float = 2.0) -> bytes:
        """
        Rasterize the surface to PNG.

        Args:
            visible_height: Height in points to keep from the top; the rest is clipped
            scale: Pixels per point

        Returns:
            PNG bytes
        """
        height = self.height if visible_height is None else min(visible_height, self.height)

        try:
            with fitz.open(stream=self.pdf_bytes, filetype="pdf") as doc:
                pixmap = doc[0].get_pixmap(
                    matrix=fitz.Matrix(scale, scale),
                    clip=fitz.Rect(0, 0, self.width, height),
                    alpha=False,
                )
                return pixmap.tobytes("png")
        except Exception as e:
            logger.error(f"Rasterizing rendered resume failed: {e}")
            raise RenderCaptureError(f"Could not rasterize rendered resume: {e}") from e


def capture_surface(html: str) -> CapturedSurface:
    """
    Lay out rendered HTML and measure it.

    The surface is as wide as the resume page and as tall as its content,
    never shorter than the minimum page height.

    Raises:
        RenderCaptureError: If there is nothing to capture or layout fails
    """
    if not html or not html.strip():
        raise RenderCaptureError("Nothing to capture: the rendered view is empty")

    # Lazy import WeasyPrint to avoid startup crashes when system libs are missing
    try:
        from weasyprint import CSS, HTML
    except (ImportError, OSError) as e:
        logger.error(f"WeasyPrint not available: {e}")
        raise RenderCaptureError(
            "PDF export requires WeasyPrint and its system libraries (pango, glib)."
        ) from e

    try:
        pdf_bytes = HTML(string=html).write_pdf(stylesheets=[CSS(string=CAPTURE_PAGE_CSS)])
    except Exception as e:
        logger.error(f"Laying out rendered resume failed: {e}")
        raise RenderCaptureError(f"Could not lay out rendered resume: {e}") from e

    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        if doc.page_count == 0:
            raise RenderCaptureError("Rendered resume produced no pages")

        page = doc[0]
        blocks = page.get_text("blocks")
        content_bottom = max((block[3] for block in blocks), default=0.0)
        height = min(
            max(float(SURFACE_MIN_HEIGHT_PT), content_bottom + BOTTOM_PADDING_PT),
            page.rect.height,
        )
        width = page.rect.width

    logger.debug(f"Captured surface {width:.0f}x{height:.0f}pt")
    return CapturedSurface(pdf_bytes=pdf_bytes, width=width, height=height)
