"""
Resume Export Service

Main service for rendering resumes under a template and exporting them to
PDF (page image), DOCX and plain text.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import fitz  # PyMuPDF

from config.settings import settings
from resume_studio.schemas.resume_document_schema import ResumeDocument
from resume_studio.schemas.resume_export_schema import ExportFormat
from .base_template import BaseResumeTemplate, RenderedResume, ResumeTemplateType, TemplateMetadata
from .exceptions import ExportSerializationError, RenderCaptureError
from .surface_capture import CapturedSurface, capture_surface
from .templates import ClassicTemplate, MinimalTemplate, ModernTemplate
from .text_export import build_resume_docx, serialize_resume_text


logger = logging.getLogger(__name__)

# A4 page the captured image is placed on, in millimeters
PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0
PAGE_MARGIN_MM = 10.0
POINTS_PER_MM = 72 / 25.4

MIMETYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ExportFormat.TEXT: "text/plain; charset=utf-8",
}

EXTENSIONS = {
    ExportFormat.PDF: "pdf",
    ExportFormat.DOCX: "docx",
    ExportFormat.TEXT: "txt",
}


@dataclass(frozen=True)
class PageImageLayout:
    """Placement of the captured image on the page, in millimeters."""
    x: float
    y: float
    width: float
    height: float
    # Share of the captured surface height that fits on the page
    visible_fraction: float

    def to_rect(self) -> fitz.Rect:
        return fitz.Rect(
            self.x * POINTS_PER_MM,
            self.y * POINTS_PER_MM,
            (self.x + self.width) * POINTS_PER_MM,
            (self.y + self.height) * POINTS_PER_MM,
        )


def compute_page_layout(surface_width: float, surface_height: float) -> PageImageLayout:
    """
    Fit a captured surface on a single A4 page.

    The image fills the width between the margins. Its height is capped at
    the printable height; anything below is clipped, never squeezed.
    The image is centered on the page.
    """
    if surface_width <= 0 or surface_height <= 0:
        raise RenderCaptureError("Captured surface has no area")

    available_width = PAGE_WIDTH_MM - 2 * PAGE_MARGIN_MM
    available_height = PAGE_HEIGHT_MM - 2 * PAGE_MARGIN_MM

    image_height = surface_height * available_width / surface_width
    final_height = min(image_height, available_height)

    return PageImageLayout(
        x=(PAGE_WIDTH_MM - available_width) / 2,
        y=(PAGE_HEIGHT_MM - final_height) / 2,
        width=available_width,
        height=final_height,
        visible_fraction=final_height / image_height,
    )


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable export."""
    filename: str
    mimetype: str
    content: bytes


class ResumeExportService:
    """
    Service for rendering and exporting resumes with template support.

    Provides:
    - HTML preview for every template
    - PDF export: rendered view captured as an image on one A4 page
    - DOCX and plain-text export of the labeled text layout
    - Template metadata for UI display
    """

    def __init__(
        self,
        capture: Callable[[str], CapturedSurface] = capture_surface,
        capture_scale: float = 2.0,
    ):
        """Initialize with all available templates."""
        self._templates: Dict[ResumeTemplateType, BaseResumeTemplate] = {
            ResumeTemplateType.MODERN: ModernTemplate(),
            ResumeTemplateType.CLASSIC: ClassicTemplate(),
            ResumeTemplateType.MINIMAL: MinimalTemplate(),
        }
        missing = set(ResumeTemplateType) - set(self._templates)
        if missing:
            raise RuntimeError(f"No template registered for: {sorted(t.value for t in missing)}")

        self._capture = capture
        self._capture_scale = capture_scale

    @property
    def available_templates(self) -> List[TemplateMetadata]:
        """Get metadata for all available templates."""
        return [t.metadata for t in self._templates.values()]

    def get_template(self, template_id: Optional[str]) -> BaseResumeTemplate:
        """
        Get a template by its ID.

        Args:
            template_id: Template identifier (e.g., "modern", "classic")

        Returns:
            Template instance; unknown ids get the default template
        """
        return self._templates[ResumeTemplateType.resolve(template_id)]

    def render(self, document: ResumeDocument, template: Optional[str] = "modern") -> RenderedResume:
        """Render a document under a template."""
        return self.get_template(template).render(document)

    def get_preview_html(self, document: ResumeDocument, template: Optional[str] = "modern") -> str:
        """HTML preview of a resume."""
        return self.render(document, template).html

    def export(
        self,
        document: ResumeDocument,
        export_format: ExportFormat,
        template: Optional[str] = "modern",
    ) -> ExportArtifact:
        """Export a document in the given format."""
        if export_format == ExportFormat.PDF:
            return self.export_pdf(document, template)
        if export_format == ExportFormat.DOCX:
            return self.export_docx(document)
        return self.export_text(document)

    def export_pdf(self, document: ResumeDocument, template: Optional[str] = "modern") -> ExportArtifact:
        """
        Export resume to PDF.

        The rendered view is captured as an image and placed on a single
        A4 page. Content taller than one page is clipped.

        Raises:
            RenderCaptureError: If the rendered view cannot be captured
        """
        rendered = self.render(document, template)
        logger.info(f"Generating PDF with template: {rendered.template.value}")

        surface = self._capture(rendered.html)
        layout = compute_page_layout(surface.width, surface.height)
        if layout.visible_fraction < 1:
            logger.info(
                f"Resume taller than one page, clipping to {layout.visible_fraction:.0%} of its height"
            )

        image = surface.rasterize(
            visible_height=surface.height * layout.visible_fraction,
            scale=self._capture_scale,
        )

        try:
            with fitz.open() as pdf:
                page = pdf.new_page(
                    width=PAGE_WIDTH_MM * POINTS_PER_MM,
                    height=PAGE_HEIGHT_MM * POINTS_PER_MM,
                )
                page.insert_image(layout.to_rect(), stream=image, keep_proportion=False)
                pdf_bytes = pdf.tobytes()
        except Exception as e:
            logger.error(f"Embedding captured resume failed: {e}")
            raise RenderCaptureError(f"Could not place captured resume on the page: {e}") from e

        logger.info(f"PDF generated successfully, size: {len(pdf_bytes)} bytes")
        return ExportArtifact(
            filename=self.build_filename(document, ExportFormat.PDF),
            mimetype=MIMETYPES[ExportFormat.PDF],
            content=pdf_bytes,
        )

    def export_docx(self, document: ResumeDocument) -> ExportArtifact:
        """
        Export resume to DOCX.

        Raises:
            ExportSerializationError: On unexpected failure building the file
        """
        try:
            docx_bytes = build_resume_docx(document)
        except Exception as e:
            logger.error(f"DOCX generation failed: {e}", exc_info=True)
            raise ExportSerializationError(f"DOCX generation failed: {e}") from e

        logger.info(f"DOCX generated successfully, size: {len(docx_bytes)} bytes")
        return ExportArtifact(
            filename=self.build_filename(document, ExportFormat.DOCX),
            mimetype=MIMETYPES[ExportFormat.DOCX],
            content=docx_bytes,
        )

    def export_text(self, document: ResumeDocument) -> ExportArtifact:
        """Export the labeled plain-text layout."""
        try:
            text = serialize_resume_text(document)
        except Exception as e:
            logger.error(f"Text export failed: {e}", exc_info=True)
            raise ExportSerializationError(f"Text export failed: {e}") from e

        return ExportArtifact(
            filename=self.build_filename(document, ExportFormat.TEXT),
            mimetype=MIMETYPES[ExportFormat.TEXT],
            content=text.encode("utf-8"),
        )

    def get_templates_info(self) -> List[Dict[str, Any]]:
        """
        Get information about all templates for API response.

        Returns:
            List of template info dictionaries
        """
        return [
            {
                "id": meta.id,
                "name": meta.name,
                "description": meta.description,
                "is_default": meta.is_default,
            }
            for meta in self.available_templates
        ]

    @classmethod
    def build_filename(cls, document: ResumeDocument, export_format: ExportFormat) -> str:
        """'{firstName}_{lastName}_Resume.{ext}', skipping empty name parts."""
        info = document.personal_info
        parts = [cls.sanitize_filename(info.first_name), cls.sanitize_filename(info.last_name)]
        stem = "_".join([part for part in parts if part] + ["Resume"])
        return f"{stem}.{EXTENSIONS[export_format]}"

    @staticmethod
    def sanitize_filename(text: str) -> str:
        """
        Sanitize text for use in filename.

        Removes characters that could cause issues in HTTP headers or file systems.
        Returns an empty string when nothing usable remains.
        """
        if not text:
            return ""

        text = unicodedata.normalize('NFKD', text)

        replacements = {
            '/': '-',
            '\\': '-',
            ':': '-',
            '|': '-',
        }
        for old, new in replacements.items():
            text = text.replace(old, new)

        # Drop accents and any other non-ASCII characters
        text = text.encode('ascii', 'ignore').decode('ascii')

        text = re.sub(r'[-\s]+', '_', text)
        text = re.sub(r'[^\w\-]', '', text)

        return text.strip('_-')[:50]


# Singleton instance for use across the application
resume_export_service = ResumeExportService(capture_scale=settings.capture_scale)
