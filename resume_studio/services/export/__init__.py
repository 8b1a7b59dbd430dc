"""
Resume Export Service

Template-based rendering with PDF, DOCX and plain-text export.
"""

from .resume_export_service import (
    ExportArtifact,
    PageImageLayout,
    ResumeExportService,
    compute_page_layout,
    resume_export_service,
)
from .base_template import BaseResumeTemplate, RenderedResume, ResumeTemplateType
from .exceptions import ExportError, ExportSerializationError, RenderCaptureError

__all__ = [
    "ExportArtifact",
    "PageImageLayout",
    "ResumeExportService",
    "compute_page_layout",
    "resume_export_service",
    "BaseResumeTemplate",
    "RenderedResume",
    "ResumeTemplateType",
    "ExportError",
    "ExportSerializationError",
    "RenderCaptureError",
]
