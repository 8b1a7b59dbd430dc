"""Errors raised by the export pipeline."""


class ExportError(Exception):
    """Base class for export failures. All of them are safe to retry."""

    user_message = "Error exporting resume. Please try again."


class RenderCaptureError(ExportError):
    """The rendered resume could not be captured as an image."""

    user_message = "Error exporting to PDF. Please try again."


class ExportSerializationError(ExportError):
    """Unexpected failure while building the text document."""

    user_message = "Error exporting to DOCX. Please try again."
