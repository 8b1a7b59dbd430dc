"""
Pydantic schemas for resume preview and export requests.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from resume_studio.schemas.resume_document_schema import ResumeDocument


class ExportFormat(str, Enum):
    """Supported export formats"""
    PDF = "pdf"
    DOCX = "docx"
    TEXT = "text"


class RenderResumeRequest(BaseModel):
    """Schema for preview and export requests carrying a whole document"""
    data: ResumeDocument = Field(default_factory=ResumeDocument, description="Resume document")
    template: Optional[str] = Field(
        default="modern",
        description="Template id; unknown ids fall back to modern"
    )

    model_config = ConfigDict(extra='ignore')



class SaveResumeRequest(RenderResumeRequest):
    """Schema for saving a document for the signed-in user"""
    name: Optional[str] = Field(default=None, max_length=255, description="Display name")
    resume_id: Optional[str] = Field(
        default=None,
        alias="resumeId",
        max_length=32,
        description="Saved resume to overwrite"
    )

    model_config = ConfigDict(extra='ignore', populate_by_name=True)
