"""
Pydantic schemas for editor session requests.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from resume_studio.schemas.resume_document_schema import ResumeDocument, SectionKey


class CreateSessionRequest(BaseModel):
    """Start an editor session, optionally from an existing document"""
    data: Optional[ResumeDocument] = Field(default=None, description="Document to edit; scaffolded when omitted")
    template: Optional[str] = "modern"

    model_config = ConfigDict(extra='ignore')


class FieldChangesRequest(BaseModel):
    """Partial update: camelCase field names mapped to new values"""
    changes: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra='ignore')


class AppendEntryRequest(BaseModel):
    """Append an entry to a repeatable section"""
    values: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra='ignore')


class GoToStepRequest(BaseModel):
    """Jump to a step by number (1-based) or section name"""
    step: Any

    model_config = ConfigDict(extra='ignore')


class SelectTemplateRequest(BaseModel):
    template: str


class ExportSessionRequest(BaseModel):
    format: str = "pdf"

    model_config = ConfigDict(extra='ignore')


class SaveSessionRequest(BaseModel):
    """Save the session's document, optionally over an existing resume"""
    name: Optional[str] = Field(default=None, max_length=255)
    resume_id: Optional[str] = Field(default=None, alias="resumeId", max_length=32)

    model_config = ConfigDict(extra='ignore', populate_by_name=True)


def parse_section(value: str) -> SectionKey:
    """
    Resolve a URL section segment to a section key.

    Raises:
        ValueError: If the section is unknown
    """
    try:
        return SectionKey(value.lower())
    except ValueError:
        raise ValueError(f"Unknown section '{value}'")
