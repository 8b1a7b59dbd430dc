"""Pydantic schemas for request/response validation."""

from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel


class ErrorResponseSchema(BaseModel):
    """Schema for error responses."""

    error: str
    message: str
    status: int
    details: Optional[dict] = None


class HealthCheckSchema(BaseModel):
    """Schema for health check response."""

    status: str
    timestamp: datetime
    environment: str
    version: str
    uptime: float
    services: Dict[str, str]


class AppInfoSchema(BaseModel):
    """Schema for app info response."""

    name: str
    version: str
    environment: str
    debug: bool
    timestamp: datetime


from resume_studio.schemas.resume_document_schema import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    ResumeDocument,
    SectionKey,
    SkillEntry,
    SkillLevel,
)

from resume_studio.schemas.resume_export_schema import (
    ExportFormat,
    RenderResumeRequest,
    SaveResumeRequest,
)

from resume_studio.schemas.analysis_schema import (
    AnalyzeResumeRequest,
    ParsedAnalysis,
    ResumeAnalysis,
    UnparsedAnalysis,
)
