"""
Pydantic schemas for AI resume analysis.
"""
from typing import List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AnalyzeResumeRequest(BaseModel):
    """Schema for an analysis request"""
    resume_text: str = Field(..., min_length=1, description="Resume as plain text")
    job_description: Optional[str] = Field(default=None, description="Target job description")
    resume_id: Optional[str] = Field(default=None, description="Saved resume the analysis belongs to")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    @field_validator('resume_text')
    @classmethod
    def resume_text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Resume text is required')
        return v


class ResumeAnalysis(BaseModel):
    """Structured analysis returned by the model"""
    ats_score: int = Field(
        ...,
        ge=0,
        le=100,
        validation_alias=AliasChoices("atsScore", "ats_score"),
        serialization_alias="atsScore",
        description="Applicant tracking system compatibility, 0-100",
    )
    overall_score: int = Field(
        ...,
        ge=0,
        le=100,
        validation_alias=AliasChoices("overallScore", "overall_score"),
        serialization_alias="overallScore",
        description="Overall assessment, 0-100",
    )
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    @field_validator('ats_score', 'overall_score', mode='before')
    @classmethod
    def round_scores(cls, v):
        if isinstance(v, float):
            return round(v)
        return v


class ParsedAnalysis(BaseModel):
    """The model answered with a well-formed analysis"""
    kind: Literal["parsed"] = "parsed"
    analysis: ResumeAnalysis

    def to_response(self) -> dict:
        return {"kind": self.kind, "analysis": self.analysis.model_dump(by_alias=True)}


class UnparsedAnalysis(BaseModel):
    """The model answered, but not with the expected structure"""
    kind: Literal["unparsed"] = "unparsed"
    raw_text: str

    def to_response(self) -> dict:
        return {"kind": self.kind, "rawResponse": self.raw_text}


AnalysisResult = Union[ParsedAnalysis, UnparsedAnalysis]
