"""
Resume document schemas.

Canonical structured representation of a resume as edited in the builder.
Field names are snake_case in Python and camelCase on the wire.
"""
import uuid
from enum import Enum
from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def new_entry_id() -> str:
    """Generate an opaque identifier for a repeatable entry."""
    return uuid.uuid4().hex


class SkillLevel(str, Enum):
    """Self-assessed proficiency for a skill"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SectionKey(str, Enum):
    """Resume sections in rendering order"""
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"


# Sections holding lists of entries, in the order the editor walks them
REPEATABLE_SECTIONS = (
    SectionKey.EDUCATION,
    SectionKey.EXPERIENCE,
    SectionKey.SKILLS,
    SectionKey.PROJECTS,
    SectionKey.CERTIFICATIONS,
)


class DocumentModel(BaseModel):
    """Shared config: camelCase aliases, nulls fall back to field defaults."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class PersonalInfo(DocumentModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: str = Field(
        default="",
        validation_alias=AliasChoices("linkedinUrl", "linkedin_url", "linkedin"),
    )
    summary: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name.strip(), self.last_name.strip()) if part)


class EntryModel(DocumentModel):
    """Base for entries of repeatable sections."""

    id: str = Field(default_factory=new_entry_id)

    @field_validator("id", mode="before")
    @classmethod
    def ensure_id(cls, v: Any) -> str:
        if not v or not str(v).strip():
            return new_entry_id()
        return str(v)

    def content_fields(self) -> Dict[str, Any]:
        """Fields carrying user content (everything but the identifier)."""
        return self.model_dump(exclude={"id"})

    def is_blank(self) -> bool:
        """True when no text field holds any non-whitespace content."""
        for value in self.content_fields().values():
            if isinstance(value, str) and value.strip():
                return False
            if isinstance(value, list) and any(str(item).strip() for item in value):
                return False
        return True


class EducationEntry(EntryModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    description: str = ""


class ExperienceEntry(EntryModel):
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    is_current: bool = Field(
        default=False,
        validation_alias=AliasChoices("isCurrent", "is_current", "current"),
    )
    description: str = ""
    achievements: List[str] = Field(default_factory=list)

    def has_content(self) -> bool:
        """An entry is shown only if position, company or description is filled in."""
        return any(value.strip() for value in (self.position, self.company, self.description))


class SkillEntry(EntryModel):
    name: str = ""
    level: SkillLevel = SkillLevel.INTERMEDIATE

    def is_blank(self) -> bool:
        # level always has a value, only the name counts
        return not self.name.strip()


class ProjectEntry(EntryModel):
    name: str = ""
    description: str = ""
    technologies: str = ""
    link: str = ""
    start_date: str = ""
    end_date: str = ""


class CertificationEntry(EntryModel):
    name: str = ""
    issuer: str = ""
    date: str = ""
    link: str = ""


ENTRY_TYPES = {
    SectionKey.EDUCATION: EducationEntry,
    SectionKey.EXPERIENCE: ExperienceEntry,
    SectionKey.SKILLS: SkillEntry,
    SectionKey.PROJECTS: ProjectEntry,
    SectionKey.CERTIFICATIONS: CertificationEntry,
}


class ResumeDocument(DocumentModel):
    """Root aggregate of the resume builder"""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[SkillEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_entry_ids(self) -> "ResumeDocument":
        """Ids are unique within a section; later repeats get a fresh id."""
        for key in REPEATABLE_SECTIONS:
            seen = set()
            for entry in getattr(self, key.value):
                if entry.id in seen:
                    entry.id = new_entry_id()
                seen.add(entry.id)
        return self

    @classmethod
    def scaffold(cls) -> "ResumeDocument":
        """New document with one empty entry per repeatable section."""
        return cls(**{key.value: [ENTRY_TYPES[key]()] for key in REPEATABLE_SECTIONS})

    def entries(self, section: SectionKey) -> List[EntryModel]:
        if section not in ENTRY_TYPES:
            raise ValueError(f"Section '{section}' does not hold entries")
        return getattr(self, section.value)

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation (camelCase)."""
        return self.model_dump(mode="json", by_alias=True)
