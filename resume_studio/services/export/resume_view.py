"""
Resume View

Template-independent layout of a resume: which sections appear, in which
order, and the display strings of every entry. Templates only decide how
this view looks.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from resume_studio.schemas.resume_document_schema import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeDocument,
    SectionKey,
    SkillEntry,
)


MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

PRESENT_LABEL = "Present"

# YYYY-MM, YYYY-MM-DD or a full ISO timestamp
_ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?(?:[T ].*)?$")


def format_date(value: str) -> str:
    """
    Format a stored date as '{short month} {full year}'.

    Empty input gives an empty string. Input that is not an ISO date is
    shown as typed rather than failing.
    """
    if not value or not value.strip():
        return ""

    text = value.strip()
    match = _ISO_DATE_PATTERN.match(text)
    if not match:
        return text

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return text
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


def format_date_range(start: str, end: str, is_current: bool = False) -> str:
    """Format a start/end pair. Current positions always end in 'Present'."""
    start_text = format_date(start)
    end_text = PRESENT_LABEL if is_current else format_date(end)

    if start_text and end_text:
        return f"{start_text} - {end_text}"
    return start_text or end_text


def join_nonempty(parts, separator: str) -> str:
    return separator.join(part.strip() for part in parts if part and part.strip())


def degree_line(degree: str, field_of_study: str) -> str:
    """'Degree in Field', degrading to whichever half is present."""
    degree, field_of_study = degree.strip(), field_of_study.strip()
    if degree and field_of_study:
        return f"{degree} in {field_of_study}"
    return degree or field_of_study


@dataclass(frozen=True)
class EntryView:
    """Display strings of one resume entry."""
    entry_id: str
    title: str = ""
    subtitle: str = ""
    location: str = ""
    date_range: str = ""
    description: str = ""
    details: Tuple[str, ...] = ()
    link: str = ""
    level: str = ""


@dataclass(frozen=True)
class SectionView:
    key: SectionKey
    entries: Tuple[EntryView, ...]


@dataclass(frozen=True)
class HeaderView:
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: str = ""

    @property
    def contact_items(self) -> Tuple[str, ...]:
        return tuple(item for item in (self.email, self.phone, self.location) if item)


@dataclass(frozen=True)
class ResumeView:
    """Laid-out resume content, sections in rendering order, empty ones dropped."""
    header: HeaderView
    sections: Tuple[SectionView, ...] = field(default_factory=tuple)

    def section(self, key: SectionKey) -> Optional[SectionView]:
        for section in self.sections:
            if section.key == key:
                return section
        return None

    @property
    def section_keys(self) -> Tuple[SectionKey, ...]:
        return tuple(section.key for section in self.sections)

    def with_section(self, updated: SectionView) -> "ResumeView":
        """Copy of the view with one section replaced."""
        sections = tuple(updated if s.key == updated.key else s for s in self.sections)
        return replace(self, sections=sections)


def _experience_view(entry: ExperienceEntry) -> EntryView:
    return EntryView(
        entry_id=entry.id,
        title=entry.position.strip(),
        subtitle=entry.company.strip(),
        location=entry.location.strip(),
        date_range=format_date_range(entry.start_date, entry.end_date, entry.is_current),
        description=entry.description.strip(),
        details=tuple(a.strip() for a in entry.achievements if a and a.strip()),
    )


def _education_view(entry: EducationEntry) -> EntryView:
    gpa = entry.gpa.strip()
    return EntryView(
        entry_id=entry.id,
        title=degree_line(entry.degree, entry.field),
        subtitle=entry.institution.strip(),
        date_range=format_date_range(entry.start_date, entry.end_date),
        description=entry.description.strip(),
        details=(f"GPA: {gpa}",) if gpa else (),
    )


def _skill_view(entry: SkillEntry) -> EntryView:
    return EntryView(entry_id=entry.id, title=entry.name.strip(), level=entry.level.value)


def _project_view(entry: ProjectEntry) -> EntryView:
    return EntryView(
        entry_id=entry.id,
        title=entry.name.strip(),
        subtitle=entry.technologies.strip(),
        date_range=format_date_range(entry.start_date, entry.end_date),
        description=entry.description.strip(),
        link=entry.link.strip(),
    )


def _certification_view(entry: CertificationEntry) -> EntryView:
    return EntryView(
        entry_id=entry.id,
        title=entry.name.strip(),
        subtitle=entry.issuer.strip(),
        date_range=format_date(entry.date),
        link=entry.link.strip(),
    )


def build_resume_view(document: ResumeDocument) -> ResumeView:
    """
    Build the common view of a document.

    Applies the rules shared by every template:
    - sections in fixed order (summary, experience, education, skills,
      projects, certifications)
    - experience rows without position, company and description are dropped
    - entries of other sections with no content at all are dropped
    - a section left without entries is omitted
    """
    info = document.personal_info
    header = HeaderView(
        full_name=info.full_name,
        email=info.email.strip(),
        phone=info.phone.strip(),
        location=info.location.strip(),
        linkedin_url=info.linkedin_url.strip(),
    )

    candidates = [
        (
            SectionKey.SUMMARY,
            [EntryView(entry_id="summary", description=info.summary.strip())] if info.summary.strip() else [],
        ),
        (SectionKey.EXPERIENCE, [_experience_view(e) for e in document.experience if e.has_content()]),
        (SectionKey.EDUCATION, [_education_view(e) for e in document.education if not e.is_blank()]),
        (SectionKey.SKILLS, [_skill_view(e) for e in document.skills if not e.is_blank()]),
        (SectionKey.PROJECTS, [_project_view(e) for e in document.projects if not e.is_blank()]),
        (SectionKey.CERTIFICATIONS, [_certification_view(e) for e in document.certifications if not e.is_blank()]),
    ]

    sections = tuple(
        SectionView(key=key, entries=tuple(entries))
        for key, entries in candidates
        if entries
    )
    return ResumeView(header=header, sections=sections)
