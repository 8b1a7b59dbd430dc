"""
Modern Resume Template

Contemporary single-column design with sans-serif fonts.
- Left-aligned name with a blue accent rule under the header
- Company and technology lines in the accent color
- Skills displayed as pills colored by proficiency
- Fits one page: top three positions, shortened descriptions
"""

from dataclasses import replace

from resume_studio.schemas.resume_document_schema import SectionKey
from ..base_template import BaseResumeTemplate, ResumeTemplateType, TemplateMetadata
from ..resume_view import EntryView, ResumeView


MAX_EXPERIENCE_ENTRIES = 3
DESCRIPTION_LIMIT = 150
ELLIPSIS = "..."


def truncate_description(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut text to `limit` characters followed by an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + ELLIPSIS


class ModernTemplate(BaseResumeTemplate):
    """
    Modern resume template with clean, contemporary design.

    Characteristics:
    - Sans-serif font (Helvetica Neue, Arial)
    - Left-aligned layout, blue accent
    - Summary shown under the name without its own heading
    - Skills: pills colored by level
    - Content fitting: at most 3 positions, descriptions cut at 150 characters
    """

    section_headings = {
        SectionKey.SUMMARY: None,
        SectionKey.EXPERIENCE: "Professional Experience",
        SectionKey.EDUCATION: "Education",
        SectionKey.SKILLS: "Skills",
        SectionKey.PROJECTS: "Projects",
        SectionKey.CERTIFICATIONS: "Certifications",
    }

    @property
    def template_type(self) -> ResumeTemplateType:
        return ResumeTemplateType.MODERN

    @property
    def metadata(self) -> TemplateMetadata:
        return TemplateMetadata(
            id=ResumeTemplateType.MODERN.value,
            name="Modern",
            description="Clean, contemporary design with a blue accent. Best for tech, startups, and creative roles.",
            is_default=True
        )

    def fit_content(self, view: ResumeView) -> ResumeView:
        experience = view.section(SectionKey.EXPERIENCE)
        if experience is None:
            return view

        fitted = tuple(
            replace(entry, description=truncate_description(entry.description))
            for entry in experience.entries[:MAX_EXPERIENCE_ENTRIES]
        )
        return view.with_section(replace(experience, entries=fitted))

    @property
    def stylesheet(self) -> str:
        return """
        .resume-modern {
            padding: 18pt;
            font-family: 'Helvetica Neue', Arial, sans-serif;
            font-size: 10pt;
            line-height: 1.4;
            color: #374151;
        }

        .resume-modern header {
            border-bottom: 2px solid #2563eb;
            padding-bottom: 9pt;
            margin-bottom: 12pt;
        }

        .resume-modern h1 {
            font-size: 20pt;
            font-weight: 700;
            color: #111827;
            margin-bottom: 3pt;
        }

        .resume-modern .contact span {
            font-size: 8pt;
            color: #4b5563;
            margin-right: 9pt;
        }

        .resume-modern .section {
            margin-bottom: 12pt;
        }

        .resume-modern .section-summary p {
            font-size: 9.5pt;
            color: #4b5563;
        }

        .resume-modern h2 {
            font-size: 13pt;
            font-weight: 700;
            color: #111827;
            border-bottom: 1px solid #d1d5db;
            padding-bottom: 3pt;
            margin-bottom: 8pt;
        }

        .resume-modern .entry {
            margin-bottom: 9pt;
        }

        .resume-modern .entry-head {
            display: flex;
            justify-content: space-between;
            align-items: flex-start;
        }

        .resume-modern h3 {
            font-size: 11pt;
            font-weight: 600;
            color: #111827;
        }

        .resume-modern .dates {
            font-size: 8pt;
            color: #4b5563;
            white-space: nowrap;
        }

        .resume-modern .subtitle {
            color: #2563eb;
            font-weight: 500;
        }

        .resume-modern .meta {
            font-size: 8pt;
            color: #4b5563;
        }

        .resume-modern ul {
            padding-left: 12pt;
            margin-top: 2pt;
        }

        .resume-modern .link {
            font-size: 8.5pt;
            color: #2563eb;
            text-decoration: none;
        }

        .resume-modern .pills {
            display: flex;
            flex-wrap: wrap;
        }

        .resume-modern .pill {
            border-radius: 9999px;
            padding: 2pt 8pt;
            margin: 0 5pt 5pt 0;
            font-size: 9pt;
            font-weight: 500;
        }

        .resume-modern .level-beginner { background: #fecaca; color: #991b1b; }
        .resume-modern .level-intermediate { background: #fef08a; color: #854d0e; }
        .resume-modern .level-advanced { background: #bfdbfe; color: #1e40af; }
        .resume-modern .level-expert { background: #bbf7d0; color: #166534; }
"""

    def render_header(self, view: ResumeView) -> str:
        header = view.header
        contact = "".join(
            self._tag("span", item)
            for item in (*header.contact_items, header.linkedin_url)
        )
        return (
            "        <header>"
            f"{self._tag('h1', header.full_name)}"
            f'<div class="contact">{contact}</div>'
            "</header>\n"
        )

    def render_entries(self, section) -> str:
        if section.key == SectionKey.SKILLS:
            pills = "".join(
                self._tag("span", entry.title, f"pill level-{entry.level}")
                for entry in section.entries
            )
            return f'<div class="pills">{pills}</div>'
        return super().render_entries(section)

    def render_entry(self, section: SectionKey, entry: EntryView) -> str:
        if section == SectionKey.SUMMARY:
            return self._tag("p", entry.description)

        link_label = "Verify Certificate →" if section == SectionKey.CERTIFICATIONS else "View Project →"
        return (
            '<div class="entry">'
            f'<div class="entry-head">{self._tag("h3", entry.title)}{self._tag("span", entry.date_range, "dates")}</div>'
            f"{self._tag('p', entry.subtitle, 'subtitle')}"
            f"{self._tag('p', entry.location, 'meta')}"
            f"{self._tag('p', entry.description, 'description')}"
            f"{self._details(entry)}"
            f"{self._link(entry.link, link_label)}"
            "</div>"
        )
