"""
Minimal Resume Template

Quiet, centered design with light typography.
- Every block centered
- Summary as an unheaded lead paragraph
- Skills as a plain inline list, no levels
"""

from resume_studio.schemas.resume_document_schema import SectionKey
from ..base_template import BaseResumeTemplate, ResumeTemplateType, TemplateMetadata
from ..resume_view import EntryView, ResumeView


class MinimalTemplate(BaseResumeTemplate):
    """
    Minimal resume template.

    Characteristics:
    - Light sans-serif headings
    - Centered header with one contact item per line
    - Dates on their own line under the organization
    - No colored accents, no links
    """

    section_headings = {
        SectionKey.SUMMARY: None,
        SectionKey.EXPERIENCE: "Experience",
        SectionKey.EDUCATION: "Education",
        SectionKey.SKILLS: "Skills",
        SectionKey.PROJECTS: "Projects",
        SectionKey.CERTIFICATIONS: "Certifications",
    }

    @property
    def template_type(self) -> ResumeTemplateType:
        return ResumeTemplateType.MINIMAL

    @property
    def metadata(self) -> TemplateMetadata:
        return TemplateMetadata(
            id=ResumeTemplateType.MINIMAL.value,
            name="Minimal",
            description="Understated, centered layout that lets the content speak. Best for academic and design roles.",
            is_default=False
        )

    @property
    def stylesheet(self) -> str:
        return """
        .resume-minimal {
            padding: 18pt;
            font-family: 'Helvetica Neue', Arial, sans-serif;
            font-size: 10pt;
            line-height: 1.5;
            color: #374151;
            text-align: center;
        }

        .resume-minimal header {
            margin-bottom: 24pt;
        }

        .resume-minimal h1 {
            font-size: 22pt;
            font-weight: 300;
            color: #111827;
            margin-bottom: 6pt;
        }

        .resume-minimal .contact p {
            color: #4b5563;
        }

        .resume-minimal .section {
            margin-bottom: 24pt;
        }

        .resume-minimal .section-summary p {
            max-width: 420pt;
            margin: 0 auto;
        }

        .resume-minimal h2 {
            font-size: 13pt;
            font-weight: 500;
            color: #111827;
            margin-bottom: 12pt;
        }

        .resume-minimal .entry {
            margin-bottom: 14pt;
        }

        .resume-minimal h3 {
            font-size: 12pt;
            font-weight: 500;
            color: #111827;
            margin-bottom: 2pt;
        }

        .resume-minimal .subtitle {
            color: #4b5563;
        }

        .resume-minimal .dates {
            font-size: 9pt;
            color: #6b7280;
            margin-bottom: 4pt;
        }

        .resume-minimal .description {
            max-width: 420pt;
            margin: 0 auto;
        }

        .resume-minimal ul {
            list-style: none;
        }

        .resume-minimal .skill {
            display: inline-block;
            margin: 0 6pt;
        }
"""

    def render_header(self, view: ResumeView) -> str:
        header = view.header
        contact = "".join(
            self._tag("p", item)
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
            return "".join(self._tag("span", entry.title, "skill") for entry in section.entries)
        return super().render_entries(section)

    def render_entry(self, section: SectionKey, entry: EntryView) -> str:
        if section == SectionKey.SUMMARY:
            return self._tag("p", entry.description)

        return (
            '<div class="entry">'
            f"{self._tag('h3', entry.title)}"
            f"{self._tag('p', entry.subtitle, 'subtitle')}"
            f"{self._tag('p', entry.date_range, 'dates')}"
            f"{self._tag('p', entry.description, 'description')}"
            f"{self._details(entry)}"
            "</div>"
        )
