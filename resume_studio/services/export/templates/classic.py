"""
Classic Resume Template

Traditional, formal design with serif fonts.
- Centered name and contact info
- Bold section headers
- Skills displayed in a grid with their proficiency level
- Black and gray only
"""

from resume_studio.schemas.resume_document_schema import SectionKey
from ..base_template import BaseResumeTemplate, ResumeTemplateType, TemplateMetadata
from ..resume_view import EntryView, ResumeView, join_nonempty


class ClassicTemplate(BaseResumeTemplate):
    """
    Classic resume template with traditional, formal design.

    Characteristics:
    - Serif font (Georgia, Times New Roman)
    - Centered header layout, LinkedIn on its own line
    - Company and location on one line
    - Skills: three-column grid with level
    - Full descriptions, no content fitting
    """

    section_headings = {
        SectionKey.SUMMARY: "Professional Summary",
        SectionKey.EXPERIENCE: "Professional Experience",
        SectionKey.EDUCATION: "Education",
        SectionKey.SKILLS: "Technical Skills",
        SectionKey.PROJECTS: "Projects",
        SectionKey.CERTIFICATIONS: "Certifications",
    }

    @property
    def template_type(self) -> ResumeTemplateType:
        return ResumeTemplateType.CLASSIC

    @property
    def metadata(self) -> TemplateMetadata:
        return TemplateMetadata(
            id=ResumeTemplateType.CLASSIC.value,
            name="Classic",
            description="Traditional, formal design with a professional feel. Best for corporate, finance, and legal roles.",
            is_default=False
        )

    @property
    def stylesheet(self) -> str:
        return """
        .resume-classic {
            padding: 24pt;
            font-family: Georgia, 'Times New Roman', serif;
            font-size: 10.5pt;
            line-height: 1.5;
            color: #374151;
        }

        .resume-classic header {
            text-align: center;
            border-bottom: 2px solid #d1d5db;
            padding-bottom: 18pt;
            margin-bottom: 18pt;
        }

        .resume-classic h1 {
            font-size: 27pt;
            font-weight: 700;
            color: #111827;
            margin-bottom: 6pt;
        }

        .resume-classic .contact span {
            color: #4b5563;
            margin: 0 6pt;
        }

        .resume-classic .linkedin {
            color: #2563eb;
            margin-top: 6pt;
        }

        .resume-classic .section {
            margin-bottom: 18pt;
        }

        .resume-classic h2 {
            font-size: 15pt;
            font-weight: 700;
            color: #111827;
            margin-bottom: 9pt;
        }

        .resume-classic .entry {
            margin-bottom: 12pt;
        }

        .resume-classic .entry-head {
            display: flex;
            justify-content: space-between;
            align-items: flex-start;
        }

        .resume-classic h3 {
            font-size: 13pt;
            font-weight: 600;
            color: #111827;
        }

        .resume-classic .dates {
            font-size: 9pt;
            color: #4b5563;
            white-space: nowrap;
        }

        .resume-classic .subtitle {
            font-weight: 500;
        }

        .resume-classic .description {
            margin-top: 4pt;
        }

        .resume-classic ul {
            padding-left: 14pt;
        }

        .resume-classic .link {
            font-size: 9pt;
            color: #2563eb;
        }

        .resume-classic .skill-grid {
            display: flex;
            flex-wrap: wrap;
        }

        .resume-classic .skill {
            width: 33%;
            display: flex;
            justify-content: space-between;
            padding-right: 12pt;
            margin-bottom: 6pt;
        }

        .resume-classic .skill .level {
            font-size: 9pt;
            color: #6b7280;
            text-transform: capitalize;
        }
"""

    def render_header(self, view: ResumeView) -> str:
        header = view.header
        contact = "".join(self._tag("span", item) for item in header.contact_items)
        return (
            "        <header>"
            f"{self._tag('h1', header.full_name)}"
            f'<div class="contact">{contact}</div>'
            f"{self._tag('p', header.linkedin_url, 'linkedin')}"
            "</header>\n"
        )

    def render_entries(self, section) -> str:
        if section.key == SectionKey.SKILLS:
            cells = "".join(
                f'<div class="skill">{self._tag("span", entry.title)}{self._tag("span", entry.level, "level")}</div>'
                for entry in section.entries
            )
            return f'<div class="skill-grid">{cells}</div>'
        return super().render_entries(section)

    def render_entry(self, section: SectionKey, entry: EntryView) -> str:
        if section == SectionKey.SUMMARY:
            return self._tag("p", entry.description)

        if section == SectionKey.EXPERIENCE:
            subtitle = join_nonempty((entry.subtitle, entry.location), ", ")
        else:
            subtitle = entry.subtitle

        link_label = "Verify Certificate" if section == SectionKey.CERTIFICATIONS else "View Project"
        return (
            '<div class="entry">'
            f'<div class="entry-head">{self._tag("h3", entry.title)}{self._tag("span", entry.date_range, "dates")}</div>'
            f"{self._tag('p', subtitle, 'subtitle')}"
            f"{self._tag('p', entry.description, 'description')}"
            f"{self._details(entry)}"
            f"{self._link(entry.link, link_label)}"
            "</div>"
        )
