"""
Base Resume Template

Abstract base class for all resume templates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
from urllib.parse import urlparse

from markupsafe import escape

from resume_studio.schemas.resume_document_schema import ResumeDocument, SectionKey
from .resume_view import EntryView, ResumeView, SectionView, build_resume_view


# Size of the rendered surface, in points (A4 minus margins at 72 dpi)
SURFACE_WIDTH_PT = 523
SURFACE_MIN_HEIGHT_PT = 751

# Link targets allowed in rendered HTML; bare hosts are treated as https
LINK_SCHEMES = ("http", "https", "mailto")


class ResumeTemplateType(str, Enum):
    """Available resume template types."""
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"

    @classmethod
    def default(cls) -> "ResumeTemplateType":
        return cls.MODERN

    @classmethod
    def resolve(cls, value: Optional[str]) -> "ResumeTemplateType":
        """Map a template id to a template type, unknown ids fall back to the default."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.default()


@dataclass
class TemplateMetadata:
    """Metadata about a resume template."""
    id: str
    name: str
    description: str
    is_default: bool = False


@dataclass(frozen=True)
class RenderedResume:
    """Output of a template: the fitted view and its HTML document."""
    template: ResumeTemplateType
    view: ResumeView
    html: str


class BaseResumeTemplate(ABC):
    """
    Abstract base class for resume templates.

    Rendering happens in three steps:
    - build the shared view (ordering, empty-section suppression, blank row filtering)
    - apply the template's content-fitting policy (none by default)
    - lay the view out as a standalone HTML document

    Templates must not keep state between calls: rendering the same
    document twice yields equal results.
    """

    # Heading shown for each section; None renders the section without a heading
    section_headings: Dict[SectionKey, Optional[str]] = {}

    @property
    @abstractmethod
    def template_type(self) -> ResumeTemplateType:
        """Template identifier."""
        pass

    @property
    @abstractmethod
    def metadata(self) -> TemplateMetadata:
        """Return template metadata for UI display."""
        pass

    @property
    @abstractmethod
    def stylesheet(self) -> str:
        """CSS for the HTML document."""
        pass

    def render(self, document: ResumeDocument) -> RenderedResume:
        """Render a document under this template."""
        view = self.fit_content(build_resume_view(document))
        return RenderedResume(template=self.template_type, view=view, html=self.render_html(view))

    def fit_content(self, view: ResumeView) -> ResumeView:
        """Page-fit heuristics. The document is never modified, only the view."""
        return view

    def render_html(self, view: ResumeView) -> str:
        """Lay the view out as a complete HTML document."""
        body = self.render_header(view)
        for section in view.sections:
            body += self.render_section(section)

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{escape(view.header.full_name or "Resume")}</title>
    <style>
        * {{
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }}

        .resume {{
            width: {SURFACE_WIDTH_PT}pt;
            min-height: {SURFACE_MIN_HEIGHT_PT}pt;
            background: #fff;
        }}
{self.stylesheet}
    </style>
</head>
<body>
    <div class="resume resume-{self.template_type.value}">
{body}    </div>
</body>
</html>"""

    @abstractmethod
    def render_header(self, view: ResumeView) -> str:
        """HTML for the name and contact block."""
        pass

    @abstractmethod
    def render_entry(self, section: SectionKey, entry: EntryView) -> str:
        """HTML for a single entry of a section."""
        pass

    def render_section(self, section: SectionView) -> str:
        heading = self.section_headings.get(section.key)
        heading_html = f"<h2>{escape(heading)}</h2>" if heading else ""
        entries_html = self.render_entries(section)
        return (
            f'        <section class="section section-{section.key.value}">'
            f"{heading_html}{entries_html}</section>\n"
        )

    def render_entries(self, section: SectionView) -> str:
        return "".join(self.render_entry(section.key, entry) for entry in section.entries)

    @staticmethod
    def _tag(tag: str, text: str, css_class: Optional[str] = None) -> str:
        """Escaped element, or nothing when the text is empty."""
        if not text:
            return ""
        class_attr = f' class="{css_class}"' if css_class else ""
        return f"<{tag}{class_attr}>{escape(text)}</{tag}>"

    @staticmethod
    def _link(href: str, label: str, css_class: str = "link") -> str:
        href = href.strip()
        if not href:
            return ""
        scheme = urlparse(href).scheme.lower()
        if not scheme:
            href = f"https://{href}"
        elif scheme not in LINK_SCHEMES:
            return ""
        return f'<a class="{css_class}" href="{escape(href)}">{escape(label)}</a>'

    def _details(self, entry: EntryView) -> str:
        if not entry.details:
            return ""
        items = "".join(self._tag("li", detail) for detail in entry.details)
        return f"<ul>{items}</ul>"
