"""Tests for resume templates."""

import pytest

from resume_studio.schemas.resume_document_schema import ResumeDocument, SectionKey
from resume_studio.services.export import ResumeExportService, ResumeTemplateType
from resume_studio.services.export.templates import ClassicTemplate, MinimalTemplate, ModernTemplate
from resume_studio.services.export.templates.modern import truncate_description


ALL_TEMPLATES = [ModernTemplate(), ClassicTemplate(), MinimalTemplate()]


def _experience(count, description="Did things."):
    return [
        {
            "id": f"exp-{i}",
            "company": f"Company {i}",
            "position": f"Role {i}",
            "startDate": "2020-01",
            "description": description,
        }
        for i in range(count)
    ]


@pytest.mark.unit
class TestTemplateType:

    def test_unknown_template_falls_back_to_modern(self):
        assert ResumeTemplateType.resolve("fancy") == ResumeTemplateType.MODERN
        assert ResumeTemplateType.resolve(None) == ResumeTemplateType.MODERN
        assert ResumeTemplateType.resolve(" Classic ") == ResumeTemplateType.CLASSIC

    def test_service_renders_unknown_template_with_modern(self, resume_document):
        service = ResumeExportService()

        rendered = service.render(resume_document, "does-not-exist")

        assert rendered.template == ResumeTemplateType.MODERN
        assert "resume-modern" in rendered.html

    def test_templates_info_lists_three_with_modern_default(self):
        info = ResumeExportService().get_templates_info()

        assert [t["id"] for t in info] == ["modern", "classic", "minimal"]
        assert [t["id"] for t in info if t["is_default"]] == ["modern"]


@pytest.mark.unit
class TestCommonRendering:
    """Rules every template follows."""

    @pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda t: t.template_type.value)
    def test_rendering_is_idempotent(self, template, resume_document):
        assert template.render(resume_document) == template.render(resume_document)

    @pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda t: t.template_type.value)
    def test_empty_skills_section_is_not_rendered(self, template, resume_payload):
        resume_payload["skills"] = [{"id": "s1", "name": "  ", "level": "expert"}]
        rendered = template.render(ResumeDocument.model_validate(resume_payload))

        assert SectionKey.SKILLS not in rendered.view.section_keys
        assert 'class="section section-skills"' not in rendered.html

    @pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda t: t.template_type.value)
    def test_blank_experience_row_is_excluded(self, template, resume_payload):
        resume_payload["experience"].insert(0, {"id": "blank", "location": "Nowhere", "startDate": "2010-01"})
        rendered = template.render(ResumeDocument.model_validate(resume_payload))

        ids = [e.entry_id for e in rendered.view.section(SectionKey.EXPERIENCE).entries]
        assert "blank" not in ids
        assert "Nowhere" not in rendered.html

    @pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda t: t.template_type.value)
    def test_current_position_shows_present(self, template, resume_document):
        html = template.render(resume_document).html

        assert "Mar 2021 - Present" in html

    @pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda t: t.template_type.value)
    def test_user_text_is_escaped(self, template, resume_payload):
        resume_payload["personalInfo"]["firstName"] = "<script>alert(1)</script>"
        html = template.render(ResumeDocument.model_validate(resume_payload)).html

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_empty_document_renders_without_sections(self):
        rendered = ModernTemplate().render(ResumeDocument())

        assert rendered.view.sections == ()
        assert "<section" not in rendered.html


@pytest.mark.unit
class TestModernTemplate:
    """Modern's page-fitting policy."""

    def test_shows_at_most_three_positions(self, resume_payload):
        resume_payload["experience"] = _experience(5)
        rendered = ModernTemplate().render(ResumeDocument.model_validate(resume_payload))

        entries = rendered.view.section(SectionKey.EXPERIENCE).entries
        assert [e.entry_id for e in entries] == ["exp-0", "exp-1", "exp-2"]
        assert "Company 3" not in rendered.html

    def test_long_descriptions_are_truncated(self, resume_payload):
        resume_payload["experience"] = _experience(1, description="x" * 200)
        rendered = ModernTemplate().render(ResumeDocument.model_validate(resume_payload))

        description = rendered.view.section(SectionKey.EXPERIENCE).entries[0].description
        assert description == "x" * 150 + "..."

    def test_short_description_keeps_no_ellipsis(self):
        assert truncate_description("x" * 150) == "x" * 150

    def test_fitting_leaves_document_untouched(self, resume_payload):
        resume_payload["experience"] = _experience(5, description="y" * 300)
        document = ResumeDocument.model_validate(resume_payload)

        ModernTemplate().render(document)

        assert len(document.experience) == 5
        assert document.experience[0].description == "y" * 300

    def test_summary_has_no_heading(self, resume_document):
        html = ModernTemplate().render(resume_document).html

        assert "Backend engineer focused on reliable data systems." in html
        assert "<h2>Professional Summary</h2>" not in html
        assert "<h2>Professional Experience</h2>" in html

    def test_project_link_label(self, resume_document):
        html = ModernTemplate().render(resume_document).html

        assert "View Project →" in html
        assert 'href="https://github.com/janedoe/ledger"' in html

    @pytest.mark.parametrize("link", ["javascript:alert(1)", " JavaScript:alert(1)", "data:text/html,x"])
    def test_unsafe_link_is_not_rendered(self, resume_payload, link):
        resume_payload["projects"][0]["link"] = link

        for template in (ModernTemplate(), ClassicTemplate()):
            html = template.render(ResumeDocument.model_validate(resume_payload)).html
            assert "class=\"link\"" not in html
            assert "alert" not in html
            assert "data:text" not in html

    def test_bare_host_link_gets_https(self, resume_payload):
        resume_payload["projects"][0]["link"] = "github.com/janedoe/ledger"

        html = ModernTemplate().render(ResumeDocument.model_validate(resume_payload)).html

        assert 'href="https://github.com/janedoe/ledger"' in html


@pytest.mark.unit
class TestClassicAndMinimal:

    def test_classic_shows_all_positions_and_headings(self, resume_payload):
        resume_payload["experience"] = _experience(5, description="z" * 200)
        html = ClassicTemplate().render(ResumeDocument.model_validate(resume_payload)).html

        assert "Company 4" in html
        assert "z" * 200 in html
        assert "<h2>Professional Summary</h2>" in html
        assert "<h2>Technical Skills</h2>" in html

    def test_classic_joins_company_and_location(self, resume_document):
        html = ClassicTemplate().render(resume_document).html

        assert "Acme Corp, Berlin" in html

    def test_minimal_headings_and_no_links(self, resume_document):
        html = MinimalTemplate().render(resume_document).html

        assert "<h2>Experience</h2>" in html
        assert "<h2>Skills</h2>" in html
        assert "<a " not in html
