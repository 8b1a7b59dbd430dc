"""Tests for the template-independent resume view."""

import pytest

from resume_studio.schemas.resume_document_schema import ResumeDocument, SectionKey
from resume_studio.services.export.resume_view import (
    build_resume_view,
    degree_line,
    format_date,
    format_date_range,
)


@pytest.mark.unit
class TestDateFormatting:
    """Test date display strings."""

    @pytest.mark.parametrize("value,expected", [
        ("2020-01", "Jan 2020"),
        ("2019-12-31", "Dec 2019"),
        ("2021-06-15T00:00:00Z", "Jun 2021"),
        ("", ""),
        ("   ", ""),
    ])
    def test_format_date(self, value, expected):
        assert format_date(value) == expected

    def test_unparseable_date_is_shown_as_typed(self):
        assert format_date("Summer 2019") == "Summer 2019"
        assert format_date("2020-13") == "2020-13"

    def test_current_position_ends_in_present(self):
        """A stale end date never shows for a current position."""
        assert format_date_range("2021-03", "2022-01", is_current=True) == "Mar 2021 - Present"

    def test_range_with_one_side_missing(self):
        assert format_date_range("2021-03", "") == "Mar 2021"
        assert format_date_range("", "2022-01") == "Jan 2022"
        assert format_date_range("", "") == ""

    def test_degree_line(self):
        assert degree_line("BSc", "Physics") == "BSc in Physics"
        assert degree_line("BSc", "") == "BSc"
        assert degree_line("", "Physics") == "Physics"


@pytest.mark.unit
class TestBuildResumeView:
    """Test section ordering and filtering."""

    def test_sections_in_fixed_order(self, resume_document):
        view = build_resume_view(resume_document)

        assert view.section_keys == (
            SectionKey.SUMMARY,
            SectionKey.EXPERIENCE,
            SectionKey.EDUCATION,
            SectionKey.SKILLS,
            SectionKey.PROJECTS,
        )

    def test_empty_sections_are_omitted(self):
        """The scaffold has only blank rows, so no section appears."""
        view = build_resume_view(ResumeDocument.scaffold())

        assert view.sections == ()

    def test_blank_experience_row_is_dropped(self, resume_payload):
        resume_payload["experience"].append({"id": "exp-blank", "location": "Remote", "startDate": "2017-01"})
        view = build_resume_view(ResumeDocument.model_validate(resume_payload))

        ids = [entry.entry_id for entry in view.section(SectionKey.EXPERIENCE).entries]
        assert ids == ["exp-1", "exp-2"]

    def test_header_and_entry_strings(self, resume_document):
        view = build_resume_view(resume_document)

        assert view.header.full_name == "Jane Doe"
        assert view.header.contact_items == ("jane.doe@example.com", "+1 555 0100", "Berlin")

        current = view.section(SectionKey.EXPERIENCE).entries[0]
        assert current.title == "Senior Engineer"
        assert current.subtitle == "Acme Corp"
        assert current.date_range == "Mar 2021 - Present"
        assert current.details == ("Cut settlement time by 40%",)

        education = view.section(SectionKey.EDUCATION).entries[0]
        assert education.title == "BSc in Computer Science"
        assert education.details == ("GPA: 3.8",)

    def test_building_does_not_modify_document(self, resume_document):
        before = resume_document.model_dump()
        build_resume_view(resume_document)

        assert resume_document.model_dump() == before
