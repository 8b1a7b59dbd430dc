"""Tests for the resume document schema."""

import pytest

from resume_studio.schemas.resume_document_schema import (
    ExperienceEntry,
    ProjectEntry,
    ResumeDocument,
    SectionKey,
    SkillEntry,
    SkillLevel,
)


@pytest.mark.unit
class TestResumeDocument:
    """Test document parsing and scaffolding."""

    def test_scaffold_has_one_empty_entry_per_repeatable_section(self):
        """A new document starts with one blank entry in every list section."""
        document = ResumeDocument.scaffold()

        for section in (
            SectionKey.EDUCATION,
            SectionKey.EXPERIENCE,
            SectionKey.SKILLS,
            SectionKey.PROJECTS,
            SectionKey.CERTIFICATIONS,
        ):
            entries = document.entries(section)
            assert len(entries) == 1
            assert entries[0].is_blank()

    def test_scaffold_entries_have_distinct_ids(self):
        document = ResumeDocument.scaffold()
        ids = [document.entries(s)[0].id for s in (SectionKey.EDUCATION, SectionKey.EXPERIENCE, SectionKey.SKILLS)]

        assert len(set(ids)) == 3

    def test_parses_camel_case_payload(self, resume_payload):
        """Wire payloads use camelCase field names."""
        document = ResumeDocument.model_validate(resume_payload)

        assert document.personal_info.first_name == "Jane"
        assert document.personal_info.linkedin_url == "https://linkedin.com/in/janedoe"
        assert document.experience[0].is_current is True
        assert document.experience[0].start_date == "2021-03"
        assert document.skills[0].level == SkillLevel.EXPERT

    def test_null_values_fall_back_to_defaults(self):
        document = ResumeDocument.model_validate({
            "personalInfo": {"firstName": "Jane", "phone": None},
            "experience": [{"company": "Acme", "achievements": None}],
        })

        assert document.personal_info.phone == ""
        assert document.experience[0].achievements == []

    def test_repeated_entry_ids_are_replaced(self):
        document = ResumeDocument.model_validate({
            "skills": [{"id": "a", "name": "Py"}, {"id": "a", "name": "Go"}, {"id": "b", "name": "Rust"}],
            "projects": [{"id": "a", "name": "Ledger"}],
        })

        ids = [s.id for s in document.skills]
        assert ids[0] == "a"
        assert ids[1] not in ("a", "b")
        assert ids[2] == "b"
        # uniqueness is per section
        assert document.projects[0].id == "a"

    def test_missing_entry_id_is_generated(self):
        document = ResumeDocument.model_validate({"skills": [{"name": "Go", "id": ""}]})

        assert document.skills[0].id

    def test_to_payload_round_trips_with_camel_case_keys(self, resume_document):
        payload = resume_document.to_payload()

        assert "personalInfo" in payload
        assert payload["personalInfo"]["firstName"] == "Jane"
        assert payload["experience"][0]["isCurrent"] is True
        assert ResumeDocument.model_validate(payload) == resume_document

    def test_summary_does_not_hold_entries(self, resume_document):
        with pytest.raises(ValueError):
            resume_document.entries(SectionKey.SUMMARY)

    def test_full_name_skips_missing_parts(self):
        document = ResumeDocument.model_validate({"personalInfo": {"firstName": " Jane "}})

        assert document.personal_info.full_name == "Jane"


@pytest.mark.unit
class TestEntryContent:
    """Test blank-entry detection."""

    def test_experience_content_ignores_dates_and_location(self):
        """Only position, company or description make an experience row visible."""
        entry = ExperienceEntry(location="Berlin", start_date="2020-01", is_current=True)

        assert not entry.has_content()
        assert not entry.is_blank()

    def test_experience_with_description_only_has_content(self):
        assert ExperienceEntry(description="Did things").has_content()

    def test_skill_is_blank_without_name(self):
        """Level always has a value, so only the name counts."""
        assert SkillEntry(level=SkillLevel.EXPERT).is_blank()
        assert not SkillEntry(name="Rust").is_blank()

    def test_whitespace_only_project_is_blank(self):
        assert ProjectEntry(name="   ", description="\n").is_blank()
