"""Tests for the labeled plain-text layout."""

import pytest

from resume_studio.schemas.resume_document_schema import ResumeDocument
from resume_studio.services.export.text_export import serialize_resume_text, text_sections


@pytest.mark.unit
class TestTextLayout:

    def test_header_block(self, resume_document):
        header, _ = text_sections(resume_document)

        assert header == "Jane Doe\njane.doe@example.com | +1 555 0100 | Berlin"

    def test_fixed_sections_in_order(self, resume_document):
        _, sections = text_sections(resume_document)

        assert [label for label, _ in sections] == ["SUMMARY", "EXPERIENCE", "EDUCATION", "SKILLS", "PROJECTS"]

    def test_no_certifications_block_without_certifications(self, resume_document):
        text = serialize_resume_text(resume_document)

        assert "CERTIFICATIONS" not in text

    def test_certifications_block_when_present(self, resume_payload):
        resume_payload["certifications"] = [
            {"id": "c1", "name": "CKA", "issuer": "CNCF", "date": "2022-05", "link": ""}
        ]
        text = serialize_resume_text(ResumeDocument.model_validate(resume_payload))

        assert text.endswith("CERTIFICATIONS\nCKA\nCNCF\nMay 2022")

    def test_experience_block(self, resume_document):
        text = serialize_resume_text(resume_document)

        assert "EXPERIENCE\nSenior Engineer at Acme Corp\nMar 2021 - Present\nLeads the payments platform team." in text
        assert "Engineer at Globex\nJan 2018 - Feb 2021" in text

    def test_skills_are_comma_separated(self, resume_document):
        assert "SKILLS\nPython, PostgreSQL" in serialize_resume_text(resume_document)

    def test_empty_document_keeps_labels(self):
        text = serialize_resume_text(ResumeDocument.scaffold())

        assert text == "SUMMARY\n\nEXPERIENCE\n\nEDUCATION\n\nSKILLS\n\nPROJECTS"
