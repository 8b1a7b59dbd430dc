"""Tests for the resume editor service."""

import pytest

from resume_studio.schemas.resume_document_schema import ResumeDocument, SectionKey, SkillLevel
from resume_studio.services.export import ResumeTemplateType
from resume_studio.services.resume_editor_service import (
    EXPORT_LOCK_PREFIX,
    EditorSessionStore,
    EditorStep,
    EntryNotFoundError,
    ExportInProgressError,
    ResumeEditor,
    ResumeValidationError,
    SessionNotFoundError,
)
from resume_studio.utils.redis_client import in_process_redis


@pytest.fixture
def editor(resume_document):
    return ResumeEditor(document=resume_document)


@pytest.fixture
def store():
    return EditorSessionStore(client=in_process_redis(), ttl_seconds=60)


@pytest.mark.unit
class TestEntries:
    """Test entry operations addressed by id."""

    def test_new_editor_starts_from_scaffold(self):
        editor = ResumeEditor()

        assert editor.step == EditorStep.PERSONAL_INFO
        assert editor.template == ResumeTemplateType.MODERN
        assert len(editor.entries(SectionKey.EXPERIENCE)) == 1

    def test_append_gets_fresh_id(self, editor):
        entry = editor.append_entry(SectionKey.SKILLS, {"id": "skill-1", "name": "Go", "level": "beginner"})

        assert entry.id != "skill-1"
        assert [s.name for s in editor.entries(SectionKey.SKILLS)] == ["Python", "PostgreSQL", "Go"]

    def test_update_touches_only_target_entry(self, editor):
        before = editor.get_entry(SectionKey.EXPERIENCE, "exp-2").model_copy()

        updated = editor.update_entry(SectionKey.EXPERIENCE, "exp-1", {"company": "Acme GmbH", "id": "hijack"})

        assert updated.id == "exp-1"
        assert updated.company == "Acme GmbH"
        assert updated.position == "Senior Engineer"
        assert editor.get_entry(SectionKey.EXPERIENCE, "exp-2") == before

    def test_update_accepts_camel_case_fields(self, editor):
        updated = editor.update_entry(SectionKey.SKILLS, "skill-1", {"level": "beginner"})

        assert updated.level == SkillLevel.BEGINNER
        assert updated.name == "Python"

    def test_duplicate_inserts_copy_after_original(self, editor):
        copy = editor.duplicate_entry(SectionKey.EXPERIENCE, "exp-1")

        ids = [e.id for e in editor.entries(SectionKey.EXPERIENCE)]
        assert ids == ["exp-1", copy.id, "exp-2"]
        assert copy.id != "exp-1"
        assert copy.company == "Acme Corp"
        assert copy.achievements == ["Cut settlement time by 40%"]

    def test_duplicate_does_not_share_lists(self, editor):
        copy = editor.duplicate_entry(SectionKey.EXPERIENCE, "exp-1")
        copy.achievements.append("New")

        assert editor.get_entry(SectionKey.EXPERIENCE, "exp-1").achievements == ["Cut settlement time by 40%"]

    def test_remove_keeps_order_of_others(self, editor):
        editor.append_entry(SectionKey.EXPERIENCE, {"company": "Initech"})

        editor.remove_entry(SectionKey.EXPERIENCE, "exp-2")

        assert [e.company for e in editor.entries(SectionKey.EXPERIENCE)] == ["Acme Corp", "Initech"]

    def test_section_may_become_empty(self, editor):
        editor.remove_entry(SectionKey.EDUCATION, "edu-1")

        assert editor.entries(SectionKey.EDUCATION) == []

    def test_unknown_entry_id(self, editor):
        with pytest.raises(EntryNotFoundError):
            editor.update_entry(SectionKey.PROJECTS, "nope", {"name": "x"})

    def test_summary_holds_no_entries(self, editor):
        with pytest.raises(ValueError):
            editor.append_entry(SectionKey.SUMMARY, {"name": "x"})

    def test_remove_with_repeated_ids_in_input(self):
        document = ResumeDocument.model_validate({"skills": [{"id": "a", "name": "Py"}, {"id": "a", "name": "Go"}]})
        editor = ResumeEditor(document=document)

        editor.remove_entry(SectionKey.SKILLS, "a")

        assert [s.name for s in editor.entries(SectionKey.SKILLS)] == ["Go"]
        with pytest.raises(EntryNotFoundError):
            editor.get_entry(SectionKey.SKILLS, "a")

    def test_personal_info_partial_update(self, editor):
        info = editor.update_personal_info({"lastName": "Smith", "unknown": "ignored"})

        assert info.first_name == "Jane"
        assert info.last_name == "Smith"
        assert editor.document.personal_info.last_name == "Smith"


@pytest.mark.unit
class TestSteps:

    def test_next_and_previous_are_clamped(self):
        editor = ResumeEditor()

        assert editor.previous_step() == EditorStep.PERSONAL_INFO
        for _ in range(10):
            editor.next_step()
        assert editor.step == EditorStep.CERTIFICATIONS

    def test_go_to_step_by_number_or_name(self):
        editor = ResumeEditor()

        assert editor.go_to_step(3) == EditorStep.EXPERIENCE
        assert editor.go_to_step("skills") == EditorStep.SKILLS
        assert editor.go_to_step("personal-info") == EditorStep.PERSONAL_INFO

    def test_unknown_step(self):
        with pytest.raises(ValueError):
            ResumeEditor().go_to_step(7)
        with pytest.raises(ValueError):
            ResumeEditor().go_to_step("summary")

    def test_navigation_is_not_blocked_by_validation(self):
        editor = ResumeEditor()
        assert editor.validate()

        assert editor.go_to_step(EditorStep.PROJECTS) == EditorStep.PROJECTS

    def test_step_sections(self):
        assert EditorStep.PERSONAL_INFO.section is None
        assert EditorStep.EDUCATION.section == SectionKey.EDUCATION
        assert EditorStep.PERSONAL_INFO.title == "Personal Info"


@pytest.mark.unit
class TestValidation:

    def test_complete_document_is_valid(self, editor):
        assert editor.validate() == {}
        assert editor.validate_for_submission() is editor.document

    def test_required_personal_fields(self):
        errors = ResumeEditor().validate()

        assert errors == {
            "personalInfo.firstName": "First name is required",
            "personalInfo.lastName": "Last name is required",
            "personalInfo.email": "Email is required",
        }

    def test_invalid_email(self, editor):
        editor.update_personal_info({"email": "jane.example.com"})

        assert editor.validate() == {"personalInfo.email": "Invalid email address"}

    def test_current_position_with_end_date(self, editor):
        editor.update_entry(SectionKey.EXPERIENCE, "exp-1", {"endDate": "2023-01"})

        errors = editor.validate()
        assert errors == {"experience.exp-1.endDate": "End date must be empty for a current position"}

    def test_submission_raises_with_errors(self):
        with pytest.raises(ResumeValidationError) as exc_info:
            ResumeEditor().validate_for_submission()
        assert "personalInfo.email" in exc_info.value.errors


@pytest.mark.unit
class TestTemplateSelection:

    def test_select_template(self, editor):
        assert editor.select_template("classic") == ResumeTemplateType.CLASSIC
        assert editor.render().template == ResumeTemplateType.CLASSIC

    def test_unknown_template_falls_back(self, editor):
        assert editor.select_template("neon") == ResumeTemplateType.MODERN


@pytest.mark.unit
class TestSessionStore:

    def test_save_and_load_round_trip(self, store, editor):
        editor.go_to_step(4)
        editor.select_template("minimal")
        store.save(editor)

        loaded = store.load(editor.session_id)

        assert loaded.session_id == editor.session_id
        assert loaded.step == EditorStep.SKILLS
        assert loaded.template == ResumeTemplateType.MINIMAL
        assert loaded.document == editor.document

    def test_create_scaffolds_document(self, store):
        editor = store.create()

        loaded = store.load(editor.session_id)
        assert loaded.document == editor.document
        assert isinstance(loaded.document, ResumeDocument)

    def test_missing_session(self, store):
        with pytest.raises(SessionNotFoundError):
            store.load("missing")

    def test_delete(self, store):
        editor = store.create()
        store.delete(editor.session_id)

        with pytest.raises(SessionNotFoundError):
            store.load(editor.session_id)

    def test_export_lock_rejects_concurrent_export(self, store):
        with store.export_lock("s1"):
            with pytest.raises(ExportInProgressError):
                with store.export_lock("s1"):
                    pass

        # released after the first export finished
        with store.export_lock("s1"):
            pass

    def test_export_lock_released_on_failure(self, store):
        with pytest.raises(RuntimeError):
            with store.export_lock("s2"):
                raise RuntimeError("capture failed")

        with store.export_lock("s2"):
            pass

    def test_expired_lock_is_not_released_by_its_old_holder(self, store):
        key = f"{EXPORT_LOCK_PREFIX}s3"

        with store.export_lock("s3"):
            # first export outlived its lock, a second export took it
            store.client.client.delete(key)
            second = store.client.acquire_lock(key, 60)
            assert second is not None

        with pytest.raises(ExportInProgressError):
            with store.export_lock("s3"):
                pass

        store.client.release_lock(second)
        with store.export_lock("s3"):
            pass
