"""
Resume Editor Service

Owns the mutable document of one editing session: personal info, the
repeatable sections, the current wizard step and the selected template.
Sessions are kept in Redis between requests.
"""
import logging
import re
import uuid
from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional, Union

from resume_studio.schemas.resume_document_schema import (
    ENTRY_TYPES,
    EntryModel,
    PersonalInfo,
    ResumeDocument,
    SectionKey,
)
from resume_studio.services.export import RenderedResume, ResumeTemplateType, resume_export_service
from resume_studio.utils.redis_client import RedisClient, get_redis

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)

SESSION_KEY_PREFIX = "editor:session:"
EXPORT_LOCK_PREFIX = "editor:export:"


class EntryNotFoundError(LookupError):
    """No entry with the given id in the section."""

    def __init__(self, section: SectionKey, entry_id: str):
        self.section = section
        self.entry_id = entry_id
        super().__init__(f"No {section.value} entry with id '{entry_id}'")


class ResumeValidationError(ValueError):
    """Form-level validation failure, reported per field."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(f"Resume has {len(errors)} validation error(s)")


class SessionNotFoundError(LookupError):
    """Editor session expired or never existed."""


class ExportInProgressError(RuntimeError):
    """An export for this session has not finished yet."""


class EditorStep(IntEnum):
    """Wizard steps, in order"""
    PERSONAL_INFO = 1
    EDUCATION = 2
    EXPERIENCE = 3
    SKILLS = 4
    PROJECTS = 5
    CERTIFICATIONS = 6

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def section(self) -> Optional[SectionKey]:
        """Repeatable section edited on this step."""
        if self == EditorStep.PERSONAL_INFO:
            return None
        return SectionKey(self.name.lower())

    @classmethod
    def parse(cls, value: Union[int, str]) -> "EditorStep":
        """
        Step from its number or name ("skills", "personal_info").

        Raises:
            ValueError: If no such step exists
        """
        if isinstance(value, bool):
            raise ValueError(f"Unknown step '{value}'")
        if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
            return cls(int(value))
        if isinstance(value, str):
            try:
                return cls[value.strip().upper().replace("-", "_").replace(" ", "_")]
            except KeyError:
                pass
        raise ValueError(f"Unknown step '{value}'")


class ResumeEditor:
    """
    Editing state for a single session.

    Entries are addressed by their id, never by position. Operations on one
    entry leave every other entry, and the order of the section, untouched.
    """

    def __init__(
        self,
        document: Optional[ResumeDocument] = None,
        step: EditorStep = EditorStep.PERSONAL_INFO,
        template: Union[str, ResumeTemplateType, None] = ResumeTemplateType.MODERN,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.document = document if document is not None else ResumeDocument.scaffold()
        self.step = step
        self.template = ResumeTemplateType.resolve(template)

    # Personal info

    def update_personal_info(self, changes: Dict[str, Any]) -> PersonalInfo:
        """Apply a partial update to personal info; unknown keys are ignored."""
        patch = PersonalInfo.model_validate(changes)
        updated = self.document.personal_info.model_copy(
            update=patch.model_dump(include=patch.model_fields_set)
        )
        self.document.personal_info = updated
        return updated

    # Repeatable sections

    def entries(self, section: SectionKey) -> List[EntryModel]:
        return self.document.entries(SectionKey(section))

    def _index_of(self, section: SectionKey, entry_id: str) -> int:
        for index, entry in enumerate(self.entries(section)):
            if entry.id == entry_id:
                return index
        raise EntryNotFoundError(SectionKey(section), entry_id)

    def get_entry(self, section: SectionKey, entry_id: str) -> EntryModel:
        return self.entries(section)[self._index_of(section, entry_id)]

    def append_entry(self, section: SectionKey, values: Optional[Dict[str, Any]] = None) -> EntryModel:
        """Append an entry with a fresh id."""
        section = SectionKey(section)
        entries = self.entries(section)
        values = {k: v for k, v in (values or {}).items() if k != "id"}
        entry = ENTRY_TYPES[section].model_validate(values)
        entries.append(entry)
        logger.debug(f"Appended {section.value} entry {entry.id}")
        return entry

    def update_entry(self, section: SectionKey, entry_id: str, changes: Dict[str, Any]) -> EntryModel:
        """Apply a partial update to one entry. Its id never changes."""
        section = SectionKey(section)
        index = self._index_of(section, entry_id)
        entries = self.entries(section)

        changes = {k: v for k, v in changes.items() if k != "id"}
        patch = ENTRY_TYPES[section].model_validate(changes)
        fields = patch.model_dump(include=patch.model_fields_set - {"id"})
        entries[index] = entries[index].model_copy(update=fields)
        return entries[index]

    def duplicate_entry(self, section: SectionKey, entry_id: str) -> EntryModel:
        """Copy an entry under a new id, right after the original."""
        section = SectionKey(section)
        index = self._index_of(section, entry_id)
        entries = self.entries(section)

        copy = ENTRY_TYPES[section].model_validate(entries[index].content_fields())
        entries.insert(index + 1, copy)
        return copy

    def remove_entry(self, section: SectionKey, entry_id: str) -> EntryModel:
        """Remove an entry. A section may end up with no entries."""
        section = SectionKey(section)
        index = self._index_of(section, entry_id)
        return self.entries(section).pop(index)

    # Steps

    def go_to_step(self, step: Union[int, str, EditorStep]) -> EditorStep:
        """Navigation is never blocked by validation errors."""
        self.step = step if isinstance(step, EditorStep) else EditorStep.parse(step)
        return self.step

    def next_step(self) -> EditorStep:
        if self.step < max(EditorStep):
            self.step = EditorStep(self.step + 1)
        return self.step

    def previous_step(self) -> EditorStep:
        if self.step > min(EditorStep):
            self.step = EditorStep(self.step - 1)
        return self.step

    # Template and preview

    def select_template(self, template: Optional[str]) -> ResumeTemplateType:
        """Select a template; unknown ids fall back to the default."""
        self.template = ResumeTemplateType.resolve(template)
        return self.template

    def render(self) -> RenderedResume:
        return resume_export_service.render(self.document, self.template.value)

    # Validation

    def validate(self) -> Dict[str, str]:
        """Field errors keyed by camelCase path; empty when the document is complete."""
        errors: Dict[str, str] = {}
        info = self.document.personal_info

        if not info.first_name.strip():
            errors["personalInfo.firstName"] = "First name is required"
        if not info.last_name.strip():
            errors["personalInfo.lastName"] = "Last name is required"
        if not info.email.strip():
            errors["personalInfo.email"] = "Email is required"
        elif not EMAIL_PATTERN.match(info.email.strip()):
            errors["personalInfo.email"] = "Invalid email address"

        for entry in self.document.experience:
            if entry.is_current and entry.end_date.strip():
                errors[f"experience.{entry.id}.endDate"] = "End date must be empty for a current position"

        return errors

    def validate_for_submission(self) -> ResumeDocument:
        """
        Raises:
            ResumeValidationError: If any field is invalid
        """
        errors = self.validate()
        if errors:
            raise ResumeValidationError(errors)
        return self.document

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "step": int(self.step),
            "stepTitle": self.step.title,
            "template": self.template.value,
            "data": self.document.to_payload(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ResumeEditor":
        return cls(
            document=ResumeDocument.model_validate(payload.get("data") or {}),
            step=EditorStep.parse(payload.get("step", 1)),
            template=payload.get("template"),
            session_id=payload.get("sessionId"),
        )


class EditorSessionStore:
    """Keeps editor sessions in Redis with a sliding TTL."""

    def __init__(self, client: Optional[RedisClient] = None, ttl_seconds: int = 86400):
        self._client = client
        self.ttl_seconds = ttl_seconds

    @property
    def client(self) -> RedisClient:
        return self._client or get_redis()

    def create(self, document: Optional[ResumeDocument] = None, template: Optional[str] = None) -> ResumeEditor:
        editor = ResumeEditor(document=document, template=template)
        self.save(editor)
        logger.info(f"Editor session created: {editor.session_id}")
        return editor

    def load(self, session_id: str) -> ResumeEditor:
        """
        Raises:
            SessionNotFoundError: If the session expired or never existed
        """
        payload = self.client.get(f"{SESSION_KEY_PREFIX}{session_id}")
        if not payload:
            raise SessionNotFoundError(f"Editor session '{session_id}' not found")
        return ResumeEditor.from_dict(payload)

    def save(self, editor: ResumeEditor) -> None:
        self.client.set(f"{SESSION_KEY_PREFIX}{editor.session_id}", editor.to_dict(), ttl=self.ttl_seconds)

    def delete(self, session_id: str) -> None:
        self.client.delete(f"{SESSION_KEY_PREFIX}{session_id}")

    @contextmanager
    def export_lock(self, session_id: str, ttl_seconds: int = 60) -> Iterator[None]:
        """
        Hold the session's export lock while an export runs.

        Raises:
            ExportInProgressError: If another export of this session is running
        """
        key = f"{EXPORT_LOCK_PREFIX}{session_id}"
        lock = self.client.acquire_lock(key, ttl_seconds)
        if lock is None:
            raise ExportInProgressError(f"An export of session '{session_id}' is already running")
        try:
            yield
        finally:
            self.client.release_lock(lock)
