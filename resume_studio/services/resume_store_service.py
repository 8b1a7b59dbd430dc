"""
Resume Store Service

Saves resume documents and analysis history per user. The store is
optional: any database failure is logged and reported as "not persisted"
instead of failing the caller.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from resume_studio import db
from resume_studio.middleware.identity import Identity
from resume_studio.models import AnalysisRecord, SavedResume, User
from resume_studio.schemas.resume_document_schema import ResumeDocument
from resume_studio.services.export import ResumeTemplateType

logger = logging.getLogger(__name__)


def default_resume_name(document: ResumeDocument) -> str:
    full_name = document.personal_info.full_name
    return f"{full_name} Resume" if full_name else "Untitled Resume"


class ResumeStoreService:
    """Service for saved resumes and analysis history."""

    @staticmethod
    def _get_or_create_user(identity: Identity) -> User:
        """Upsert the user behind an identity; refreshes name and picture."""
        user = db.session.scalar(select(User).where(User.email == identity.email))
        if user is None:
            user = User(email=identity.email, name=identity.name or "", image=identity.picture)
            db.session.add(user)
            db.session.flush()
            logger.info(f"Created user {identity.email}")
        else:
            if identity.name:
                user.name = identity.name
            if identity.picture:
                user.image = identity.picture
        return user

    @staticmethod
    def _find_user(email: str) -> Optional[User]:
        return db.session.scalar(select(User).where(User.email == email))

    @classmethod
    def save(
        cls,
        identity: Identity,
        document: ResumeDocument,
        template: Optional[str] = None,
        name: Optional[str] = None,
        resume_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Save a resume for a user.

        Args:
            identity: Signed-in user
            document: Resume document
            template: Template id; unknown ids are stored as the default
            name: Display name; derived from the person's name when omitted
            resume_id: Existing resume of this user to overwrite

        Returns:
            The resume id, or None if nothing was persisted
        """
        try:
            user = cls._get_or_create_user(identity)

            resume = None
            if resume_id:
                resume = db.session.scalar(
                    select(SavedResume).where(
                        SavedResume.resume_id == resume_id,
                        SavedResume.user_id == user.id,
                    )
                )
            if resume is None:
                resume = SavedResume(user=user)
                db.session.add(resume)

            resume.name = (name or "").strip() or default_resume_name(document)
            resume.template = ResumeTemplateType.resolve(template).value
            resume.data = document.to_payload()

            db.session.commit()
            logger.info(f"Saved resume {resume.resume_id} for {identity.email}")
            return resume.resume_id
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to save resume for {identity.email}: {e}", exc_info=True)
            return None

    @classmethod
    def list(cls, email: str) -> List[Dict[str, Any]]:
        """Saved resumes of a user, oldest first; [] if unknown or on failure."""
        try:
            user = cls._find_user(email)
            if user is None:
                return []
            return [resume.to_summary() for resume in user.resumes]
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to list resumes for {email}: {e}", exc_info=True)
            return []

    @classmethod
    def get(cls, email: str, resume_id: str) -> Optional[Dict[str, Any]]:
        """One saved resume of a user including its document, or None."""
        try:
            resume = db.session.scalar(
                select(SavedResume)
                .join(User, SavedResume.user_id == User.id)
                .where(SavedResume.resume_id == resume_id, User.email == email)
            )
            return resume.to_dict() if resume else None
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to load resume {resume_id}: {e}", exc_info=True)
            return None

    @classmethod
    def record_analysis(
        cls,
        identity: Identity,
        resume_id: str,
        kind: str,
        analysis: Dict[str, Any],
    ) -> bool:
        """
        Append an analysis to the history of one of the user's saved resumes.

        Returns:
            False if not persisted, including when the user owns no such resume
        """
        try:
            user = cls._find_user(identity.email)
            owned = user is not None and db.session.scalar(
                select(SavedResume.id).where(
                    SavedResume.resume_id == resume_id,
                    SavedResume.user_id == user.id,
                )
            ) is not None
            if not owned:
                logger.warning(f"Not recording analysis: {identity.email} has no resume {resume_id}")
                return False
            db.session.add(AnalysisRecord(user=user, resume_id=resume_id, kind=kind, analysis=analysis))
            db.session.commit()
            return True
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to record analysis for {identity.email}: {e}", exc_info=True)
            return False

    @classmethod
    def analysis_history(cls, email: str, resume_id: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            user = cls._find_user(email)
            if user is None:
                return []
            return [
                record.to_dict()
                for record in user.analyses
                if resume_id is None or record.resume_id == resume_id
            ]
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to load analysis history for {email}: {e}", exc_info=True)
            return []
