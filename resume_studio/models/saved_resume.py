"""
Saved Resume Model
A resume document saved by a user, with the template it was edited under
"""
import uuid
from sqlalchemy import String, Integer, ForeignKey
from resume_studio import db
from resume_studio.models import BaseModel


def _new_resume_id() -> str:
    return uuid.uuid4().hex


class SavedResume(BaseModel):
    __tablename__ = 'saved_resumes'

    # Opaque id handed to clients; the integer primary key stays internal
    resume_id = db.Column(String(32), unique=True, nullable=False, index=True, default=_new_resume_id)

    user_id = db.Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    user = db.relationship('User', back_populates='resumes')

    name = db.Column(String(255), nullable=False, default='')
    template = db.Column(String(50), nullable=False, default='modern')

    # ResumeDocument wire payload (camelCase)
    data = db.Column(db.JSON, nullable=False)

    def to_summary(self):
        """Listing entry: everything but the document itself."""
        return {
            "resumeId": self.resume_id,
            "name": self.name,
            "template": self.template,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_dict(self):
        data = self.to_summary()
        data["data"] = self.data
        return data
