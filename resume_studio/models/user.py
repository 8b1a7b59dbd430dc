"""
User Model
Signed-in users, keyed by the email the identity provider vouches for
"""
from sqlalchemy import String
from resume_studio import db
from resume_studio.models import BaseModel


class User(BaseModel):
    """A person who saves resumes. Created on first save."""
    __tablename__ = 'users'

    email = db.Column(String(320), unique=True, nullable=False, index=True)
    name = db.Column(String(255), nullable=False, default='')
    image = db.Column(String(1000))

    resumes = db.relationship(
        'SavedResume',
        back_populates='user',
        cascade='all, delete-orphan',
        order_by='SavedResume.created_at',
    )
    analyses = db.relationship(
        'AnalysisRecord',
        back_populates='user',
        cascade='all, delete-orphan',
        order_by='AnalysisRecord.created_at',
    )

    def to_dict(self):
        data = super().to_dict()
        data.update({
            "email": self.email,
            "name": self.name,
            "image": self.image,
        })
        return data
