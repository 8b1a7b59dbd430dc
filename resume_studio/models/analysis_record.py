"""
Analysis Record Model
History of AI analyses a user ran against a saved resume
"""
from sqlalchemy import String, Integer, ForeignKey
from resume_studio import db
from resume_studio.models import BaseModel


class AnalysisRecord(BaseModel):
    __tablename__ = 'analysis_records'

    user_id = db.Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    user = db.relationship('User', back_populates='analyses')

    resume_id = db.Column(String(32), nullable=False, index=True)

    # 'parsed' or 'unparsed'
    kind = db.Column(String(20), nullable=False)
    analysis = db.Column(db.JSON, nullable=False)

    def to_dict(self):
        data = super().to_dict()
        data.update({
            "resume_id": self.resume_id,
            "kind": self.kind,
            "analysis": self.analysis,
        })
        return data
