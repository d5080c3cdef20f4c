"""Time-bounded polls and their anonymous submissions.

A poll and all of its submissions share one expire_at instant. Submissions copy the
value from their poll when created (and again whenever the owner moves the poll's
deadline), so the expiry sweep can remove both with a plain expire_at <= now filter.
"""
from sqlalchemy import Column, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base, JSONType, generate_id, UTCDateTime
import enum


class QuestionKind(str, enum.Enum):
    text = "text"
    button = "button"
    dropdown = "dropdown"


class Poll(Base):
    __tablename__ = "polls"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    # [{id, text, type, options: [str]}] in display order
    questions = Column(JSONType, nullable=False, default=list)

    consent_enabled = Column(Boolean, nullable=False, default=False)
    consent_text = Column(Text, nullable=True)

    created_at = Column(UTCDateTime(timezone=True), server_default=func.now())
    expire_at = Column(UTCDateTime(timezone=True), nullable=False, index=True)

    user = relationship("User", backref="polls")
    submissions = relationship(
        "Submission", back_populates="poll", cascade="all, delete-orphan", passive_deletes=True
    )

    def question_ids(self) -> set[str]:
        return {q.get("id") for q in (self.questions or [])}


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True, default=generate_id)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False, index=True)

    participant_name = Column(String(255), nullable=False)
    participant_email = Column(String(255), nullable=False)
    participant_phone = Column(String(50), nullable=False, default="")
    # [{questionId, answer}]
    answers = Column(JSONType, nullable=False, default=list)
    consent_agreed = Column(Boolean, nullable=False, default=False)

    submitted_at = Column(UTCDateTime(timezone=True), server_default=func.now())
    # Always the parent poll's expire_at
    expire_at = Column(UTCDateTime(timezone=True), nullable=False, index=True)

    poll = relationship("Poll", back_populates="submissions")
