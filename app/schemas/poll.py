"""Poll, submission and result schemas."""
from datetime import datetime
from pydantic import EmailStr, Field, field_validator, model_validator
from app.models.poll import QuestionKind
from app.schemas.common import CamelModel
from app.services.expiry import to_utc


class Question(CamelModel):
    id: str
    text: str
    kind: QuestionKind = Field(default=QuestionKind.text, alias="type")
    options: list[str] = []

    @model_validator(mode="after")
    def choices_need_options(self):
        if self.kind in (QuestionKind.button, QuestionKind.dropdown) and not self.options:
            raise ValueError(f"Question '{self.text}' needs at least one option")
        return self


def _unique_question_ids(questions: list[Question]) -> list[Question]:
    ids = [q.id for q in questions]
    if len(ids) != len(set(ids)):
        raise ValueError("Question ids must be unique")
    return questions


class PollCreate(CamelModel):
    title: str
    description: str = ""
    questions: list[Question] = Field(min_length=1)
    expire_at: datetime
    consent_enabled: bool = False
    consent_text: str | None = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please provide title, questions, and expiry date")
        return v

    unique_ids = field_validator("questions")(_unique_question_ids)

    @field_validator("expire_at")
    @classmethod
    def expire_at_utc(cls, v: datetime) -> datetime:
        return to_utc(v)


class PollUpdate(CamelModel):
    """All optional; only provided fields are updated."""
    title: str | None = None
    description: str | None = None
    questions: list[Question] | None = Field(default=None, min_length=1)
    expire_at: datetime | None = None
    consent_enabled: bool | None = None
    consent_text: str | None = None

    @field_validator("questions")
    @classmethod
    def unique_ids(cls, v: list[Question] | None) -> list[Question] | None:
        return _unique_question_ids(v) if v is not None else v

    @field_validator("expire_at")
    @classmethod
    def expire_at_utc(cls, v: datetime | None) -> datetime | None:
        return to_utc(v) if v is not None else v


class PollResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: str
    questions: list[Question]
    consent_enabled: bool
    consent_text: str | None = None
    created_at: datetime | None = None
    expire_at: datetime


class PollListItem(PollResponse):
    response_count: int = 0


class PublicPollResponse(CamelModel):
    """What the public submission form needs; no owner information."""
    id: str
    title: str
    description: str
    questions: list[Question]
    consent_enabled: bool
    consent_text: str | None = None
    expire_at: datetime


class OptionTally(CamelModel):
    text: str
    votes: int = 0


class PublicPollSummary(CamelModel):
    """Active poll card with vote tallies for its first question."""
    id: str
    question: str
    description: str
    options: list[OptionTally]
    start_date: datetime | None = None
    end_date: datetime
    created_by: str
    created_at: datetime | None = None
    total_submissions: int = 0


class Answer(CamelModel):
    question_id: str
    answer: str


class SubmissionCreate(CamelModel):
    participant_name: str
    participant_email: EmailStr
    participant_phone: str = ""
    answers: list[Answer]
    consent_agreed: bool | None = None

    @field_validator("participant_name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please provide your name and email")
        return v


class SubmissionResponse(CamelModel):
    id: str
    poll_id: str
    participant_name: str
    participant_email: str
    participant_phone: str
    answers: list[Answer]
    consent_agreed: bool
    submitted_at: datetime | None = None
    expire_at: datetime


class ResultsPoll(CamelModel):
    id: str
    title: str
    questions: list[Question]
    created_at: datetime | None = None
    expire_at: datetime


class PollResults(CamelModel):
    poll: ResultsPoll
    submissions: list[SubmissionResponse]
    total_submissions: int
