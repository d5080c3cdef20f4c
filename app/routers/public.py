"""Public poll form and anonymous submissions."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BadRequestError, NotFoundError
from app.models.poll import Submission
from app.schemas.poll import PublicPollResponse, SubmissionCreate, SubmissionResponse
from app.services import expiry

log = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/public", tags=["public"])

POLL_GONE = "Poll not found or has expired"


@router.get("/poll/{poll_id}")
def get_public_poll(poll_id: str, db: Session = Depends(get_db)):
    poll = expiry.get_live_poll(db, poll_id)
    if not poll:
        raise NotFoundError(POLL_GONE)
    return {"poll": PublicPollResponse.model_validate(poll)}


@router.post("/submit/{poll_id}", status_code=201)
def submit_poll(poll_id: str, data: SubmissionCreate, db: Session = Depends(get_db)):
    """Record one participant's answers.

    The poll is re-read here; a poll that is missing or past its deadline gets a 404 and
    no submission is stored. The submission inherits the poll's expire_at.
    """
    poll = expiry.get_live_poll(db, poll_id)
    if not poll:
        raise NotFoundError(POLL_GONE)

    if poll.consent_enabled and data.consent_agreed is not True:
        raise BadRequestError("You must agree to the consent terms to submit this poll")

    unknown = [a.question_id for a in data.answers if a.question_id not in poll.question_ids()]
    if unknown:
        raise BadRequestError(f"Unknown question id(s): {', '.join(unknown)}")

    submission = Submission(
        poll_id=poll.id,
        participant_name=data.participant_name,
        participant_email=str(data.participant_email),
        participant_phone=(data.participant_phone or "").strip(),
        answers=[a.model_dump(by_alias=True) for a in data.answers],
        # Only meaningful when the poll asks for consent
        consent_agreed=bool(data.consent_agreed) if poll.consent_enabled else False,
        expire_at=poll.expire_at,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return {"message": "Thank you for your submission!", "submission": SubmissionResponse.model_validate(submission)}
