"""Poll results for the poll's owner."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_current_user
from app.models.poll import Submission
from app.models.user import User
from app.schemas.poll import PollResults, ResultsPoll, SubmissionResponse
from app.services import expiry
from app.services.access import ensure_owner

router = APIRouter(prefix="/results", tags=["results"])


@router.get("/{poll_id}", response_model=PollResults)
def get_results(
    poll_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = expiry.utcnow()
    poll = ensure_owner(
        expiry.get_live_poll(db, poll_id, now),
        current_user,
        not_found="Poll not found or has expired",
        forbidden="Not authorized to view these results",
    )
    submissions = expiry.live_submissions(db, poll.id, now).order_by(Submission.submitted_at.desc()).all()
    return PollResults(
        poll=ResultsPoll.model_validate(poll),
        submissions=[SubmissionResponse.model_validate(s) for s in submissions],
        total_submissions=len(submissions),
    )
