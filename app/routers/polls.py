"""Poll management for the owning user, plus the public list of active polls."""
from collections import Counter, defaultdict
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.dependencies import get_current_user
from app.errors import BadRequestError
from app.models.poll import Poll, Submission
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.poll import (
    OptionTally,
    PollCreate,
    PollListItem,
    PollResponse,
    PollUpdate,
    PublicPollSummary,
)
from app.services import expiry
from app.services.access import ensure_owner

router = APIRouter(prefix="/polls", tags=["polls"])


def _questions_json(questions) -> list[dict]:
    return [q.model_dump(by_alias=True, mode="json") for q in questions]


def _owned_poll(db: Session, poll_id: str, user: User, action: str) -> Poll:
    poll = expiry.get_live_poll(db, poll_id)
    return ensure_owner(poll, user, not_found="Poll not found", forbidden=f"Not authorized to {action} this poll")


def _submission_counts(db: Session, poll_ids: list[str]) -> dict[str, int]:
    if not poll_ids:
        return {}
    rows = (
        db.query(Submission.poll_id, func.count(Submission.id))
        .filter(Submission.poll_id.in_(poll_ids), Submission.expire_at > expiry.utcnow())
        .group_by(Submission.poll_id)
        .all()
    )
    return {poll_id: count for poll_id, count in rows}


# Registered before /{poll_id} so "public" is not read as an id
@router.get("/public")
def list_public_polls(db: Session = Depends(get_db)):
    """Active polls with vote tallies for each poll's first question."""
    now = expiry.utcnow()
    polls = expiry.live_polls(db, now).options(joinedload(Poll.user)).order_by(Poll.created_at.desc()).all()
    by_poll = defaultdict(list)
    if polls:
        rows = (
            db.query(Submission.poll_id, Submission.answers)
            .filter(Submission.poll_id.in_([p.id for p in polls]), Submission.expire_at > now)
            .all()
        )
        for poll_id, answers in rows:
            by_poll[poll_id].append(answers or [])
    out = []
    for poll in polls:
        main_question = (poll.questions or [{}])[0]
        submissions = by_poll[poll.id]
        votes = Counter(
            a.get("answer")
            for answers in submissions
            for a in answers
            if a.get("questionId") == main_question.get("id")
        )
        out.append(
            PublicPollSummary(
                id=poll.id,
                question=main_question.get("text") or poll.title,
                description=poll.description,
                options=[OptionTally(text=o, votes=votes.get(o, 0)) for o in main_question.get("options", [])],
                start_date=poll.created_at,
                end_date=poll.expire_at,
                created_by=(poll.user.name if poll.user else None) or "Anonymous",
                created_at=poll.created_at,
                total_submissions=len(submissions),
            )
        )
    return {"success": True, "polls": out}


@router.post("", status_code=201)
def create_poll(
    data: PollCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if data.expire_at <= expiry.utcnow():
        raise BadRequestError("Expiry date must be in the future")
    poll = Poll(
        user_id=current_user.id,
        title=data.title,
        description=data.description,
        questions=_questions_json(data.questions),
        consent_enabled=data.consent_enabled,
        consent_text=data.consent_text if data.consent_enabled else None,
        expire_at=data.expire_at,
    )
    db.add(poll)
    db.commit()
    db.refresh(poll)
    return {"message": "Poll created successfully", "poll": PollResponse.model_validate(poll)}


@router.get("")
def list_my_polls(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    polls = expiry.live_polls(db).filter(Poll.user_id == current_user.id).order_by(Poll.created_at.desc()).all()
    counts = _submission_counts(db, [p.id for p in polls])
    items = []
    for p in polls:
        item = PollListItem.model_validate(p)
        item.response_count = counts.get(p.id, 0)
        items.append(item)
    return {"polls": items}


@router.get("/{poll_id}")
def get_poll(
    poll_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    poll = _owned_poll(db, poll_id, current_user, "access")
    return {"poll": PollResponse.model_validate(poll)}


@router.put("/{poll_id}")
def update_poll(
    poll_id: str,
    data: PollUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    poll = _owned_poll(db, poll_id, current_user, "update")
    if data.title is not None:
        title = data.title.strip()
        if not title:
            raise BadRequestError("Poll title cannot be empty")
        poll.title = title
    if data.description is not None:
        poll.description = data.description
    if data.questions is not None:
        poll.questions = _questions_json(data.questions)
    if data.consent_enabled is not None:
        poll.consent_enabled = data.consent_enabled
    if data.consent_text is not None:
        poll.consent_text = data.consent_text
    if not poll.consent_enabled:
        poll.consent_text = None
    if data.expire_at is not None:
        if data.expire_at <= expiry.utcnow():
            raise BadRequestError("Expiry date must be in the future")
        # Submissions follow the poll's deadline
        expiry.move_poll_deadline(db, poll, data.expire_at)
    db.commit()
    db.refresh(poll)
    return {"message": "Poll updated successfully", "poll": PollResponse.model_validate(poll)}


@router.delete("/{poll_id}", response_model=MessageResponse)
def delete_poll(
    poll_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    poll = _owned_poll(db, poll_id, current_user, "delete")
    db.query(Submission).filter(Submission.poll_id == poll.id).delete(synchronize_session=False)
    db.delete(poll)
    db.commit()
    return {"message": "Poll deleted successfully"}
