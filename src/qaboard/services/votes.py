"""
Vote ledger.

Each (answer, user) pair holds at most one vote. Casting a vote moves the pair
through a small state machine:

    no vote  --UPVOTE/DOWNVOTE-->  voted      (row inserted)
    voted    --same type-------->  no vote    (row deleted, "toggle off")
    voted    --other type------->  voted      (row updated in place, "switch")

The unique index on (answer_id, user_id) is the only guard against two
concurrent first votes; the loser gets a ConflictError and must resubmit.
"""

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, make_transient

from ..errors import ConflictError, InvalidInputError, NotFoundError
from ..logging_config import get_logger
from ..models import Vote
from ..schemas import VoteAction, VoteType

logger = get_logger(__name__)


def get_user_vote(db: Session, answer_id: int, user_id: int) -> Vote | None:
    return (
        db.query(Vote)
        .filter(Vote.answer_id == answer_id, Vote.user_id == user_id)
        .first()
    )


def create_or_update(
    db: Session,
    answer_id: int,
    vote_type: VoteType,
    user_id: int,
) -> tuple[Vote, VoteAction]:
    try:
        vote_type = VoteType(vote_type)
    except ValueError:
        raise InvalidInputError(f"Unknown vote type: {vote_type}") from None
    existing = get_user_vote(db, answer_id, user_id)

    if existing is None:
        vote = Vote(answer_id=answer_id, user_id=user_id, vote_type=vote_type.value)
        db.add(vote)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("vote_conflict", answer_id=answer_id, user_id=user_id)
            raise ConflictError("Vote already exists for this user and answer") from None
        db.refresh(vote)
        logger.info("vote_created", vote_id=vote.id, vote_type=vote.vote_type)
        return vote, VoteAction.CREATED

    if existing.vote_type == vote_type.value:
        db.delete(existing)
        db.commit()
        # The caller gets the row as it was just before removal.
        make_transient(existing)
        logger.info("vote_removed", vote_id=existing.id, answer_id=answer_id)
        return existing, VoteAction.REMOVED

    existing.vote_type = vote_type.value
    db.commit()
    db.refresh(existing)
    logger.info("vote_switched", vote_id=existing.id, vote_type=existing.vote_type)
    return existing, VoteAction.SWITCHED


def count_votes(db: Session, answer_id: int, vote_type: VoteType) -> int:
    return (
        db.query(func.count(Vote.id))
        .filter(Vote.answer_id == answer_id, Vote.vote_type == VoteType(vote_type).value)
        .scalar()
        or 0
    )


def get_vote_stats(db: Session, answer_id: int) -> dict[str, int]:
    return {
        "upvotes": count_votes(db, answer_id, VoteType.UPVOTE),
        "downvotes": count_votes(db, answer_id, VoteType.DOWNVOTE),
    }


def find_by_answer_id(db: Session, answer_id: int) -> list[Vote]:
    return db.query(Vote).filter(Vote.answer_id == answer_id).order_by(Vote.id).all()


def find_by_user_id(db: Session, user_id: int) -> list[Vote]:
    return db.query(Vote).filter(Vote.user_id == user_id).order_by(Vote.id).all()


def find_one(db: Session, vote_id: int) -> Vote:
    vote = db.get(Vote, vote_id)
    if vote is None:
        raise NotFoundError(f"Vote with ID {vote_id} not found")
    return vote


def remove_vote(db: Session, vote_id: int) -> None:
    vote = find_one(db, vote_id)
    db.delete(vote)
    db.commit()
    logger.info("vote_deleted", vote_id=vote_id)
