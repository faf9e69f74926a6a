"""Answer store."""

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..logging_config import get_logger
from ..models import Answer, Question
from . import notifications as notifications_service

logger = get_logger(__name__)


def create_answer(db: Session, content: str, question_id: int, author: str) -> Answer:
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError(f"Question with ID {question_id} not found")
    answer = Answer(content=content, question_id=question_id, author=author)
    db.add(answer)
    db.commit()
    db.refresh(answer)
    logger.info("answer_created", answer_id=answer.id, question_id=question_id)
    notifications_service.fan_out_answer_notifications(db, answer, question)
    return answer


def delete_by_question_id(db: Session, question_id: int) -> None:
    """Bulk delete the answers of a question. Joins the caller's transaction."""
    result = db.execute(delete(Answer).where(Answer.question_id == question_id))
    logger.info("answers_cascade_deleted", question_id=question_id, count=result.rowcount)


def find_all(db: Session) -> list[Answer]:
    return db.query(Answer).order_by(Answer.created_at.desc(), Answer.id.desc()).all()


def find_by_question_id(db: Session, question_id: int) -> list[Answer]:
    return (
        db.query(Answer)
        .filter(Answer.question_id == question_id)
        .order_by(Answer.created_at.desc(), Answer.id.desc())
        .all()
    )


def find_one(db: Session, answer_id: int) -> Answer:
    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError(f"Answer with ID {answer_id} not found")
    return answer


def update_answer(db: Session, answer_id: int, content: str | None = None) -> Answer:
    answer = find_one(db, answer_id)
    if content is not None:
        answer.content = content
    db.commit()
    db.refresh(answer)
    return answer


def remove_answer(db: Session, answer_id: int) -> None:
    answer = find_one(db, answer_id)
    db.delete(answer)
    db.commit()
    logger.info("answer_removed", answer_id=answer_id)
