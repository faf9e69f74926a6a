"""Question store. Keeps tag usage counters in step with question tags."""

from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..logging_config import get_logger
from ..models import Question
from . import answers as answers_service
from . import tags as tags_service

logger = get_logger(__name__)


def _ensure_tags(db: Session, names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        normalized = tags_service.normalize_tag_name(name)
        if normalized in seen:
            continue
        seen.add(normalized)
        tags_service.find_or_create(db, name)


def create_question(
    db: Session,
    title: str,
    desc: str,
    tags: list[str] | None,
    author: str,
) -> Question:
    # Duplicates in ``tags`` are kept and each one is counted.
    tags = list(tags or [])
    try:
        _ensure_tags(db, tags)
        tags_service.increment_usage_count(db, tags)
        question = Question(title=title.strip(), desc=desc, tags=tags, author=author)
        db.add(question)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(question)
    logger.info("question_created", question_id=question.id, tags=tags)
    return question


def find_all(db: Session) -> list[Question]:
    return db.query(Question).order_by(Question.created_at.desc(), Question.id.desc()).all()


def find_one(db: Session, question_id: int) -> Question:
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError(f"Question with ID {question_id} not found")
    return question


def update_question(
    db: Session,
    question_id: int,
    title: str | None = None,
    desc: str | None = None,
    tags: list[str] | None = None,
) -> Question:
    question = find_one(db, question_id)
    try:
        if tags:
            # Old tags are released and new ones taken without diffing.
            _ensure_tags(db, tags)
            tags_service.decrement_usage_count(db, list(question.tags or []))
            tags_service.increment_usage_count(db, tags)
            question.tags = list(tags)
        if title is not None:
            question.title = title.strip()
        if desc is not None:
            question.desc = desc
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(question)
    logger.info("question_updated", question_id=question.id)
    return question


def remove_question(db: Session, question_id: int) -> None:
    question = find_one(db, question_id)
    try:
        tags_service.decrement_usage_count(db, list(question.tags or []))
        answers_service.delete_by_question_id(db, question_id)
        db.delete(question)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("question_removed", question_id=question_id)
