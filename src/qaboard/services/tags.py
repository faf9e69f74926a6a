"""Tag registry with find-or-create and store-side usage counters."""

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError
from ..logging_config import get_logger
from ..models import Tag

logger = get_logger(__name__)


def normalize_tag_name(name: str) -> str:
    return name.strip().lower()


def find_by_name(db: Session, name: str) -> Tag | None:
    return db.query(Tag).filter(Tag.name == normalize_tag_name(name)).first()


def create_tag(db: Session, name: str, description: str | None = None) -> Tag:
    normalized = normalize_tag_name(name)
    if find_by_name(db, normalized):
        raise ConflictError("Tag already exists")
    tag = Tag(name=normalized, description=description, usage_count=0)
    db.add(tag)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Tag already exists") from None
    db.refresh(tag)
    logger.info("tag_created", tag=normalized)
    return tag


def find_or_create(db: Session, name: str) -> Tag:
    """
    Return the tag called ``name``, inserting it with a zero count if needed.

    The insert runs in a SAVEPOINT so that losing a race against a concurrent
    insert of the same name only rolls back the savepoint; the unique index
    decides the winner and the loser re-reads the row. Does not commit.
    """
    tag = find_by_name(db, name)
    if tag is not None:
        return tag
    normalized = normalize_tag_name(name)
    try:
        with db.begin_nested():
            tag = Tag(name=normalized, usage_count=0)
            db.add(tag)
    except IntegrityError:
        tag = db.query(Tag).filter(Tag.name == normalized).one()
        logger.info("tag_create_race_resolved", tag=normalized)
    return tag


def _adjust_usage(db: Session, names: list[str], delta: int) -> None:
    for name in names:
        db.execute(
            update(Tag)
            .where(Tag.name == normalize_tag_name(name))
            .values(usage_count=Tag.usage_count + delta)
        )


def increment_usage_count(db: Session, names: list[str]) -> None:
    """Add one per occurrence in ``names``. Does not commit."""
    _adjust_usage(db, names, 1)


def decrement_usage_count(db: Session, names: list[str]) -> None:
    """Subtract one per occurrence in ``names``; no floor at zero. Does not commit."""
    _adjust_usage(db, names, -1)


def _ranked(db: Session):
    return db.query(Tag).order_by(Tag.usage_count.desc(), Tag.name.asc())


def find_all(db: Session) -> list[Tag]:
    return _ranked(db).all()


def find_popular_tags(db: Session, limit: int = 10) -> list[Tag]:
    return _ranked(db).limit(limit).all()


def search_tags(db: Session, query: str, limit: int = 10) -> list[Tag]:
    needle = normalize_tag_name(query)
    return (
        _ranked(db)
        .filter(Tag.name.contains(needle, autoescape=True))
        .limit(limit)
        .all()
    )


def validate_tags(db: Session, names: list[str]) -> dict[str, list[str]]:
    valid: list[str] = []
    invalid: list[str] = []
    for name in names:
        if find_by_name(db, name):
            valid.append(name)
        else:
            invalid.append(name)
    return {"valid": valid, "invalid": invalid}
