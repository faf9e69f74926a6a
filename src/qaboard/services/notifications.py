"""Notification service: per-user notifications and the answer fan-out."""

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..logging_config import get_logger
from ..mentions import candidate_names, parse_mentions
from ..models import Answer, Notification, Question, User
from . import users as users_service

logger = get_logger(__name__)


def create_notification(
    db: Session,
    user_id: int,
    notification_type: str,
    message: str,
    meta: dict | None = None,
) -> Notification:
    """Insert a single notification. Does not commit."""
    notif = Notification(
        user_id=user_id,
        type=notification_type,
        message=message,
        meta=meta or {},
    )
    db.add(notif)
    return notif


def resolve_mentioned_users(db: Session, text: str) -> list[User]:
    """Users named by ``@mentions`` in ``text``, each at most once."""
    candidates = [candidate_names(token) for token in parse_mentions(text)]
    wanted = {name for names in candidates for name in names}
    by_name = users_service.find_by_names(db, wanted)
    found: dict[int, User] = {}
    for names in candidates:
        user = next((by_name[n] for n in names if n in by_name), None)
        if user is not None:
            found.setdefault(user.id, user)
    return list(found.values())


def notify_answer_created(db: Session, answer: Answer, question: Question) -> list[Notification]:
    """Notify the question owner and every mentioned user, then commit."""
    meta = {"question_id": question.id, "answer_id": answer.id}
    created: list[Notification] = []

    if answer.author != question.author:
        owner = users_service.find_by_name(db, question.author)
        if owner is not None:
            created.append(
                create_notification(
                    db,
                    owner.id,
                    "answer",
                    f"{answer.author} answered your question",
                    meta,
                )
            )

    for user in resolve_mentioned_users(db, answer.content):
        if user.name == answer.author:
            continue
        created.append(
            create_notification(
                db,
                user.id,
                "mention",
                f"{answer.author} mentioned you in an answer",
                dict(meta),
            )
        )

    db.commit()
    return created


def fan_out_answer_notifications(db: Session, answer: Answer, question: Question) -> None:
    """Best-effort hook run after an answer is committed; failures are only logged."""
    try:
        created = notify_answer_created(db, answer, question)
    except Exception:
        db.rollback()
        logger.exception(
            "answer_notification_failed",
            answer_id=answer.id,
            question_id=question.id,
        )
        return
    logger.info("answer_notifications_sent", answer_id=answer.id, count=len(created))


def get_notifications_for_user(
    db: Session,
    user_id: int,
    unread_only: bool = False,
) -> list[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read.is_(False))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()


def unread_count(db: Session, user_id: int) -> int:
    return (
        db.query(func.count(Notification.id))
        .filter(Notification.user_id == user_id, Notification.read.is_(False))
        .scalar()
        or 0
    )


def mark_read(db: Session, notification_id: int, user_id: int) -> Notification:
    notif = db.get(Notification, notification_id)
    # Other users' notifications are reported as missing.
    if notif is None or notif.user_id != user_id:
        raise NotFoundError(f"Notification with ID {notification_id} not found")
    if not notif.read:
        notif.read = True
        db.commit()
        db.refresh(notif)
    return notif


def mark_all_read(db: Session, user_id: int) -> None:
    db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    db.commit()
