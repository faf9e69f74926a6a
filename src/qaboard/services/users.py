"""User directory: registration, credential checks and identity lookups."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError
from ..logging_config import get_logger
from ..models import User
from ..security import hash_password, issue_token_for, verify_password

logger = get_logger(__name__)


def register_user(db: Session, name: str, email: str, password: str) -> str:
    """Create a user and return a freshly issued access token."""
    name = name.strip()
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")
    # Display names identify authors, so they must not be shared.
    if find_by_name(db, name):
        raise ConflictError("Name already taken")
    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email or name already registered") from None
    db.refresh(user)
    logger.info("user_registered", user_id=user.id)
    return issue_token_for(user)


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def find_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def find_by_name(db: Session, name: str) -> User | None:
    return db.query(User).filter(User.name == name).first()


def find_by_names(db: Session, names, batch_size: int = 500) -> dict[str, User]:
    """Map each existing name in ``names`` to its user, querying in batches."""
    names = list(names)
    found: dict[str, User] = {}
    for start in range(0, len(names), batch_size):
        batch = names[start:start + batch_size]
        for user in db.query(User).filter(User.name.in_(batch)):
            found[user.name] = user
    return found
