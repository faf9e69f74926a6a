import os
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .models import User

ALGO = "HS256"
MIN_SECRET_LENGTH = 8

pwd_ctx = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=3,
    argon2__memory_cost=262_144,
    argon2__parallelism=1,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_ctx.verify(password, hashed)


def _jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret or len(secret) < MIN_SECRET_LENGTH:
        raise RuntimeError(
            f"JWT_SECRET must be set and at least {MIN_SECRET_LENGTH} characters long"
        )
    return secret


def create_access_token(
    sub: str,
    ttl_seconds: int | None = None,
    extra_claims: dict[str, Any] | None = None,
    kid: str | None = None,
) -> str:
    secret = _jwt_secret()
    if ttl_seconds is None:
        ttl_seconds = get_settings().access_token_ttl_seconds
    now = datetime.now(tz=UTC)
    claims: dict[str, Any] = {
        "sub": sub,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    if extra_claims:
        claims.update(extra_claims)

    headers = {"typ": "JWT", "alg": ALGO}
    if kid:
        headers["kid"] = kid

    return jwt.encode(claims, secret, algorithm=ALGO, headers=headers)


def decode_access_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, _jwt_secret(), algorithms=[ALGO])


def issue_token_for(user: User) -> str:
    return create_access_token(
        sub=str(user.id),
        extra_claims={"name": user.name, "email": user.email},
    )


def _credentials_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": "UNAUTHORIZED", "message": message, "details": {}},
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    db: Session = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise _credentials_exception("No token provided")
    try:
        payload = decode_access_token(token)
        sub = payload.get("sub")
        user_id = int(sub) if sub is not None else None
    except (JWTError, ValueError):
        raise _credentials_exception("Invalid token") from None
    if user_id is None:
        raise _credentials_exception("Invalid token")
    user = db.get(User, user_id)
    if not user:
        raise _credentials_exception("Invalid token")
    return user


def require_owner(user: User, author: str, what: str) -> None:
    if user.name != author:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "code": "FORBIDDEN",
                "message": f"Only the author can modify this {what}",
                "details": {},
            },
        )
