from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class VoteType(str, Enum):
    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"


class VoteAction(str, Enum):
    CREATED = "created"
    REMOVED = "removed"
    SWITCHED = "switched"


def _check_tag_names(names: list[str] | None) -> list[str] | None:
    if names is None:
        return names
    for name in names:
        if not name.strip():
            raise ValueError("tag names must not be blank")
    return names


class RegisterIn(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = Field(min_length=1, max_length=80)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


class LoginIn(BaseModel):
    model_config = ConfigDict(extra="forbid")
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    name: str
    email: EmailStr
    model_config = ConfigDict(from_attributes=True)


class TagCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = Field(min_length=1, max_length=64)
    description: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("tag name must not be blank")
        return v


class TagValidateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")
    names: list[str]


class TagValidation(BaseModel):
    valid: list[str]
    invalid: list[str]


class TagOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    usage_count: int
    model_config = ConfigDict(from_attributes=True)


class QuestionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str = Field(min_length=1, max_length=255)
    desc: str = Field(min_length=1)
    tags: list[str] = []

    @field_validator("tags")
    @classmethod
    def tags_not_blank(cls, v):
        return _check_tag_names(v)


class QuestionPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str | None = Field(None, min_length=1, max_length=255)
    desc: str | None = Field(None, min_length=1)
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def tags_not_blank(cls, v):
        return _check_tag_names(v)


class QuestionOut(BaseModel):
    id: int
    title: str
    desc: str
    tags: list[str] = []
    author: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class AnswerCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    content: str = Field(min_length=1)
    question_id: int = Field(ge=1)


class AnswerPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")
    content: str | None = Field(None, min_length=1)


class AnswerOut(BaseModel):
    id: int
    content: str
    author: str
    question_id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class VoteIn(BaseModel):
    model_config = ConfigDict(extra="forbid")
    answer_id: int = Field(ge=1)
    vote_type: VoteType


class VoteOut(BaseModel):
    id: int
    answer_id: int
    user_id: int
    vote_type: VoteType
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class VoteResult(VoteOut):
    action: VoteAction


class VoteStats(BaseModel):
    upvotes: int
    downvotes: int


class NotificationOut(BaseModel):
    id: int
    user_id: int
    type: str
    message: str
    read: bool
    meta: dict = {}
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UnreadCount(BaseModel):
    unread_count: int
