from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import (AnswerCreate, AnswerOut, AnswerPatch, VoteOut,
                       VoteStats)
from ..security import get_current_user, require_owner
from ..services import answers as answers_service
from ..services import votes as votes_service

router = APIRouter(prefix="/api/v1/answers", tags=["answers"])


@router.post("", response_model=AnswerOut, status_code=201)
def create_answer(
    body: AnswerCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return answers_service.create_answer(db, body.content, body.question_id, user.name)


@router.get("", response_model=list[AnswerOut])
def list_answers(db: Session = Depends(get_db)):
    return answers_service.find_all(db)


@router.get("/{answer_id}", response_model=AnswerOut)
def get_answer(answer_id: int, db: Session = Depends(get_db)):
    return answers_service.find_one(db, answer_id)


@router.patch("/{answer_id}", response_model=AnswerOut)
def patch_answer(
    answer_id: int,
    body: AnswerPatch,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    answer = answers_service.find_one(db, answer_id)
    require_owner(user, answer.author, "answer")
    return answers_service.update_answer(db, answer_id, content=body.content)


@router.delete("/{answer_id}", status_code=204)
def delete_answer(
    answer_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    answer = answers_service.find_one(db, answer_id)
    require_owner(user, answer.author, "answer")
    answers_service.remove_answer(db, answer_id)
    return Response(status_code=204)


@router.get("/{answer_id}/votes", response_model=list[VoteOut])
def list_answer_votes(answer_id: int, db: Session = Depends(get_db)):
    return votes_service.find_by_answer_id(db, answer_id)


@router.get("/{answer_id}/vote-stats", response_model=VoteStats)
def answer_vote_stats(answer_id: int, db: Session = Depends(get_db)):
    return votes_service.get_vote_stats(db, answer_id)


@router.get("/{answer_id}/my-vote", response_model=VoteOut | None)
def my_vote(
    answer_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return votes_service.get_user_vote(db, answer_id, user.id)
