from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import VoteIn, VoteOut, VoteResult
from ..security import get_current_user
from ..services import answers as answers_service
from ..services import votes as votes_service

router = APIRouter(prefix="/api/v1", tags=["votes"])


@router.post("/votes", response_model=VoteResult)
def cast_vote(
    body: VoteIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    answers_service.find_one(db, body.answer_id)
    vote, action = votes_service.create_or_update(db, body.answer_id, body.vote_type, user.id)
    return VoteResult(**VoteOut.model_validate(vote).model_dump(), action=action)


@router.get("/users/{user_id}/votes", response_model=list[VoteOut])
def list_user_votes(user_id: int, db: Session = Depends(get_db)):
    return votes_service.find_by_user_id(db, user_id)


@router.delete("/votes/{vote_id}", status_code=204)
def delete_vote(
    vote_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    vote = votes_service.find_one(db, vote_id)
    if vote.user_id != user.id:
        raise HTTPException(
            status_code=403,
            detail={"code": "FORBIDDEN", "message": "Not your vote", "details": {}},
        )
    votes_service.remove_vote(db, vote_id)
    return Response(status_code=204)
