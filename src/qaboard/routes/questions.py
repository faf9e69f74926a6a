from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import AnswerOut, QuestionCreate, QuestionOut, QuestionPatch
from ..security import get_current_user, require_owner
from ..services import answers as answers_service
from ..services import questions as questions_service

router = APIRouter(prefix="/api/v1/questions", tags=["questions"])


@router.post("", response_model=QuestionOut, status_code=201)
def create_question(
    body: QuestionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return questions_service.create_question(db, body.title, body.desc, body.tags, user.name)


@router.get("", response_model=list[QuestionOut])
def list_questions(db: Session = Depends(get_db)):
    return questions_service.find_all(db)


@router.get("/{question_id}", response_model=QuestionOut)
def get_question(question_id: int, db: Session = Depends(get_db)):
    return questions_service.find_one(db, question_id)


@router.get("/{question_id}/answers", response_model=list[AnswerOut])
def list_question_answers(question_id: int, db: Session = Depends(get_db)):
    return answers_service.find_by_question_id(db, question_id)


@router.patch("/{question_id}", response_model=QuestionOut)
def patch_question(
    question_id: int,
    body: QuestionPatch,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    question = questions_service.find_one(db, question_id)
    require_owner(user, question.author, "question")
    return questions_service.update_question(
        db, question_id, title=body.title, desc=body.desc, tags=body.tags
    )


@router.delete("/{question_id}", status_code=204)
def delete_question(
    question_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    question = questions_service.find_one(db, question_id)
    require_owner(user, question.author, "question")
    questions_service.remove_question(db, question_id)
    return Response(status_code=204)
