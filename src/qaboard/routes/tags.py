from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import TagCreate, TagOut, TagValidateIn, TagValidation
from ..security import get_current_user
from ..services import tags as tags_service

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.get("", response_model=list[TagOut])
def list_tags(db: Session = Depends(get_db)):
    return tags_service.find_all(db)


@router.get("/popular", response_model=list[TagOut])
def popular_tags(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return tags_service.find_popular_tags(db, limit)


@router.get("/search", response_model=list[TagOut])
def search_tags(
    q: str = Query(..., min_length=1, max_length=64),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return tags_service.search_tags(db, q, limit)


@router.post("", response_model=TagOut, status_code=201)
def create_tag(
    body: TagCreate,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tags_service.create_tag(db, body.name, body.description)


@router.post("/validate", response_model=TagValidation)
def validate_tags(body: TagValidateIn, db: Session = Depends(get_db)):
    return tags_service.validate_tags(db, body.names)
