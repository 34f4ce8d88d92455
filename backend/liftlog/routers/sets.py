from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user_id
from liftlog.schemas.workout import SetsCreate, SetsCreated
from liftlog.services import pipeline

router = APIRouter(prefix="/sets", tags=["sets"])

@router.post("", response_model=SetsCreated, status_code=status.HTTP_201_CREATED)
def add_sets(
    payload: SetsCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    # appends; the workout must be the caller's and the exercise must be in it
    return pipeline.add_sets(db, user_id, payload)
