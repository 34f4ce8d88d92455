from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user_id
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.exercise import ExerciseRead
from liftlog.schemas.workout import HistoryEntry
from liftlog.services import assembler

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_exercises(db: Session = Depends(get_db)):
    return ExerciseRepository(db).list()

@router.get("/{exercise_id}/history", response_model=list[HistoryEntry])
def exercise_history(
    exercise_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return assembler.exercise_history(db, exercise_id, user_id)
