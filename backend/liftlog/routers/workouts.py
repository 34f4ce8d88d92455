from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user_id
from liftlog.schemas.workout import (
    WeeklyCounts,
    WorkoutCreate,
    WorkoutCreated,
    WorkoutDeleted,
    WorkoutDetail,
    WorkoutFinish,
    WorkoutPage,
    WorkoutRead,
    WorkoutUpdate,
    WorkoutWriteResult,
)
from liftlog.services import assembler, pipeline

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.post("/finish", response_model=WorkoutWriteResult, status_code=status.HTTP_201_CREATED)
def finish_workout(
    payload: WorkoutFinish,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.finish_workout(db, user_id, payload)

@router.post("/create", response_model=WorkoutCreated, status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.create_workout(db, user_id, payload)

@router.get("", response_model=list[WorkoutRead])
def list_my_workouts(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return assembler.list_workouts(db, user_id)

@router.get("/details", response_model=list[WorkoutDetail])
def list_my_workouts_with_details(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return assembler.list_workouts_with_details(db, user_id)

@router.get("/batch", response_model=WorkoutPage)
def my_workouts_page(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return assembler.workouts_page(db, user_id, page=page, limit=limit)

@router.get("/weekly-counts", response_model=WeeklyCounts)
def weekly_counts(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return assembler.weekly_counts(db, user_id)

@router.get("/{workout_id}", response_model=WorkoutDetail)
def get_workout(
    workout_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return assembler.assemble_workout(db, workout_id, user_id)

@router.put("/{workout_id}", response_model=WorkoutWriteResult)
def update_workout(
    workout_id: str,
    payload: WorkoutUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.update_workout(db, user_id, workout_id, payload)

@router.delete("/{workout_id}", response_model=WorkoutDeleted)
def delete_workout(
    workout_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.delete_workout(db, user_id, workout_id)
