"""Read side: join parent rows with their ordered children."""
from __future__ import annotations
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from liftlog.models import Workout, WorkoutExercise, WorkoutSet
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.template_repo import TemplateExerciseRepository, TemplateRepository
from liftlog.repositories.workout_repo import WorkoutExerciseRepository, WorkoutRepository
from liftlog.schemas.template import TemplateDetail, TemplateExerciseRead, TemplateRead
from liftlog.schemas.workout import (
    HistoryEntry,
    SetRead,
    WeeklyCounts,
    WorkoutDetail,
    WorkoutExerciseDetail,
    WorkoutExerciseRead,
    WorkoutPage,
    WorkoutRead,
)
from liftlog.services.ownership import load_owned

def _group(rows: Iterable, key: str) -> dict[str, list]:
    grouped: dict[str, list] = defaultdict(list)
    for row in rows:
        grouped[getattr(row, key)].append(row)
    return grouped

def _sets_sorted(sets: list[WorkoutSet]) -> list[SetRead]:
    return [SetRead.model_validate(s) for s in sorted(sets, key=lambda s: s.set_order)]

def _merge_workout(
    workout: Workout,
    exercises: list[WorkoutExercise],
    sets_by_exercise: dict[str, list[WorkoutSet]],
) -> WorkoutDetail:
    details = [
        WorkoutExerciseDetail(
            **WorkoutExerciseRead.model_validate(we).model_dump(),
            sets=_sets_sorted(sets_by_exercise.get(we.workout_exercises_id, [])),
        )
        for we in sorted(exercises, key=lambda we: we.exercise_order)
    ]
    return WorkoutDetail(**WorkoutRead.model_validate(workout).model_dump(), exercises=details)

def assemble_workout(db: Session, workout_id: str, caller_id: str) -> WorkoutDetail:
    workout = load_owned(WorkoutRepository(db), workout_id, caller_id, label="workout")
    exercises = WorkoutExerciseRepository(db).find(workout_id=workout_id)
    sets = SetRepository(db).find(workout_id=workout_id)
    return _merge_workout(workout, exercises, _group(sets, "workout_exercises_id"))

def list_workouts(db: Session, caller_id: str) -> list[WorkoutRead]:
    return [WorkoutRead.model_validate(w) for w in WorkoutRepository(db).list_by_user(caller_id)]

def _assemble_many(db: Session, workouts: list[Workout]) -> list[WorkoutDetail]:
    """Three queries for any number of workouts rather than one per workout."""
    ids = [w.workout_id for w in workouts]
    exercises_by_workout = _group(WorkoutExerciseRepository(db).find_in("workout_id", ids), "workout_id")
    sets_by_exercise = _group(SetRepository(db).find_in("workout_id", ids), "workout_exercises_id")
    return [
        _merge_workout(w, exercises_by_workout.get(w.workout_id, []), sets_by_exercise)
        for w in workouts
    ]

def list_workouts_with_details(db: Session, caller_id: str) -> list[WorkoutDetail]:
    return _assemble_many(db, WorkoutRepository(db).list_by_user(caller_id))

def workouts_page(db: Session, caller_id: str, *, page: int = 1, limit: int = 20) -> WorkoutPage:
    """Newest-first feed of assembled workouts, `limit` per page, pages counted from 1."""
    offset = (page - 1) * limit
    found = WorkoutRepository(db).page_by_user(caller_id, limit=limit, offset=offset)
    return WorkoutPage(
        workouts=_assemble_many(db, found.items),
        page=page,
        limit=limit,
        total=found.total,
        has_more=offset + len(found.items) < found.total,
    )

def list_templates(db: Session, caller_id: str) -> list[TemplateDetail]:
    templates = TemplateRepository(db).list_by_creator(caller_id)
    children = _group(
        TemplateExerciseRepository(db).find_in("template_id", [t.template_id for t in templates]),
        "template_id",
    )
    return [
        TemplateDetail(
            **TemplateRead.model_validate(t).model_dump(),
            exercises=[
                TemplateExerciseRead.model_validate(te)
                for te in sorted(children.get(t.template_id, []), key=lambda te: te.exercise_order)
            ],
        )
        for t in templates
    ]

def exercise_history(db: Session, exercise_id: str, caller_id: str) -> list[HistoryEntry]:
    """
    Every time the caller logged `exercise_id`, with its sets, most recent
    workout first. Instances with no sets are left out.
    """
    owned = WorkoutExerciseRepository(db).list_owned_for_exercise(exercise_id, caller_id)
    if not owned:
        return []
    sets = _group(
        SetRepository(db).find_in("workout_exercises_id", [we.workout_exercises_id for we, _ in owned]),
        "workout_exercises_id",
    )

    history = [
        HistoryEntry(
            workout_exercises_id=we.workout_exercises_id,
            workout_id=w.workout_id,
            name=w.name,
            date_performed=w.date_performed,
            created_at=w.created_at,
            sets=_sets_sorted(sets[we.workout_exercises_id]),
        )
        for we, w in owned
        if sets.get(we.workout_exercises_id)
    ]
    history.sort(key=lambda h: (h.date_performed, h.created_at, h.workout_exercises_id), reverse=True)
    return history

def weekly_counts(db: Session, caller_id: str, *, weeks: int = 8, today: Optional[date] = None) -> WeeklyCounts:
    """Workouts per 7-day bucket, oldest first; the last bucket starts today."""
    today = today or date.today()
    starts = [today - timedelta(days=7 * (weeks - 1 - i)) for i in range(weeks)]
    counts = [0] * weeks
    for w in WorkoutRepository(db).list_between(caller_id, starts[0], today):
        index = (w.date_performed - starts[0]).days // 7
        if 0 <= index < weeks:
            counts[index] += 1
    return WeeklyCounts(weeks=starts, counts=counts)
