"""
Hierarchical writes: a parent row plus its ordered children, persisted with
independent single-table calls.

create-or-replace runs, in order:

    ownership check -> order normalisation -> parent upsert
        -> children delete -> children insert

Everything that can be rejected (ownership, payload shape, duplicate order
values) is rejected before the first write. After that each store call
commits on its own; if one fails, StoreFailure names the step and nothing
is rolled back. The parent may then be left with no children until the
caller repeats the request. Repeating is safe: the upsert and the delete
are idempotent and the insert re-derives every child from the payload.

Two replaces of the same parent racing each other are not serialised. Each
child insert clears its own table for the parent in the same commit, so
the children of whichever insert lands last are what remains, never a mix
of both payloads. A loser whose insert trips over the winner's rows fails
with StoreFailure and can be retried.
"""
from __future__ import annotations
from datetime import datetime, timezone
import logging

from sqlalchemy.orm import Session

from liftlog.errors import Forbidden
from liftlog.models.workout import new_id
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.template_repo import TemplateExerciseRepository, TemplateRepository
from liftlog.repositories.workout_repo import WorkoutExerciseRepository, WorkoutRepository
from liftlog.schemas.template import (
    TemplateCreate,
    TemplateDeleted,
    TemplateExerciseIn,
    TemplateExerciseRead,
    TemplateRead,
    TemplateUpdate,
    TemplateWriteResult,
)
from liftlog.schemas.workout import (
    SetRead,
    SetsCreate,
    SetsCreated,
    WorkoutCreate,
    WorkoutCreated,
    WorkoutDeleted,
    WorkoutExerciseIn,
    WorkoutExerciseRead,
    WorkoutFinish,
    WorkoutRead,
    WorkoutUpdate,
    WorkoutWriteResult,
)
from liftlog.services.ordering import ensure_disjoint, normalize
from liftlog.services.ownership import is_owner, load_claimable, load_owned

log = logging.getLogger(__name__)

def _now() -> datetime:
    return datetime.now(timezone.utc)


# --- workouts -------------------------------------------------------------

def _normalize_exercises(exercises: list[WorkoutExerciseIn]) -> list[WorkoutExerciseIn]:
    ordered = normalize(exercises, "exercise_order")
    return [ex.model_copy(update={"sets": normalize(ex.sets, "set_order")}) for ex in ordered]

def _replace_workout(
    db: Session,
    caller_id: str,
    workout_id: str,
    payload: WorkoutCreate,
    exercises: list[WorkoutExerciseIn],
) -> WorkoutWriteResult:
    exercises = _normalize_exercises(exercises)

    workouts = WorkoutRepository(db)
    workout_exercises = WorkoutExerciseRepository(db)
    sets = SetRepository(db)

    workout = workouts.upsert(
        workout_id,
        {
            "user_id": caller_id,
            "name": payload.name,
            "date_performed": payload.date_performed,
            "duration": payload.duration,
            "template_id": payload.template_id,
            "updated_at": _now(),
        },
        preserve=("user_id",),
    )

    # sets reference workout_exercises, so they go first
    sets.delete_where(workout_id=workout_id)
    workout_exercises.delete_where(workout_id=workout_id)

    exercise_rows = []
    set_rows = []
    for ex in exercises:
        we_id = new_id()
        exercise_rows.append({
            "workout_exercises_id": we_id,
            "workout_id": workout_id,
            "exercise_id": ex.exercise_id,
            "exercise_order": ex.exercise_order,
            "notes": ex.notes,
        })
        for s in ex.sets:
            set_rows.append({
                "workout_id": workout_id,
                "workout_exercises_id": we_id,
                "weight": s.weight,
                "reps": s.reps,
                "rir": s.rir,
                "set_order": s.set_order,
            })

    inserted_exercises = workout_exercises.replace_where(exercise_rows, workout_id=workout_id)
    inserted_sets = sets.replace_where(set_rows, workout_id=workout_id)
    log.info("workout replaced workout_id=%s exercises=%d sets=%d",
             workout_id, len(inserted_exercises), len(inserted_sets))

    return WorkoutWriteResult(
        workout=WorkoutRead.model_validate(workout),
        workout_exercises=[WorkoutExerciseRead.model_validate(we) for we in inserted_exercises],
        sets=[SetRead.model_validate(s) for s in inserted_sets],
    )

def finish_workout(db: Session, caller_id: str, payload: WorkoutFinish) -> WorkoutWriteResult:
    workout_id = payload.workout_id or new_id()
    load_claimable(WorkoutRepository(db), workout_id, caller_id, label="workout")
    return _replace_workout(db, caller_id, workout_id, payload, payload.exercises)

def update_workout(db: Session, caller_id: str, workout_id: str, payload: WorkoutUpdate) -> WorkoutWriteResult:
    load_owned(WorkoutRepository(db), workout_id, caller_id, label="workout", conceal=True)
    return _replace_workout(db, caller_id, workout_id, payload, payload.exercises)

def create_workout(db: Session, caller_id: str, payload: WorkoutCreate) -> WorkoutCreated:
    workout = WorkoutRepository(db).insert({
        "user_id": caller_id,
        "name": payload.name,
        "date_performed": payload.date_performed,
        "duration": payload.duration,
        "template_id": payload.template_id,
    })
    log.info("workout created workout_id=%s", workout.workout_id)
    return WorkoutCreated(workout=WorkoutRead.model_validate(workout))

def delete_workout(db: Session, caller_id: str, workout_id: str) -> WorkoutDeleted:
    load_owned(WorkoutRepository(db), workout_id, caller_id, label="workout")
    SetRepository(db).delete_where(workout_id=workout_id)
    WorkoutExerciseRepository(db).delete_where(workout_id=workout_id)
    WorkoutRepository(db).delete_where(workout_id=workout_id)
    log.info("workout deleted workout_id=%s", workout_id)
    return WorkoutDeleted(workout_id=workout_id)

def add_sets(db: Session, caller_id: str, payload: SetsCreate) -> SetsCreated:
    """
    Append sets to an existing workout exercise. Siblings are left alone, so
    unlike the replace path a repeated call stores the sets twice.
    """
    workout = WorkoutRepository(db).get(payload.workout_id)
    if workout is None or not is_owner(workout, caller_id):
        raise Forbidden("Unauthorized access to this workout")
    we = WorkoutExerciseRepository(db).get(payload.workout_exercises_id)
    if we is None or we.workout_id != workout.workout_id:
        raise Forbidden("Workout exercise does not belong to this workout")

    sets = SetRepository(db)
    new_sets = normalize(payload.sets, "set_order", start=sets.max_order(we.workout_exercises_id))
    ensure_disjoint(new_sets, "set_order", sets.orders_for(we.workout_exercises_id))

    inserted = sets.insert_many([
        {
            "workout_id": workout.workout_id,
            "workout_exercises_id": we.workout_exercises_id,
            "weight": s.weight,
            "reps": s.reps,
            "rir": s.rir,
            "set_order": s.set_order,
        }
        for s in new_sets
    ])
    return SetsCreated(sets=[SetRead.model_validate(s) for s in inserted])


# --- templates ------------------------------------------------------------

def _template_exercise_row(template_id: str, ex: TemplateExerciseIn) -> dict:
    return {
        "template_id": template_id,
        "exercise_id": ex.exercise_id,
        "exercise_order": ex.exercise_order,
        "sets": ex.sets,
        **ex.rep_prescription.columns("reps"),
        **ex.rir_prescription.columns("rir"),
    }

def _replace_template(
    db: Session,
    caller_id: str,
    template_id: str,
    payload: TemplateCreate | TemplateUpdate,
) -> TemplateWriteResult:
    exercises = normalize(payload.exercises, "exercise_order")

    templates = TemplateRepository(db)
    template_exercises = TemplateExerciseRepository(db)

    template = templates.upsert(
        template_id,
        {
            "created_by": caller_id,
            "name": payload.name,
            "is_public": payload.is_public,
            "updated_at": _now(),
        },
        preserve=("created_by",),
    )
    template_exercises.delete_where(template_id=template_id)
    inserted = template_exercises.replace_where(
        [_template_exercise_row(template_id, ex) for ex in exercises], template_id=template_id
    )
    log.info("template replaced template_id=%s exercises=%d", template_id, len(inserted))

    inserted.sort(key=lambda te: te.exercise_order)
    return TemplateWriteResult(
        template=TemplateRead.model_validate(template),
        template_exercises=[TemplateExerciseRead.model_validate(te) for te in inserted],
    )

def save_template(db: Session, caller_id: str, payload: TemplateCreate) -> TemplateWriteResult:
    """Create, or re-create with the same id; the first creator stays the owner."""
    template_id = payload.template_id or new_id()
    load_claimable(TemplateRepository(db), template_id, caller_id, label="template")
    return _replace_template(db, caller_id, template_id, payload)

def update_template(db: Session, caller_id: str, template_id: str, payload: TemplateUpdate) -> TemplateWriteResult:
    load_owned(TemplateRepository(db), template_id, caller_id, label="template", conceal=True)
    return _replace_template(db, caller_id, template_id, payload)

def delete_template(db: Session, caller_id: str, template_id: str) -> TemplateDeleted:
    load_owned(TemplateRepository(db), template_id, caller_id, label="template")
    TemplateExerciseRepository(db).delete_where(template_id=template_id)
    TemplateRepository(db).delete_where(template_id=template_id)
    log.info("template deleted template_id=%s", template_id)
    return TemplateDeleted(template_id=template_id)
