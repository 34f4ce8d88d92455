from typing import Annotated
from datetime import date, datetime
from pydantic import BaseModel, Field, StringConstraints, field_validator

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
IdStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
NotesStr = Annotated[str, Field(max_length=2000)]
PosInt = Annotated[int, Field(ge=1)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0)]

class SetIn(BaseModel):
    weight: NonNegFloat = 0
    reps: NonNegInt = 0
    rir: NonNegInt | None = None
    # omitted -> position in the submitted list
    set_order: PosInt | None = None

class WorkoutExerciseIn(BaseModel):
    exercise_id: IdStr
    exercise_order: PosInt | None = None
    notes: NotesStr = ""
    sets: list[SetIn] = []

    @field_validator("notes", mode="before")
    @classmethod
    def notes_default(cls, v):
        return "" if v is None else v

class WorkoutCreate(BaseModel):
    name: NameStr
    date_performed: date
    duration: NonNegInt = 0
    template_id: IdStr | None = None

class WorkoutFinish(WorkoutCreate):
    # client-generated; repeating a finish with the same id replaces, not duplicates
    workout_id: IdStr | None = None
    exercises: list[WorkoutExerciseIn] = Field(min_length=1)

class WorkoutUpdate(WorkoutCreate):
    exercises: list[WorkoutExerciseIn] = []

class SetsCreate(BaseModel):
    workout_id: IdStr
    workout_exercises_id: IdStr
    sets: list[SetIn] = Field(min_length=1)


class SetRead(BaseModel):
    set_id: str
    workout_id: str
    workout_exercises_id: str
    weight: float
    reps: int
    rir: int | None = None
    set_order: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

class WorkoutExerciseRead(BaseModel):
    workout_exercises_id: str
    workout_id: str
    exercise_id: str
    exercise_order: int
    notes: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    workout_id: str
    user_id: str
    name: str
    date_performed: date
    duration: int
    template_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

class WorkoutExerciseDetail(WorkoutExerciseRead):
    sets: list[SetRead] = []

class WorkoutDetail(WorkoutRead):
    exercises: list[WorkoutExerciseDetail] = []

class WorkoutPage(BaseModel):
    workouts: list[WorkoutDetail]
    page: int
    limit: int
    total: int
    has_more: bool

class WorkoutWriteResult(BaseModel):
    workout: WorkoutRead
    workout_exercises: list[WorkoutExerciseRead]
    sets: list[SetRead]

class WorkoutCreated(BaseModel):
    workout: WorkoutRead

class SetsCreated(BaseModel):
    sets: list[SetRead]

class WorkoutDeleted(BaseModel):
    deleted: bool = True
    workout_id: str

class HistoryEntry(BaseModel):
    workout_exercises_id: str
    workout_id: str
    name: str
    date_performed: date
    created_at: datetime | None = None
    sets: list[SetRead]

class WeeklyCounts(BaseModel):
    weeks: list[date]
    counts: list[int]
