from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, PrivateAttr, model_validator

from liftlog.schemas.prescription import (
    UNSET,
    RepPrescription,
    RirPrescription,
    decode_reps,
    decode_rir,
)
from liftlog.schemas.workout import IdStr, NameStr, NonNegFloat, NonNegInt, PosInt

class TemplateExerciseIn(BaseModel):
    exercise_id: IdStr
    exercise_order: PosInt | None = None
    sets: PosInt = 1

    weight: NonNegFloat | None = None
    reps: NonNegInt | None = None
    rep_range_min: NonNegInt | None = None
    rep_range_max: NonNegInt | None = None
    rir: NonNegInt | None = None
    rir_range_min: NonNegInt | None = None
    rir_range_max: NonNegInt | None = None

    _reps: RepPrescription = PrivateAttr(default=UNSET)
    _rir: RirPrescription = PrivateAttr(default=UNSET)

    @model_validator(mode="after")
    def decode_prescription(self):
        self._reps = decode_reps(self.reps, self.weight, self.rep_range_min, self.rep_range_max)
        self._rir = decode_rir(self.rir, self.rir_range_min, self.rir_range_max)
        return self

    @property
    def rep_prescription(self) -> RepPrescription:
        return self._reps

    @property
    def rir_prescription(self) -> RirPrescription:
        return self._rir

class TemplateCreate(BaseModel):
    # client-generated; generated server-side when omitted
    template_id: IdStr | None = None
    name: NameStr
    is_public: bool = False
    exercises: list[TemplateExerciseIn] = Field(min_length=1)

class TemplateUpdate(BaseModel):
    name: NameStr
    is_public: bool = False
    exercises: list[TemplateExerciseIn] = []


class TemplateExerciseRead(BaseModel):
    template_exercise_id: str
    template_id: str
    exercise_id: str
    exercise_order: int
    sets: int
    weight: float | None = None
    reps: int | None = None
    rep_range_min: int | None = None
    rep_range_max: int | None = None
    rir: int | None = None
    rir_range_min: int | None = None
    rir_range_max: int | None = None

    model_config = {"from_attributes": True}

class TemplateRead(BaseModel):
    template_id: str
    created_by: str
    name: str
    is_public: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

class TemplateDetail(TemplateRead):
    exercises: list[TemplateExerciseRead] = []

class TemplateWriteResult(BaseModel):
    template: TemplateRead
    template_exercises: list[TemplateExerciseRead]

class TemplateDeleted(BaseModel):
    deleted: bool = True
    template_id: str
