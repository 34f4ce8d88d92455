from __future__ import annotations
from sqlalchemy import select
from liftlog.models import WorkoutTemplate, TemplateExercise
from liftlog.repositories.base import BaseRepository

class TemplateRepository(BaseRepository[WorkoutTemplate]):
    model = WorkoutTemplate

    def list_by_creator(self, user_id: str) -> list[WorkoutTemplate]:
        stmt = select(WorkoutTemplate).where(WorkoutTemplate.created_by == user_id)\
                                      .order_by(WorkoutTemplate.created_at.desc())
        with self.step("select workout_templates"):
            return list(self.db.execute(stmt).scalars().all())

class TemplateExerciseRepository(BaseRepository[TemplateExercise]):
    model = TemplateExercise
