from __future__ import annotations
from sqlalchemy import select, func
from liftlog.models import WorkoutSet
from liftlog.repositories.base import BaseRepository

class SetRepository(BaseRepository[WorkoutSet]):
    model = WorkoutSet

    def orders_for(self, workout_exercises_id: str) -> set[int]:
        stmt = select(WorkoutSet.set_order).where(WorkoutSet.workout_exercises_id == workout_exercises_id)
        with self.step("select sets"):
            return set(self.db.execute(stmt).scalars().all())

    def max_order(self, workout_exercises_id: str) -> int:
        stmt = select(func.max(WorkoutSet.set_order)).where(WorkoutSet.workout_exercises_id == workout_exercises_id)
        with self.step("select sets"):
            return self.db.execute(stmt).scalar_one() or 0
