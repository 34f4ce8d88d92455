from __future__ import annotations
from datetime import date
from sqlalchemy import select
from liftlog.models import Workout, WorkoutExercise
from liftlog.repositories.base import BaseRepository, Page

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def _newest_first(self, user_id: str):
        return select(Workout).where(Workout.user_id == user_id)\
                              .order_by(Workout.date_performed.desc(), Workout.created_at.desc())

    def list_by_user(self, user_id: str) -> list[Workout]:
        stmt = self._newest_first(user_id)
        with self.step("select workouts"):
            return list(self.db.execute(stmt).scalars().all())

    def page_by_user(self, user_id: str, *, limit: int = 20, offset: int = 0) -> Page[Workout]:
        return self.page(self._newest_first(user_id), limit=limit, offset=offset)

    def list_between(self, user_id: str, start: date, end: date) -> list[Workout]:
        stmt = select(Workout).where(
            Workout.user_id == user_id,
            Workout.date_performed >= start,
            Workout.date_performed <= end,
        ).order_by(Workout.date_performed.asc())
        with self.step("select workouts"):
            return list(self.db.execute(stmt).scalars().all())

class WorkoutExerciseRepository(BaseRepository[WorkoutExercise]):
    model = WorkoutExercise

    def list_owned_for_exercise(self, exercise_id: str, user_id: str) -> list[tuple[WorkoutExercise, Workout]]:
        """Every logged instance of an exercise whose workout belongs to `user_id`."""
        stmt = (
            select(WorkoutExercise, Workout)
            .join(Workout, Workout.workout_id == WorkoutExercise.workout_id)
            .where(WorkoutExercise.exercise_id == exercise_id, Workout.user_id == user_id)
        )
        with self.step("select workout_exercises"):
            return [(we, w) for we, w in self.db.execute(stmt).all()]
