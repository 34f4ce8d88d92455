from __future__ import annotations
from liftlog.models import Exercise
from liftlog.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list(self) -> list[Exercise]:
        return self.find(order_by="name")
