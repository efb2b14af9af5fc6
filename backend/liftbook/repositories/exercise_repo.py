from __future__ import annotations
from liftbook.models import Exercise, MuscleGroup
from liftbook.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def create(self, *, name: str, muscle_group: MuscleGroup, is_timed: bool = False) -> Exercise:
        return self.add_and_refresh(Exercise(name=name, muscle_group=muscle_group, is_timed=is_timed))
