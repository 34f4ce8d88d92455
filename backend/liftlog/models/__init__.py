from liftlog.models.exercise import Exercise
from liftlog.models.workout import Workout, WorkoutExercise, WorkoutSet
from liftlog.models.template import WorkoutTemplate, TemplateExercise

__all__ = [
    "Exercise",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    "WorkoutTemplate",
    "TemplateExercise",
]
