from pydantic import BaseModel

class ExerciseRead(BaseModel):
    exercise_id: str
    name: str
    muscle_group: str | None = None

    model_config = {"from_attributes": True}
