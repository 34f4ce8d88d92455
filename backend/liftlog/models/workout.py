import uuid
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, String, Date, DateTime, Numeric, Text, UniqueConstraint, func
from liftlog.db import Base

def new_id() -> str:
    return str(uuid.uuid4())

class Workout(Base):
    __tablename__ = "workouts"
    workout_id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    date_performed: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    template_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

class WorkoutExercise(Base):
    __tablename__ = "workout_exercises"
    __table_args__ = (UniqueConstraint("workout_id", "exercise_order", name="uq_workout_exercise_order"),)
    workout_exercises_id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    workout_id: Mapped[str] = mapped_column(ForeignKey("workouts.workout_id"), index=True, nullable=False)
    exercise_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    exercise_order: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

class WorkoutSet(Base):
    __tablename__ = "sets"
    __table_args__ = (UniqueConstraint("workout_exercises_id", "set_order", name="uq_set_order"),)
    set_id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    # denormalised so a workout's sets can be fetched or cleared without a join
    workout_id: Mapped[str] = mapped_column(ForeignKey("workouts.workout_id"), index=True, nullable=False)
    workout_exercises_id: Mapped[str] = mapped_column(
        ForeignKey("workout_exercises.workout_exercises_id"), index=True, nullable=False
    )
    weight: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    reps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    set_order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
