from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Integer, ForeignKey, String, DateTime, Numeric, UniqueConstraint, func
from liftlog.db import Base
from liftlog.models.workout import new_id

class WorkoutTemplate(Base):
    __tablename__ = "workout_templates"
    # client-generated so an offline-created template keeps its id once synced
    template_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    created_by: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

class TemplateExercise(Base):
    __tablename__ = "template_exercises"
    __table_args__ = (UniqueConstraint("template_id", "exercise_order", name="uq_template_exercise_order"),)
    template_exercise_id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    template_id: Mapped[str] = mapped_column(ForeignKey("workout_templates.template_id"), index=True, nullable=False)
    exercise_id: Mapped[str] = mapped_column(String(64), nullable=False)
    exercise_order: Mapped[int] = mapped_column(Integer, nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # prescription columns; see liftlog.schemas.prescription
    weight: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rep_range_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rep_range_max: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rir_range_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rir_range_max: Mapped[int | None] = mapped_column(Integer, nullable=True)

