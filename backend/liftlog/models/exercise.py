from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String
from liftlog.db import Base

class Exercise(Base):
    __tablename__ = "exercises"
    exercise_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    muscle_group: Mapped[str | None] = mapped_column(String(60), nullable=True)
