from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, Float, Boolean, ForeignKey, DateTime, Enum as SAEnum
from liftlog.db import Base
from liftlog.models.enums import WeightUnit

class SetLog(Base):
    __tablename__ = "set_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True, index=True
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    target_weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    actual_weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    target_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    actual_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unit: Mapped[WeightUnit] = mapped_column(
        SAEnum(WeightUnit, name="weight_unit", native_enum=False), nullable=False, default=WeightUnit.lb
    )
    is_warmup: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    session = relationship("WorkoutSession", back_populates="set_logs")
    exercise = relationship("Exercise")

    @property
    def exercise_name(self) -> str | None:
        return self.exercise.name if self.exercise is not None else None
