from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Float, Boolean, ForeignKey, DateTime, Enum as SAEnum, func
from liftlog.db import Base
from liftlog.models.enums import WeightUnit, ProgressionTrigger

class Routine(Base):
    __tablename__ = "routines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    is_template: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    source: Mapped[str | None] = mapped_column(String(120), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    exercises = relationship(
        "RoutineExercise",
        back_populates="routine",
        cascade="all, delete-orphan",
        order_by="RoutineExercise.order",
    )

    def sorted_exercises(self) -> list["RoutineExercise"]:
        return sorted(self.exercises, key=lambda re: re.order)

class RoutineExercise(Base):
    __tablename__ = "routine_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    routine_id: Mapped[int] = mapped_column(ForeignKey("routines.id", ondelete="CASCADE"), index=True)
    # weak: the exercise may be deleted out from under the routine
    exercise_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True, index=True
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    target_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    target_rep_min: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    target_rep_max: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    target_rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    rest_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=90)
    next_target_weight: Mapped[float | None] = mapped_column(Float, nullable=True)

    routine = relationship("Routine", back_populates="exercises")
    exercise = relationship("Exercise")
    progression_rule = relationship(
        "ProgressionRule",
        back_populates="routine_exercise",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def exercise_name(self) -> str | None:
        return self.exercise.name if self.exercise is not None else None

    @property
    def rep_range_display(self) -> str:
        if self.target_rep_min == self.target_rep_max:
            return f"{self.target_rep_min}"
        return f"{self.target_rep_min}-{self.target_rep_max}"

class ProgressionRule(Base):
    __tablename__ = "progression_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    routine_exercise_id: Mapped[int] = mapped_column(
        ForeignKey("routine_exercises.id", ondelete="CASCADE"), unique=True, index=True
    )
    increment_amount: Mapped[float] = mapped_column(Float, nullable=False, default=5.0)
    unit: Mapped[WeightUnit] = mapped_column(
        SAEnum(WeightUnit, name="weight_unit", native_enum=False), nullable=False, default=WeightUnit.lb
    )
    trigger_type: Mapped[ProgressionTrigger] = mapped_column(
        SAEnum(ProgressionTrigger, name="progression_trigger", native_enum=False,
               values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ProgressionTrigger.all_sets_completed,
    )
    consecutive_failures: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deload_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0.10)
    deload_after_failures: Mapped[int] = mapped_column(Integer, nullable=False, default=3)

    routine_exercise = relationship("RoutineExercise", back_populates="progression_rule")
