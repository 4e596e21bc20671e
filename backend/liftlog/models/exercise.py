from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, Text, Boolean, JSON, Enum as SAEnum
from liftlog.db import Base
from liftlog.models.enums import ExerciseCategory, EquipmentType

class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    category: Mapped[ExerciseCategory] = mapped_column(
        SAEnum(ExerciseCategory, name="exercise_category", native_enum=False),
        nullable=False,
        default=ExerciseCategory.compound,
    )
    # list of MuscleGroup values
    muscle_groups: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    equipment_type: Mapped[EquipmentType] = mapped_column(
        SAEnum(EquipmentType, name="equipment_type", native_enum=False),
        nullable=False,
        default=EquipmentType.barbell,
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
