from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, Float, Boolean, JSON, Enum as SAEnum
from liftlog.db import Base
from liftlog.models.enums import WeightUnit

def _unit():
    return SAEnum(WeightUnit, name="weight_unit", native_enum=False)

class Barbell(Base):
    __tablename__ = "barbells"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[WeightUnit] = mapped_column(_unit(), nullable=False, default=WeightUnit.lb)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

class Plate(Base):
    __tablename__ = "plates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[WeightUnit] = mapped_column(_unit(), nullable=False, default=WeightUnit.lb)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    color: Mapped[str] = mapped_column(String(30), nullable=False, default="gray")

class DumbbellSet(Base):
    __tablename__ = "dumbbell_sets"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    available_weights: Mapped[list[float]] = mapped_column(JSON, nullable=False, default=list)
    unit: Mapped[WeightUnit] = mapped_column(_unit(), nullable=False, default=WeightUnit.lb)

class Machine(Base):
    __tablename__ = "machines"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    min_weight: Mapped[float] = mapped_column(Float, nullable=False)
    max_weight: Mapped[float] = mapped_column(Float, nullable=False)
    increment: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[WeightUnit] = mapped_column(_unit(), nullable=False, default=WeightUnit.lb)

class CableAttachment(Base):
    __tablename__ = "cable_attachments"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
