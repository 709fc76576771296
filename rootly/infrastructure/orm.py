"""
ORM table definitions for the plant database.
"""
from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from rootly.domain.models import ActivityKind
from rootly.infrastructure.database import Base


class SpeciesRecord(Base):
    """Care profile of a plant species."""

    __tablename__ = "species"

    scientific_name = Column(String(100), primary_key=True)
    water_frequency = Column(Integer, nullable=False)
    fertilizer_frequency = Column(Integer, nullable=False)
    light_level = Column(Integer, nullable=False)
    max_temperature = Column(Float, nullable=False)
    min_temperature = Column(Float, nullable=False)

    def __repr__(self):
        return f"<SpeciesRecord(scientific_name='{self.scientific_name}')>"


class UserRecord(Base):
    """Profile of a plant owner."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    location = Column(String(100), nullable=True)
    profile_img = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<UserRecord(id={self.id}, username='{self.username}')>"


class PlantRecord(Base):
    """A plant owned by a user."""

    __tablename__ = "plants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Owner id; a profile row in "users" is optional
    user_id = Column(Integer, nullable=False, index=True)
    plant_name = Column(String(100), nullable=False)
    # Plain reference by name; unknown species must not block a plant
    scientific_name = Column(String(100), nullable=False)
    birthday = Column(Date, nullable=False)
    is_dead = Column(Boolean, nullable=False, default=False)
    is_favorite = Column(Boolean, nullable=False, default=False)
    img = Column(String(255), nullable=True)

    waterings = relationship(
        "WateringRecord", back_populates="plant", cascade="all, delete-orphan"
    )
    fertilizations = relationship(
        "FertilizationRecord", back_populates="plant", cascade="all, delete-orphan"
    )
    logs = relationship(
        "PlantLogRecord", back_populates="plant", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<PlantRecord(id={self.id}, plant_name='{self.plant_name}')>"


class WateringRecord(Base):
    """A plant was watered on a given day."""

    __tablename__ = "waterings"

    plant_id = Column(Integer, ForeignKey("plants.id", ondelete="CASCADE"), primary_key=True)
    date = Column(Date, primary_key=True)
    user_id = Column(Integer, nullable=False)

    plant = relationship("PlantRecord", back_populates="waterings")


class FertilizationRecord(Base):
    """A plant was fertilized on a given day."""

    __tablename__ = "fertilizations"

    plant_id = Column(Integer, ForeignKey("plants.id", ondelete="CASCADE"), primary_key=True)
    date = Column(Date, primary_key=True)
    user_id = Column(Integer, nullable=False)

    plant = relationship("PlantRecord", back_populates="fertilizations")


class PlantLogRecord(Base):
    """Journal entry for a plant."""

    __tablename__ = "plant_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plant_id = Column(Integer, ForeignKey("plants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)
    picture = Column(String(255), nullable=True)
    height = Column(Float, nullable=True)

    plant = relationship("PlantRecord", back_populates="logs")


ACTIVITY_TABLES = {
    ActivityKind.WATER: WateringRecord,
    ActivityKind.FERTILIZER: FertilizationRecord,
}
