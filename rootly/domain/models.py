"""
Domain models for plants, species and care activity.

These models represent the core domain entities and should be independent
of any infrastructure concerns (databases, HTTP, etc.).
"""
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ActivityKind(str, Enum):
    """Kinds of recurring care actions."""
    WATER = "water"
    FERTILIZER = "fertilizer"


class LightCategory(str, Enum):
    """Human-readable light requirement of a species."""
    DARK = "dark"
    SHADE = "shade"
    PART_SUN = "part sun"
    FULL_SUN = "full sun"
    UNRECOGNIZED = "unrecognized"


class SpeciesProfile(BaseModel):
    """Ideal care parameters for a plant species."""
    scientific_name: str
    water_frequency: int = Field(description="Days between waterings")
    fertilizer_frequency: int = Field(description="Days between fertilizations")
    light_level: int = Field(description="Ordinal light level, 1 (dark) to 4 (full sun)")
    max_temperature: float = Field(description="Maximum comfortable temperature in °C")
    min_temperature: float = Field(description="Minimum comfortable temperature in °C")

    class Config:
        frozen = True

    def interval_for(self, kind: ActivityKind) -> int:
        if kind is ActivityKind.WATER:
            return self.water_frequency
        return self.fertilizer_frequency


class User(BaseModel):
    """Profile of a plant owner."""
    id: int
    username: str
    location: Optional[str] = None
    profile_img: Optional[str] = Field(default=None, description="Opaque image reference")
    number_of_plants: int = Field(default=0, description="Live plants owned by the user")


class Plant(BaseModel):
    """A plant owned by a single user."""
    id: int
    user_id: int
    name: str
    scientific_name: str
    created_on: date = Field(description="Date the plant was added")
    is_dead: bool = False
    is_favorite: bool = False
    img: Optional[str] = Field(default=None, description="Opaque image reference")


class ActivityEvent(BaseModel):
    """A watering or fertilizing that happened on a given day."""
    plant_id: int
    user_id: int
    kind: ActivityKind
    performed_on: date


class PlantLog(BaseModel):
    """Free-form journal entry for a plant."""
    id: Optional[int] = None
    plant_id: int
    user_id: int
    logged_on: date
    description: str
    picture: Optional[str] = None
    height: Optional[float] = Field(default=None, description="Plant height in cm")


class IdealConditions(BaseModel):
    """Light and temperature a species thrives in."""
    known: bool
    light: LightCategory = LightCategory.UNRECOGNIZED
    min_temperature: Optional[float] = None
    max_temperature: Optional[float] = None


class CareSchedule(BaseModel):
    """Next due dates for a plant, relative to a reference day."""
    plant_id: int
    reference_date: date
    next_water: Optional[date] = None
    next_fertilizer: Optional[date] = None
    water_overdue: bool = False
    fertilizer_overdue: bool = False
    days_until_water: Optional[int] = None
    days_until_fertilizer: Optional[int] = None


class CareTask(BaseModel):
    """A pending care action for one plant."""
    plant_id: int
    plant_name: str
    kind: ActivityKind
    due_on: date
    overdue: bool


class PlantDetails(BaseModel):
    """Everything needed to render a plant's detail view."""
    plant: Plant
    species: Optional[SpeciesProfile] = None
    conditions: IdealConditions
    schedule: CareSchedule
