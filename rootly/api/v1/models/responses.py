"""
API response models using Pydantic.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from rootly.domain.models import ActivityKind, LightCategory


class IdealConditionsResponse(BaseModel):
    """Light and temperature a species thrives in."""
    known: bool = Field(
        description="False when the species profile is unavailable"
    )
    light: LightCategory = Field(
        description="Light requirement",
        examples=["part sun"]
    )
    min_temperature: Optional[float] = Field(
        default=None,
        description="Minimum comfortable temperature in °C",
        examples=[15.0]
    )
    max_temperature: Optional[float] = Field(
        default=None,
        description="Maximum comfortable temperature in °C",
        examples=[25.0]
    )


class SpeciesResponse(BaseModel):
    """Species profile with its ideal conditions."""
    scientific_name: str = Field(examples=["Pothos"])
    water_frequency: int = Field(description="Days between waterings")
    fertilizer_frequency: int = Field(description="Days between fertilizations")
    light_level: int = Field(description="Ordinal light level, 1 (dark) to 4 (full sun)")
    conditions: IdealConditionsResponse


class SpeciesListResponse(BaseModel):
    """Response model for the species catalog."""
    count: int
    results: List[SpeciesResponse]


class PlantResponse(BaseModel):
    """A user's plant."""
    id: int
    user_id: int
    name: str = Field(examples=["Kitchen pothos"])
    scientific_name: str = Field(examples=["Pothos"])
    created_on: date
    is_dead: bool
    is_favorite: bool
    img: Optional[str] = None


class PlantListResponse(BaseModel):
    """Response model for a user's plants."""
    user_id: int
    count: int
    results: List[PlantResponse]


class ScheduleResponse(BaseModel):
    """Next due dates of a plant. Null dates mean the schedule is unknown."""
    plant_id: int
    reference_date: date = Field(description="Day the schedule was computed for")
    next_water: Optional[date] = None
    next_fertilizer: Optional[date] = None
    water_overdue: bool = False
    fertilizer_overdue: bool = False
    days_until_water: Optional[int] = None
    days_until_fertilizer: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "plant_id": 1,
                "reference_date": "2022-01-02",
                "next_water": "2022-01-03",
                "next_fertilizer": "2022-01-02",
                "water_overdue": False,
                "fertilizer_overdue": False,
                "days_until_water": 1,
                "days_until_fertilizer": 0,
            }
        }


class PlantDetailsResponse(BaseModel):
    """Response model for the plant details endpoint."""
    plant: PlantResponse
    conditions: IdealConditionsResponse
    schedule: ScheduleResponse


class ActivityResponse(BaseModel):
    """A recorded watering or fertilizing."""
    plant_id: int
    kind: ActivityKind
    performed_on: date


class ActivityHistoryResponse(BaseModel):
    """Dates a care action was performed, newest first."""
    plant_id: int
    kind: ActivityKind
    dates: List[date]


class PlantLogResponse(BaseModel):
    """Journal entry of a plant."""
    id: int
    plant_id: int
    logged_on: date
    description: str
    picture: Optional[str] = None
    height: Optional[float] = None


class CareTaskResponse(BaseModel):
    """A care action that is due."""
    plant_id: int
    plant_name: str
    kind: ActivityKind
    due_on: date
    overdue: bool


class CareTaskListResponse(BaseModel):
    """Response model for a user's to-do list."""
    user_id: int
    on: date
    count: int
    tasks: List[CareTaskResponse]


class UserResponse(BaseModel):
    """User profile."""
    id: int
    username: str = Field(examples=["user1"])
    location: Optional[str] = None
    profile_img: Optional[str] = None
    number_of_plants: int = Field(description="Live plants owned by the user")
