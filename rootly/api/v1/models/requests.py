"""
API request models using Pydantic.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class PlantCreateRequest(BaseModel):
    """Request body for adding a plant."""
    user_id: int = Field(ge=1, description="Owner of the plant")
    name: str = Field(min_length=1, max_length=100, examples=["Kitchen pothos"])
    scientific_name: str = Field(min_length=1, max_length=100, examples=["Pothos"])
    created_on: Optional[date] = Field(
        default=None,
        description="Date the plant was added, defaults to today"
    )
    img: Optional[str] = Field(default=None, max_length=255)


class PlantUpdateRequest(BaseModel):
    """Request body for editing a plant. Omitted fields are unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_favorite: Optional[bool] = None
    is_dead: Optional[bool] = Field(
        default=None,
        description="Set to true to mark the plant as dead"
    )


class ActivityCreateRequest(BaseModel):
    """Request body for recording a watering or fertilizing."""
    performed_on: Optional[date] = Field(
        default=None,
        description="Day the action was performed, defaults to today"
    )


class PlantLogCreateRequest(BaseModel):
    """Request body for a journal entry."""
    description: str = Field(min_length=1)
    logged_on: Optional[date] = Field(default=None, description="Defaults to today")
    picture: Optional[str] = Field(default=None, max_length=255)
    height: Optional[float] = Field(default=None, ge=0, description="Plant height in cm")


class UserCreateRequest(BaseModel):
    """Request body for creating a user profile."""
    username: str = Field(min_length=1, max_length=50, examples=["user1"])
    location: Optional[str] = Field(default=None, max_length=100)
    profile_img: Optional[str] = Field(default=None, max_length=255)


class UserUpdateRequest(BaseModel):
    """Request body for editing a user profile. Omitted fields are unchanged."""
    username: Optional[str] = Field(default=None, min_length=1, max_length=50)
    location: Optional[str] = Field(default=None, max_length=100)
    profile_img: Optional[str] = Field(default=None, max_length=255)
