"""
API router for user profiles, a user's plants and their care to-do list.
"""
from datetime import date
from fastapi import APIRouter, HTTPException, Path, Query
from fastapi.concurrency import run_in_threadpool
from typing import Annotated, Optional

from rootly.api.dependencies import PlantCareServiceDep
from rootly.api.v1.models.requests import UserCreateRequest, UserUpdateRequest
from rootly.api.v1.models.responses import (
    CareTaskListResponse,
    CareTaskResponse,
    PlantListResponse,
    PlantResponse,
    UserResponse,
)
from rootly.domain.exceptions import NotFoundError


router = APIRouter(
    prefix="/users",
    tags=["users"],
)

UserId = Annotated[int, Path(description="Unique identifier for the user")]

NOT_FOUND_RESPONSE = {
    404: {
        "description": "User not found",
    },
}


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create a user profile",
)
async def create_user(
    request: UserCreateRequest,
    service: PlantCareServiceDep,
) -> UserResponse:
    """Create a profile. Usernames must be unique."""
    user = await run_in_threadpool(
        service.add_user,
        username=request.username,
        location=request.location,
        profile_img=request.profile_img,
    )
    return UserResponse(**user.model_dump())


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user profile",
    responses=NOT_FOUND_RESPONSE,
)
async def get_user(
    user_id: UserId,
    service: PlantCareServiceDep,
) -> UserResponse:
    """
    Get a user profile with the number of live plants they own.

    Raises:
        HTTPException: If the user is not found
    """
    try:
        user = await run_in_threadpool(service.get_user, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return UserResponse(**user.model_dump())


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Edit a user profile",
    responses=NOT_FOUND_RESPONSE,
)
async def update_user(
    user_id: UserId,
    request: UserUpdateRequest,
    service: PlantCareServiceDep,
) -> UserResponse:
    """Change the username, location or profile picture."""
    try:
        user = await run_in_threadpool(
            service.update_user,
            user_id,
            username=request.username,
            location=request.location,
            profile_img=request.profile_img,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return UserResponse(**user.model_dump())


@router.get(
    "/{user_id}/plants",
    response_model=PlantListResponse,
    summary="List a user's plants",
)
async def list_plants(
    user_id: UserId,
    service: PlantCareServiceDep,
    favorites_only: Annotated[bool, Query(description="Only favorite plants")] = False,
    include_dead: Annotated[bool, Query(description="Include plants marked as dead")] = False,
) -> PlantListResponse:
    """List a user's plants ordered by id."""
    plants = await run_in_threadpool(
        service.list_plants,
        user_id,
        favorites_only=favorites_only,
        include_dead=include_dead,
    )
    return PlantListResponse(
        user_id=user_id,
        count=len(plants),
        results=[PlantResponse(**p.model_dump()) for p in plants],
    )


@router.get(
    "/{user_id}/tasks",
    response_model=CareTaskListResponse,
    summary="Get due care tasks",
    description="""
    Watering and fertilizing due on or before the given day for every live
    plant of the user, earliest first. Plants of unknown species are left out
    because their schedule cannot be computed.
    """,
)
async def list_tasks(
    user_id: UserId,
    service: PlantCareServiceDep,
    on: Annotated[Optional[date], Query(description="Day to check, defaults to today")] = None,
) -> CareTaskListResponse:
    """
    Get a user's care to-do list.

    Args:
        user_id: Unique identifier for the user
        service: Plant care service (injected dependency)
        on: Day to check

    Returns:
        CareTaskListResponse with due tasks
    """
    on = on or service.clock()
    tasks = await run_in_threadpool(service.due_tasks, user_id, on)
    return CareTaskListResponse(
        user_id=user_id,
        on=on,
        count=len(tasks),
        tasks=[CareTaskResponse(**t.model_dump()) for t in tasks],
    )
