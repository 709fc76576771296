"""
API router for plant endpoints.

Database work runs in the threadpool so the event loop never blocks on I/O.
"""
from enum import Enum
from fastapi import APIRouter, HTTPException, Path, Response
from fastapi.concurrency import run_in_threadpool
from typing import Annotated, List, Optional

from rootly.api.dependencies import PlantCareServiceDep
from rootly.api.v1.models.requests import (
    ActivityCreateRequest,
    PlantCreateRequest,
    PlantLogCreateRequest,
    PlantUpdateRequest,
)
from rootly.api.v1.models.responses import (
    ActivityHistoryResponse,
    ActivityResponse,
    IdealConditionsResponse,
    PlantDetailsResponse,
    PlantLogResponse,
    PlantResponse,
    ScheduleResponse,
)
from rootly.domain.exceptions import NotFoundError
from rootly.domain.models import ActivityKind


router = APIRouter(
    prefix="/plants",
    tags=["plants"],
)

PlantId = Annotated[int, Path(description="Unique identifier for the plant")]

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Plant or species not found",
    },
}


class ActivityPath(str, Enum):
    """URL segments of the care activity collections."""
    WATERINGS = "waterings"
    FERTILIZATIONS = "fertilizations"

    @property
    def kind(self) -> ActivityKind:
        if self is ActivityPath.WATERINGS:
            return ActivityKind.WATER
        return ActivityKind.FERTILIZER


def _not_found(error: NotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(error))


@router.post(
    "",
    response_model=PlantResponse,
    status_code=201,
    summary="Add a plant",
    responses=NOT_FOUND_RESPONSE,
)
async def create_plant(
    request: PlantCreateRequest,
    service: PlantCareServiceDep,
) -> PlantResponse:
    """
    Add a plant of a species from the catalog.

    Raises:
        HTTPException: If the species is unknown
    """
    try:
        plant = await run_in_threadpool(
            service.add_plant,
            user_id=request.user_id,
            name=request.name,
            scientific_name=request.scientific_name,
            created_on=request.created_on,
            img=request.img,
        )
    except NotFoundError as e:
        raise _not_found(e)

    return PlantResponse(**plant.model_dump())


@router.get(
    "/{plant_id}",
    response_model=PlantDetailsResponse,
    summary="Get plant details",
    description="""
    Return a plant with its ideal conditions and next care dates.

    The next watering (fertilizing) date is the most recent watering
    (fertilizing) plus the species interval, or the date the plant was added
    plus the interval when it was never watered (fertilized). Dates in the
    past mean the action is overdue. Null dates mean the species is unknown.
    """,
    responses=NOT_FOUND_RESPONSE,
)
async def get_plant(
    plant_id: PlantId,
    service: PlantCareServiceDep,
) -> PlantDetailsResponse:
    """
    Get plant details.

    Args:
        plant_id: Unique identifier for the plant
        service: Plant care service (injected dependency)

    Returns:
        PlantDetailsResponse with conditions and schedule

    Raises:
        HTTPException: If the plant is not found
    """
    try:
        details = await run_in_threadpool(service.get_plant_details, plant_id)
    except NotFoundError as e:
        raise _not_found(e)

    return PlantDetailsResponse(
        plant=PlantResponse(**details.plant.model_dump()),
        conditions=IdealConditionsResponse(**details.conditions.model_dump()),
        schedule=ScheduleResponse(**details.schedule.model_dump()),
    )


@router.patch(
    "/{plant_id}",
    response_model=PlantResponse,
    summary="Edit a plant",
    responses=NOT_FOUND_RESPONSE,
)
async def update_plant(
    plant_id: PlantId,
    request: PlantUpdateRequest,
    service: PlantCareServiceDep,
) -> PlantResponse:
    """Rename a plant, toggle its favorite flag or mark it as dead."""
    try:
        plant = await run_in_threadpool(
            service.update_plant,
            plant_id,
            name=request.name,
            is_favorite=request.is_favorite,
            is_dead=request.is_dead,
        )
    except NotFoundError as e:
        raise _not_found(e)

    return PlantResponse(**plant.model_dump())


@router.delete(
    "/{plant_id}",
    status_code=204,
    summary="Delete a plant",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_plant(
    plant_id: PlantId,
    service: PlantCareServiceDep,
) -> Response:
    """Delete a plant with its care history and journal."""
    try:
        await run_in_threadpool(service.delete_plant, plant_id)
    except NotFoundError as e:
        raise _not_found(e)

    return Response(status_code=204)


@router.get(
    "/{plant_id}/schedule",
    response_model=ScheduleResponse,
    summary="Get next care dates",
    responses=NOT_FOUND_RESPONSE,
)
async def get_schedule(
    plant_id: PlantId,
    service: PlantCareServiceDep,
) -> ScheduleResponse:
    """Next watering and fertilizing dates of a plant."""
    try:
        schedule = await run_in_threadpool(service.get_schedule, plant_id)
    except NotFoundError as e:
        raise _not_found(e)

    return ScheduleResponse(**schedule.model_dump())


@router.get(
    "/{plant_id}/logs",
    response_model=List[PlantLogResponse],
    summary="Get journal entries",
    responses=NOT_FOUND_RESPONSE,
)
async def list_logs(
    plant_id: PlantId,
    service: PlantCareServiceDep,
) -> List[PlantLogResponse]:
    """Journal entries of the plant, newest first."""
    try:
        logs = await run_in_threadpool(service.list_logs, plant_id)
    except NotFoundError as e:
        raise _not_found(e)

    return [PlantLogResponse(**log.model_dump()) for log in logs]


@router.post(
    "/{plant_id}/logs",
    response_model=PlantLogResponse,
    status_code=201,
    summary="Add a journal entry",
    responses=NOT_FOUND_RESPONSE,
)
async def add_log(
    plant_id: PlantId,
    request: PlantLogCreateRequest,
    service: PlantCareServiceDep,
) -> PlantLogResponse:
    """Add a journal entry with an optional photo reference and height."""
    try:
        log = await run_in_threadpool(
            service.add_log,
            plant_id,
            description=request.description,
            logged_on=request.logged_on,
            picture=request.picture,
            height=request.height,
        )
    except NotFoundError as e:
        raise _not_found(e)

    return PlantLogResponse(**log.model_dump())


@router.get(
    "/{plant_id}/{activity}",
    response_model=ActivityHistoryResponse,
    summary="Get care history",
    responses=NOT_FOUND_RESPONSE,
)
async def get_activity_history(
    plant_id: PlantId,
    activity: ActivityPath,
    service: PlantCareServiceDep,
) -> ActivityHistoryResponse:
    """Dates the plant was watered or fertilized, newest first."""
    try:
        dates = await run_in_threadpool(service.get_history, plant_id, activity.kind)
    except NotFoundError as e:
        raise _not_found(e)

    return ActivityHistoryResponse(plant_id=plant_id, kind=activity.kind, dates=dates)


@router.post(
    "/{plant_id}/{activity}",
    response_model=ActivityResponse,
    status_code=201,
    summary="Record a watering or fertilizing",
    responses=NOT_FOUND_RESPONSE,
)
async def record_activity(
    plant_id: PlantId,
    activity: ActivityPath,
    service: PlantCareServiceDep,
    request: Optional[ActivityCreateRequest] = None,
) -> ActivityResponse:
    """
    Record that the plant was watered or fertilized.

    The body is optional; without a date the action is recorded for today.
    Recording the same action twice on one day has no further effect.
    """
    performed_on = request.performed_on if request is not None else None
    try:
        event = await run_in_threadpool(
            service.record_activity, plant_id, activity.kind, performed_on
        )
    except NotFoundError as e:
        raise _not_found(e)

    return ActivityResponse(
        plant_id=event.plant_id,
        kind=event.kind,
        performed_on=event.performed_on,
    )
