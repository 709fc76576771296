"""
Dependency injection for FastAPI.
"""
from datetime import date
from typing import Annotated, Callable
from fastapi import Depends
from sqlalchemy.orm import Session

from rootly.infrastructure.catalog_loader import get_species_catalog
from rootly.infrastructure.database import get_session
from rootly.infrastructure.plant_repository import PlantRepository
from rootly.services.application.plant_care_service import PlantCareService
from rootly.services.domain.care_scheduler import CareScheduler
from rootly.services.domain.species_catalog import SpeciesCatalog


def get_plant_repository(
    session: Annotated[Session, Depends(get_session)],
) -> PlantRepository:
    """
    Dependency factory for PlantRepository.

    Args:
        session: Database session (injected)

    Returns:
        PlantRepository instance
    """
    return PlantRepository(session)


def get_care_scheduler() -> CareScheduler:
    return CareScheduler()


def get_clock() -> Callable[[], date]:
    """Source of the current day; overridden in tests."""
    return date.today


def get_plant_care_service(
    repository: Annotated[PlantRepository, Depends(get_plant_repository)],
    catalog: Annotated[SpeciesCatalog, Depends(get_species_catalog)],
    scheduler: Annotated[CareScheduler, Depends(get_care_scheduler)],
    clock: Annotated[Callable[[], date], Depends(get_clock)],
) -> PlantCareService:
    """
    Dependency factory for PlantCareService.

    Args:
        repository: Plant data access (injected)
        catalog: Species catalog (injected)
        scheduler: Care scheduler (injected)
        clock: Current day source (injected)

    Returns:
        PlantCareService instance
    """
    return PlantCareService(
        repository=repository,
        catalog=catalog,
        scheduler=scheduler,
        clock=clock,
    )


# Type aliases for cleaner route signatures
PlantCareServiceDep = Annotated[PlantCareService, Depends(get_plant_care_service)]
SpeciesCatalogDep = Annotated[SpeciesCatalog, Depends(get_species_catalog)]
