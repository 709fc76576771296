"""
API router for the species catalog.
"""
from fastapi import APIRouter, HTTPException, Path
from typing import Annotated

from rootly.api.dependencies import SpeciesCatalogDep
from rootly.api.v1.models.responses import (
    IdealConditionsResponse,
    SpeciesListResponse,
    SpeciesResponse,
)
from rootly.domain.models import SpeciesProfile
from rootly.services.domain.species_catalog import ideal_conditions


router = APIRouter(
    prefix="/species",
    tags=["species"],
)


def _to_response(profile: SpeciesProfile) -> SpeciesResponse:
    return SpeciesResponse(
        scientific_name=profile.scientific_name,
        water_frequency=profile.water_frequency,
        fertilizer_frequency=profile.fertilizer_frequency,
        light_level=profile.light_level,
        conditions=IdealConditionsResponse(**ideal_conditions(profile).model_dump()),
    )


@router.get(
    "",
    response_model=SpeciesListResponse,
    summary="List species",
)
async def list_species(catalog: SpeciesCatalogDep) -> SpeciesListResponse:
    """List every species in the catalog, sorted by scientific name."""
    results = [_to_response(p) for p in catalog.profiles()]
    return SpeciesListResponse(count=len(results), results=results)


@router.get(
    "/{scientific_name}",
    response_model=SpeciesResponse,
    summary="Get a species profile",
    responses={
        404: {
            "description": "Species not found",
        },
    }
)
async def get_species(
    scientific_name: Annotated[str, Path(description="Scientific name of the species")],
    catalog: SpeciesCatalogDep,
) -> SpeciesResponse:
    """
    Get the care profile and ideal conditions of a species.

    Raises:
        HTTPException: If the species is not in the catalog
    """
    profile = catalog.lookup(scientific_name)
    if profile is None:
        raise HTTPException(
            status_code=404,
            detail=f"Species '{scientific_name}' not found"
        )
    return _to_response(profile)
