"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- In-memory plant database
- Species catalog
- Demo user and plants with watering, fertilizing and journal history
- Plant care service with a fixed clock
- FastAPI test client
"""
import os

# Configure the application before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DB_RETRY_MIN_WAIT", "0")
os.environ.setdefault("DB_RETRY_MAX_WAIT", "0")

import pytest
from datetime import date
from typing import Iterator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from rootly.main import app
from rootly.api.dependencies import get_clock
from rootly.domain.models import ActivityKind, Plant, SpeciesProfile, User
from rootly.infrastructure.catalog_loader import get_species_catalog
from rootly.infrastructure.database import (
    create_db_engine,
    create_session_factory,
    get_session,
    init_db,
)
from rootly.infrastructure.plant_repository import PlantRepository
from rootly.infrastructure.seed_data import INITIAL_SPECIES
from rootly.services.application.plant_care_service import PlantCareService
from rootly.services.domain.care_scheduler import CareScheduler
from rootly.services.domain.species_catalog import SpeciesCatalog


# Every demo event lies before this day
TODAY = date(2022, 2, 1)


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def pothos() -> SpeciesProfile:
    """A species watered every 2 days and fertilized every day."""
    return SpeciesProfile(
        scientific_name="Pothos",
        water_frequency=2,
        fertilizer_frequency=1,
        light_level=3,
        max_temperature=25.0,
        min_temperature=15.0,
    )


@pytest.fixture
def sample_plant() -> Plant:
    """A live plant added on 2022-01-01."""
    return Plant(
        id=1,
        user_id=1,
        name="Kitchen pothos",
        scientific_name="Pothos",
        created_on=date(2022, 1, 1),
    )


@pytest.fixture
def catalog() -> SpeciesCatalog:
    """Catalog built from the built-in species list."""
    return SpeciesCatalog(INITIAL_SPECIES)


# ============================================================
# Database Fixtures
# ============================================================

@pytest.fixture
def db_engine():
    """Fresh in-memory database with all tables."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def db_session(session_factory) -> Iterator[Session]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session) -> PlantRepository:
    """Repository over a database seeded with the species catalog."""
    repo = PlantRepository(db_session)
    repo.seed_species(INITIAL_SPECIES)
    return repo


@pytest.fixture
def demo_user(repository) -> User:
    """Profile of user 1, the owner of the demo plants."""
    return repository.add_user(
        username="user1",
        location="Location 1",
        profile_img="path_to_profile_image",
    )


@pytest.fixture
def demo_plants(repository) -> list[Plant]:
    """
    Ten plants of user 1, all added on 2022-01-01.

    Even plants are Spider Plants (water and fertilize every 2 days),
    odd plants are Snake Plants (water every 3 days, fertilize every day).
    Plant i was watered on 2022-01-(i+5), fertilized on 2022-01-(i+15)
    and logged on 2022-01-(i+10).
    """
    plants = []
    for i in range(1, 11):
        species = "Spider Plant" if i % 2 == 0 else "Snake Plant"
        plant = repository.add_plant(
            user_id=1,
            name=f"Plant {i}",
            scientific_name=species,
            created_on=date(2022, 1, 1),
        )
        repository.record_activity(plant.id, ActivityKind.WATER, date(2022, 1, i + 5))
        repository.record_activity(plant.id, ActivityKind.FERTILIZER, date(2022, 1, i + 15))
        repository.add_log(
            plant.id,
            logged_on=date(2022, 1, i + 10),
            description=f"Log for Plant {i}",
            picture=f"path_to_picture_{i}",
            height=15.0,
        )
        plants.append(plant)
    return plants


# ============================================================
# Service Fixtures
# ============================================================

@pytest.fixture
def service(repository, catalog) -> PlantCareService:
    """Plant care service whose clock is frozen on TODAY."""
    return PlantCareService(
        repository=repository,
        catalog=catalog,
        scheduler=CareScheduler(),
        clock=lambda: TODAY,
        schedule_dead_plants=False,
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(session_factory, repository, catalog) -> Iterator[TestClient]:
    """Test client wired to the in-memory database and a frozen clock."""
    def override_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_species_catalog] = lambda: catalog
    app.dependency_overrides[get_clock] = lambda: (lambda: TODAY)

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
