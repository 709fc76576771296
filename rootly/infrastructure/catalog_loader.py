"""
Infrastructure layer: Loads the species catalog from the database.
"""
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from rootly.infrastructure.database import SessionLocal
from rootly.infrastructure.plant_repository import PlantRepository
from rootly.services.domain.species_catalog import SpeciesCatalog

logger = logging.getLogger(__name__)


# Singleton instance
_species_catalog: Optional[SpeciesCatalog] = None


def load_species_catalog(session_factory: sessionmaker = SessionLocal) -> SpeciesCatalog:
    """
    Build the species catalog from stored profiles and keep it as the singleton.

    Args:
        session_factory: Session factory of the plant database

    Returns:
        SpeciesCatalog instance
    """
    global _species_catalog
    session = session_factory()
    try:
        profiles = PlantRepository(session).list_species_profiles()
    finally:
        session.close()

    _species_catalog = SpeciesCatalog(profiles)
    logger.info(f"Species catalog ready with {len(_species_catalog)} species")
    return _species_catalog


def get_species_catalog() -> SpeciesCatalog:
    """
    Get or load the singleton species catalog.

    Returns:
        SpeciesCatalog instance
    """
    if _species_catalog is None:
        return load_species_catalog()
    return _species_catalog
