"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from rootly.config import settings
from rootly.middleware.error_handler import ErrorHandlerMiddleware
from rootly.api.v1.routers import plants, species, users

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
    enabled=settings.rate_limit_enabled,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Creates the database tables, seeds the species catalog and loads it
    into memory before serving requests.
    """
    from rootly.infrastructure.catalog_loader import load_species_catalog
    from rootly.infrastructure.database import SessionLocal, init_db
    from rootly.infrastructure.plant_repository import PlantRepository
    from rootly.infrastructure.seed_data import INITIAL_SPECIES

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute "
                f"(enabled={settings.rate_limit_enabled})")

    init_db()
    if settings.seed_species_on_startup:
        session = SessionLocal()
        try:
            PlantRepository(session).seed_species(INITIAL_SPECIES)
        finally:
            session.close()
    load_species_catalog()

    yield

    # Shutdown
    from rootly.infrastructure.database import engine
    logger.info("Shutting down application...")
    engine.dispose()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Houseplant Care API

    Keeps track of a user's houseplants and tells when each one needs
    watering or fertilizing.

    ## Features

    - **Species Catalog**: Care intervals, light level and temperature range
      of common houseplants
    - **Care Scheduling**: Next watering and fertilizing dates computed from
      the latest recorded care and the species interval
    - **To-do List**: Every care action due on a given day
    - **Journal**: Dated notes with photo references and height measurements
    - **User Profiles**: Username, location and the number of live plants
    - **Rate Limiting**: Protects the API from abuse

    ## Scheduling Rule

    next due = (most recent watering/fertilizing, or the day the plant was
    added) + species interval in days. Overdue dates are reported as they
    are, never moved to today.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(species.router, prefix="/api/v1")
app.include_router(plants.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
