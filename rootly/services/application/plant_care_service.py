"""
Application service: Orchestration layer for plant care operations.
"""
import logging
from datetime import date
from typing import Callable, List, Optional

from rootly.config import settings
from rootly.domain.models import (
    ActivityEvent,
    ActivityKind,
    CareSchedule,
    CareTask,
    Plant,
    PlantDetails,
    PlantLog,
    User,
)
from rootly.infrastructure.plant_repository import PlantRepository
from rootly.services.domain.care_scheduler import CareScheduler
from rootly.services.domain.species_catalog import SpeciesCatalog, ideal_conditions

logger = logging.getLogger(__name__)


class PlantCareService:
    """
    Application service for plant care operations.

    Orchestrates data fetching and business logic execution.
    Follows the application layer pattern - no business logic here,
    only coordination between infrastructure and domain layers.
    """

    def __init__(
        self,
        repository: PlantRepository,
        catalog: SpeciesCatalog,
        scheduler: CareScheduler,
        clock: Callable[[], date] = date.today,
        schedule_dead_plants: Optional[bool] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            repository: Data access for plants and care history
            catalog: Species catalog for profile lookups
            scheduler: Care scheduler computing due dates
            clock: Returns the current day
            schedule_dead_plants: Report due dates for dead plants
                (defaults to the application setting)
        """
        self.repository = repository
        self.catalog = catalog
        self.scheduler = scheduler
        self.clock = clock
        if schedule_dead_plants is None:
            schedule_dead_plants = settings.schedule_dead_plants
        self.schedule_dead_plants = schedule_dead_plants

    def _schedule_for(self, plant: Plant, today: date) -> CareSchedule:
        if plant.is_dead and not self.schedule_dead_plants:
            return CareSchedule(plant_id=plant.id, reference_date=today)

        profile = self.catalog.lookup(plant.scientific_name)
        if profile is None:
            logger.warning(
                f"Plant {plant.id} references unknown species '{plant.scientific_name}'"
            )

        return self.scheduler.schedule(
            plant=plant,
            water_history=self.repository.get_activity_history(plant.id, ActivityKind.WATER),
            fertilizer_history=self.repository.get_activity_history(
                plant.id, ActivityKind.FERTILIZER
            ),
            profile=profile,
            today=today,
        )

    def get_schedule(self, plant_id: int) -> CareSchedule:
        """
        Get the next watering and fertilizing dates of a plant.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        plant = self.repository.get_plant(plant_id)
        return self._schedule_for(plant, self.clock())

    def get_plant_details(self, plant_id: int) -> PlantDetails:
        """
        Get a plant with its ideal conditions and care schedule.

        This method orchestrates:
        1. Fetching the plant
        2. Looking up its species profile
        3. Fetching care history and computing due dates

        Args:
            plant_id: Unique identifier for the plant

        Returns:
            PlantDetails for rendering

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        plant = self.repository.get_plant(plant_id)
        profile = self.catalog.lookup(plant.scientific_name)

        return PlantDetails(
            plant=plant,
            species=profile,
            conditions=ideal_conditions(profile),
            schedule=self._schedule_for(plant, self.clock()),
        )

    def due_tasks(self, user_id: int, on: Optional[date] = None) -> List[CareTask]:
        """
        Care actions of a user's live plants due on or before a day.

        Args:
            user_id: Owner of the plants
            on: Day to check, defaults to today

        Returns:
            Tasks sorted by due date, then plant id
        """
        on = on or self.clock()
        tasks = []

        for plant in self.repository.list_plants(user_id):
            schedule = self._schedule_for(plant, on)
            for kind, due in (
                (ActivityKind.WATER, schedule.next_water),
                (ActivityKind.FERTILIZER, schedule.next_fertilizer),
            ):
                if due is not None and due <= on:
                    tasks.append(CareTask(
                        plant_id=plant.id,
                        plant_name=plant.name,
                        kind=kind,
                        due_on=due,
                        overdue=due < on,
                    ))

        tasks.sort(key=lambda t: (t.due_on, t.plant_id, t.kind.value))
        logger.debug(f"User {user_id} has {len(tasks)} care tasks due by {on}")
        return tasks

    def list_plants(
        self,
        user_id: int,
        favorites_only: bool = False,
        include_dead: bool = False,
    ) -> List[Plant]:
        return self.repository.list_plants(
            user_id, favorites_only=favorites_only, include_dead=include_dead
        )

    def add_plant(
        self,
        user_id: int,
        name: str,
        scientific_name: str,
        created_on: Optional[date] = None,
        img: Optional[str] = None,
    ) -> Plant:
        """
        Add a plant of a known species.

        Raises:
            SpeciesNotFoundError: If the species is not in the catalog
        """
        self.catalog.require(scientific_name)
        return self.repository.add_plant(
            user_id=user_id,
            name=name,
            scientific_name=scientific_name,
            created_on=created_on or self.clock(),
            img=img,
        )

    def update_plant(
        self,
        plant_id: int,
        name: Optional[str] = None,
        is_favorite: Optional[bool] = None,
        is_dead: Optional[bool] = None,
    ) -> Plant:
        """
        Apply user edits to a plant. Fields left as None are unchanged.

        Raises:
            PlantNotFoundError: If the plant does not exist
            ValueError: On an attempt to revive a dead plant
        """
        plant = self.repository.get_plant(plant_id)

        if is_dead is False and plant.is_dead:
            raise ValueError(f"Plant {plant_id} is dead and cannot be revived")
        if is_dead and not plant.is_dead:
            logger.info(f"Marking plant {plant_id} as dead")

        return self.repository.update_plant(
            plant_id, name=name, is_favorite=is_favorite, is_dead=is_dead
        )

    def delete_plant(self, plant_id: int) -> None:
        self.repository.delete_plant(plant_id)

    def get_history(self, plant_id: int, kind: ActivityKind) -> List[date]:
        """
        Dates a care action was performed, newest first.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        self.repository.get_plant(plant_id)
        return sorted(
            set(self.repository.get_activity_history(plant_id, kind)), reverse=True
        )

    def record_activity(
        self,
        plant_id: int,
        kind: ActivityKind,
        on: Optional[date] = None,
    ) -> ActivityEvent:
        """
        Record a watering or fertilizing, today by default.

        Raises:
            PlantNotFoundError: If the plant does not exist
            ValueError: If the date lies in the future
        """
        self.repository.get_plant(plant_id)
        today = self.clock()
        on = on or today
        if on > today:
            raise ValueError(f"Cannot record {kind.value} on future date {on}")
        return self.repository.record_activity(plant_id, kind, on)

    def add_log(
        self,
        plant_id: int,
        description: str,
        logged_on: Optional[date] = None,
        picture: Optional[str] = None,
        height: Optional[float] = None,
    ) -> PlantLog:
        return self.repository.add_log(
            plant_id=plant_id,
            logged_on=logged_on or self.clock(),
            description=description,
            picture=picture,
            height=height,
        )

    def list_logs(self, plant_id: int) -> List[PlantLog]:
        return self.repository.list_logs(plant_id)

    # Users

    def get_user(self, user_id: int) -> User:
        """
        Get a user profile with the number of live plants.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        return self.repository.get_user(user_id)

    def add_user(
        self,
        username: str,
        location: Optional[str] = None,
        profile_img: Optional[str] = None,
    ) -> User:
        return self.repository.add_user(
            username=username, location=location, profile_img=profile_img
        )

    def update_user(
        self,
        user_id: int,
        username: Optional[str] = None,
        location: Optional[str] = None,
        profile_img: Optional[str] = None,
    ) -> User:
        """
        Apply profile edits. Fields left as None are unchanged.

        Raises:
            UserNotFoundError: If the user does not exist
            ValueError: If the username belongs to another user
        """
        return self.repository.update_user(
            user_id, username=username, location=location, profile_img=profile_img
        )
