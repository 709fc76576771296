"""
Infrastructure layer: Plant data access with retry logic.
"""
import logging
from datetime import date
from typing import Callable, Iterable, List, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from rootly.config import settings
from rootly.domain.exceptions import PlantNotFoundError, UserNotFoundError
from rootly.domain.models import (
    ActivityEvent,
    ActivityKind,
    Plant,
    PlantLog,
    SpeciesProfile,
    User,
)
from rootly.infrastructure.orm import (
    ACTIVITY_TABLES,
    PlantLogRecord,
    PlantRecord,
    SpeciesRecord,
    UserRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RepositoryError(Exception):
    """Custom exception for database failures."""
    pass


def _to_plant(record: PlantRecord) -> Plant:
    return Plant(
        id=record.id,
        user_id=record.user_id,
        name=record.plant_name,
        scientific_name=record.scientific_name,
        created_on=record.birthday,
        is_dead=record.is_dead,
        is_favorite=record.is_favorite,
        img=record.img,
    )


def _to_profile(record: SpeciesRecord) -> SpeciesProfile:
    return SpeciesProfile(
        scientific_name=record.scientific_name,
        water_frequency=record.water_frequency,
        fertilizer_frequency=record.fertilizer_frequency,
        light_level=record.light_level,
        max_temperature=record.max_temperature,
        min_temperature=record.min_temperature,
    )


def _to_log(record: PlantLogRecord) -> PlantLog:
    return PlantLog(
        id=record.id,
        plant_id=record.plant_id,
        user_id=record.user_id,
        logged_on=record.date,
        description=record.description,
        picture=record.picture,
        height=record.height,
    )


class PlantRepository:
    """
    Data access for users, plants, species profiles and care history.

    Transient database errors are retried with exponential backoff.
    """

    def __init__(self, session: Session):
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy session owned by the caller
        """
        self.session = session

    @retry(
        stop=stop_after_attempt(settings.db_retry_attempts),
        wait=wait_exponential(
            min=settings.db_retry_min_wait,
            max=settings.db_retry_max_wait,
        ),
        retry=retry_if_exception_type(OperationalError),
        reraise=True,
    )
    def _execute_with_retry(self, operation: Callable[[Session], T], write: bool) -> T:
        try:
            result = operation(self.session)
            if write:
                self.session.commit()
            return result
        except Exception:
            self.session.rollback()
            raise

    def _execute(self, operation: Callable[[Session], T], write: bool = False) -> T:
        """
        Run a unit of work against the session.

        Args:
            operation: Callable receiving the session
            write: Commit after the operation succeeds

        Returns:
            Whatever the operation returns

        Raises:
            RepositoryError: If the database keeps failing
        """
        try:
            return self._execute_with_retry(operation, write)
        except OperationalError as e:
            logger.error(f"Database unavailable after retries: {e}")
            raise RepositoryError(f"Database operation failed: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise RepositoryError(f"Database error: {e}") from e

    @staticmethod
    def _load_plant(session: Session, plant_id: int) -> PlantRecord:
        record = session.get(PlantRecord, plant_id)
        if record is None:
            raise PlantNotFoundError(plant_id)
        return record

    # Species

    def get_species_profile(self, scientific_name: str) -> Optional[SpeciesProfile]:
        """
        Fetch a species profile by scientific name.

        Returns:
            The profile, or None if the species is unknown
        """
        def operation(session: Session) -> Optional[SpeciesProfile]:
            record = session.get(SpeciesRecord, scientific_name)
            return _to_profile(record) if record is not None else None

        return self._execute(operation)

    def list_species_profiles(self) -> List[SpeciesProfile]:
        def operation(session: Session) -> List[SpeciesProfile]:
            records = session.scalars(
                select(SpeciesRecord).order_by(SpeciesRecord.scientific_name)
            )
            return [_to_profile(r) for r in records]

        return self._execute(operation)

    def seed_species(self, profiles: Iterable[SpeciesProfile]) -> int:
        """
        Insert species that are not stored yet.

        Args:
            profiles: Profiles to insert; repeated names keep the first one

        Returns:
            Number of species inserted
        """
        profiles = list(profiles)

        def operation(session: Session) -> int:
            known = set(session.scalars(select(SpeciesRecord.scientific_name)))
            inserted = 0
            for profile in profiles:
                if profile.scientific_name in known:
                    continue
                session.add(SpeciesRecord(**profile.model_dump()))
                known.add(profile.scientific_name)
                inserted += 1
            return inserted

        inserted = self._execute(operation, write=True)
        logger.info(f"Seeded {inserted} species")
        return inserted

    # Users

    @staticmethod
    def _load_user(session: Session, user_id: int) -> User:
        record = session.get(UserRecord, user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        number_of_plants = session.scalar(
            select(func.count(PlantRecord.id)).where(
                PlantRecord.user_id == user_id,
                PlantRecord.is_dead.is_(False),
            )
        )
        return User(
            id=record.id,
            username=record.username,
            location=record.location,
            profile_img=record.profile_img,
            number_of_plants=number_of_plants or 0,
        )

    @staticmethod
    def _check_username(session: Session, username: str, user_id: Optional[int] = None) -> None:
        query = select(UserRecord.id).where(UserRecord.username == username)
        if user_id is not None:
            query = query.where(UserRecord.id != user_id)
        if session.scalar(query) is not None:
            raise ValueError(f"Username '{username}' is already taken")

    def get_user(self, user_id: int) -> User:
        """
        Fetch a user profile with the number of live plants they own.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        return self._execute(lambda session: self._load_user(session, user_id))

    def add_user(
        self,
        username: str,
        location: Optional[str] = None,
        profile_img: Optional[str] = None,
    ) -> User:
        """
        Create a user profile.

        Raises:
            ValueError: If the username is taken
        """
        def operation(session: Session) -> User:
            self._check_username(session, username)
            record = UserRecord(username=username, location=location, profile_img=profile_img)
            session.add(record)
            session.flush()
            return self._load_user(session, record.id)

        user = self._execute(operation, write=True)
        logger.info(f"Added user {user.id} ('{user.username}')")
        return user

    def update_user(
        self,
        user_id: int,
        username: Optional[str] = None,
        location: Optional[str] = None,
        profile_img: Optional[str] = None,
    ) -> User:
        """
        Edit a user profile. None leaves a field unchanged.

        Raises:
            UserNotFoundError: If the user does not exist
            ValueError: If the new username belongs to another user
        """
        def operation(session: Session) -> User:
            record = session.get(UserRecord, user_id)
            if record is None:
                raise UserNotFoundError(user_id)
            if username is not None:
                self._check_username(session, username, user_id)
                record.username = username
            if location is not None:
                record.location = location
            if profile_img is not None:
                record.profile_img = profile_img
            session.flush()
            return self._load_user(session, user_id)

        return self._execute(operation, write=True)

    # Plants

    def get_plant(self, plant_id: int) -> Plant:
        """
        Fetch a plant.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        return self._execute(lambda session: _to_plant(self._load_plant(session, plant_id)))

    def list_plants(
        self,
        user_id: int,
        favorites_only: bool = False,
        include_dead: bool = False,
    ) -> List[Plant]:
        """
        List a user's plants ordered by id.

        Args:
            user_id: Owner of the plants
            favorites_only: Only return favorite plants
            include_dead: Also return plants marked as dead
        """
        def operation(session: Session) -> List[Plant]:
            query = select(PlantRecord).where(PlantRecord.user_id == user_id)
            if favorites_only:
                query = query.where(PlantRecord.is_favorite.is_(True))
            if not include_dead:
                query = query.where(PlantRecord.is_dead.is_(False))
            return [_to_plant(r) for r in session.scalars(query.order_by(PlantRecord.id))]

        return self._execute(operation)

    def add_plant(
        self,
        user_id: int,
        name: str,
        scientific_name: str,
        created_on: date,
        img: Optional[str] = None,
        is_favorite: bool = False,
    ) -> Plant:
        def operation(session: Session) -> Plant:
            record = PlantRecord(
                user_id=user_id,
                plant_name=name,
                scientific_name=scientific_name,
                birthday=created_on,
                is_dead=False,
                is_favorite=is_favorite,
                img=img,
            )
            session.add(record)
            session.flush()
            return _to_plant(record)

        plant = self._execute(operation, write=True)
        logger.info(f"Added plant {plant.id} ('{plant.name}') for user {user_id}")
        return plant

    def _update_plant(self, plant_id: int, **changes) -> Plant:
        def operation(session: Session) -> Plant:
            record = self._load_plant(session, plant_id)
            for column, value in changes.items():
                setattr(record, column, value)
            session.flush()
            return _to_plant(record)

        return self._execute(operation, write=True)

    def update_plant(
        self,
        plant_id: int,
        name: Optional[str] = None,
        is_favorite: Optional[bool] = None,
        is_dead: Optional[bool] = None,
    ) -> Plant:
        """
        Apply several edits in a single transaction. None leaves a field unchanged.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        changes = {}
        if name is not None:
            changes["plant_name"] = name
        if is_favorite is not None:
            changes["is_favorite"] = is_favorite
        if is_dead is not None:
            changes["is_dead"] = is_dead

        if not changes:
            return self.get_plant(plant_id)
        return self._update_plant(plant_id, **changes)

    def rename_plant(self, plant_id: int, name: str) -> Plant:
        return self._update_plant(plant_id, plant_name=name)

    def set_favorite(self, plant_id: int, is_favorite: bool) -> Plant:
        return self._update_plant(plant_id, is_favorite=is_favorite)

    def mark_dead(self, plant_id: int) -> Plant:
        logger.info(f"Marking plant {plant_id} as dead")
        return self._update_plant(plant_id, is_dead=True)

    def delete_plant(self, plant_id: int) -> None:
        """
        Delete a plant together with its care history and logs.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        def operation(session: Session) -> None:
            session.delete(self._load_plant(session, plant_id))

        self._execute(operation, write=True)
        logger.info(f"Deleted plant {plant_id}")

    # Care activity

    def get_activity_history(self, plant_id: int, kind: ActivityKind) -> List[date]:
        """
        Dates a care action was performed on a plant, in no particular order.
        """
        table = ACTIVITY_TABLES[kind]

        def operation(session: Session) -> List[date]:
            return list(session.scalars(select(table.date).where(table.plant_id == plant_id)))

        return self._execute(operation)

    def record_activity(self, plant_id: int, kind: ActivityKind, on: date) -> ActivityEvent:
        """
        Record that a care action was performed.

        Recording the same action twice on one day is a no-op.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        table = ACTIVITY_TABLES[kind]

        def operation(session: Session) -> ActivityEvent:
            plant = self._load_plant(session, plant_id)
            if session.get(table, (plant_id, on)) is None:
                session.add(table(plant_id=plant_id, date=on, user_id=plant.user_id))
            return ActivityEvent(
                plant_id=plant_id,
                user_id=plant.user_id,
                kind=kind,
                performed_on=on,
            )

        return self._execute(operation, write=True)

    # Journal

    def add_log(
        self,
        plant_id: int,
        logged_on: date,
        description: str,
        picture: Optional[str] = None,
        height: Optional[float] = None,
    ) -> PlantLog:
        def operation(session: Session) -> PlantLog:
            plant = self._load_plant(session, plant_id)
            record = PlantLogRecord(
                plant_id=plant_id,
                user_id=plant.user_id,
                date=logged_on,
                description=description,
                picture=picture,
                height=height,
            )
            session.add(record)
            session.flush()
            return _to_log(record)

        return self._execute(operation, write=True)

    def list_logs(self, plant_id: int) -> List[PlantLog]:
        """Journal entries of a plant, newest first."""
        def operation(session: Session) -> List[PlantLog]:
            self._load_plant(session, plant_id)
            records = session.scalars(
                select(PlantLogRecord)
                .where(PlantLogRecord.plant_id == plant_id)
                .order_by(PlantLogRecord.date.desc(), PlantLogRecord.id.desc())
            )
            return [_to_log(r) for r in records]

        return self._execute(operation)
