"""
Domain service: Care scheduling.

Computes when a plant next needs watering or fertilizing from its species
care intervals and its activity history:

    next due = (most recent event on or before today, else creation date)
               + species interval

Due dates are reported as scheduled. A date in the past means the care
action is overdue; it is never moved forward to today.

Everything here is pure. "Today" is always passed in by the caller.
"""
import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from rootly.domain.models import ActivityKind, CareSchedule, Plant, SpeciesProfile

logger = logging.getLogger(__name__)


def last_activity_date(history: Iterable[date], today: date) -> Optional[date]:
    """
    Most recent event date that is not after today.

    Args:
        history: Event dates in any order, duplicates allowed
        today: Reference day; later events are ignored

    Returns:
        The latest eligible date, or None if there is none
    """
    return max((day for day in history if day <= today), default=None)


def next_due_date(
    created_on: date,
    history: Iterable[date],
    interval_days: int,
    today: date,
) -> Optional[date]:
    """
    Compute the next due date of a recurring care action.

    Args:
        created_on: Date the plant was added, used when history is empty
        history: Dates the action was performed, in any order
        interval_days: Days between two actions
        today: Reference day

    Returns:
        The due date, or None if the interval is not a positive number of days
    """
    if interval_days <= 0:
        logger.warning(f"Ignoring non-positive care interval of {interval_days} days")
        return None

    last = last_activity_date(history, today)
    if last is None:
        last = created_on

    return last + timedelta(days=interval_days)


class CareScheduler:
    """
    Domain service computing next due dates for plants.

    Holds no state; one instance can serve any number of concurrent callers.
    """

    def next_due(
        self,
        plant: Plant,
        history: Iterable[date],
        profile: Optional[SpeciesProfile],
        kind: ActivityKind,
        today: date,
    ) -> Optional[date]:
        """
        Next date the plant needs the given care action.

        Args:
            plant: Plant being scheduled
            history: Dates of past actions of this kind for the plant
            profile: Species profile, or None if the species is unknown
            kind: Watering or fertilizing
            today: Reference day

        Returns:
            The due date, or None when it cannot be known
        """
        if profile is None:
            logger.debug(
                f"No profile for plant {plant.id} ('{plant.scientific_name}'), "
                f"{kind.value} schedule unknown"
            )
            return None

        return next_due_date(
            created_on=plant.created_on,
            history=history,
            interval_days=profile.interval_for(kind),
            today=today,
        )

    def schedule(
        self,
        plant: Plant,
        water_history: Iterable[date],
        fertilizer_history: Iterable[date],
        profile: Optional[SpeciesProfile],
        today: date,
    ) -> CareSchedule:
        """
        Build the full care schedule of a plant.

        Args:
            plant: Plant being scheduled
            water_history: Dates the plant was watered
            fertilizer_history: Dates the plant was fertilized
            profile: Species profile, or None if the species is unknown
            today: Reference day for overdue flags and day counts

        Returns:
            CareSchedule with both due dates
        """
        next_water = self.next_due(plant, water_history, profile, ActivityKind.WATER, today)
        next_fertilizer = self.next_due(
            plant, fertilizer_history, profile, ActivityKind.FERTILIZER, today
        )

        return CareSchedule(
            plant_id=plant.id,
            reference_date=today,
            next_water=next_water,
            next_fertilizer=next_fertilizer,
            water_overdue=_is_overdue(next_water, today),
            fertilizer_overdue=_is_overdue(next_fertilizer, today),
            days_until_water=_days_until(next_water, today),
            days_until_fertilizer=_days_until(next_fertilizer, today),
        )


def _is_overdue(due: Optional[date], today: date) -> bool:
    return due is not None and due < today


def _days_until(due: Optional[date], today: date) -> Optional[int]:
    if due is None:
        return None
    return (due - today).days
