"""
Unit tests for care scheduling.

Tests cover:
- Due dates from creation date and from history
- Order independence and duplicate dates
- Events after the reference day
- Unknown species and invalid intervals
- Full schedules with overdue flags
"""
import asyncio
import itertools
import pytest
from datetime import date

from rootly.domain.models import ActivityKind, Plant, SpeciesProfile
from rootly.services.domain.care_scheduler import (
    CareScheduler,
    last_activity_date,
    next_due_date,
)


# ============================================================
# Pure Due Date Tests
# ============================================================

class TestNextDueDate:
    """Tests for the next_due_date function."""

    def test_uses_last_event(self):
        """Interval 2, last watered 2022-01-01 -> due 2022-01-03."""
        due = next_due_date(
            created_on=date(2021, 12, 1),
            history=[date(2022, 1, 1)],
            interval_days=2,
            today=date(2022, 1, 10),
        )

        assert due == date(2022, 1, 3)

    def test_empty_history_uses_creation_date(self):
        """Interval 4, never watered, created 2022-01-01 -> due 2022-01-05."""
        due = next_due_date(
            created_on=date(2022, 1, 1),
            history=[],
            interval_days=4,
            today=date(2022, 1, 2),
        )

        assert due == date(2022, 1, 5)

    def test_unsorted_history_uses_maximum(self):
        """Unsorted history should be reduced to its latest date."""
        history = [date(2022, 1, 3), date(2022, 1, 1), date(2022, 1, 2)]

        due = next_due_date(date(2021, 12, 1), history, 1, today=date(2022, 1, 10))

        assert due == date(2022, 1, 4)

    def test_every_ordering_gives_same_result(self):
        """The result should not depend on history order."""
        history = [date(2022, 1, 5), date(2022, 1, 1), date(2022, 1, 9), date(2022, 1, 2)]

        results = {
            next_due_date(date(2022, 1, 1), list(order), 3, today=date(2022, 2, 1))
            for order in itertools.permutations(history)
        }

        assert results == {date(2022, 1, 12)}

    def test_duplicate_dates(self):
        """Two events on the same day count as one."""
        history = [date(2022, 1, 2), date(2022, 1, 2)]

        due = next_due_date(date(2022, 1, 1), history, 2, today=date(2022, 1, 10))

        assert due == date(2022, 1, 4)

    def test_accepts_generators(self):
        """History may be any iterable."""
        history = (date(2022, 1, d) for d in (4, 2))

        due = next_due_date(date(2022, 1, 1), history, 2, today=date(2022, 1, 10))

        assert due == date(2022, 1, 6)

    def test_past_due_date_is_not_moved(self):
        """Overdue dates are reported as scheduled, not clamped to today."""
        due = next_due_date(
            created_on=date(2022, 1, 1),
            history=[date(2022, 1, 2)],
            interval_days=2,
            today=date(2022, 3, 1),
        )

        assert due == date(2022, 1, 4)

    def test_future_events_are_ignored(self):
        """Events after the reference day must not be considered."""
        history = [date(2022, 1, 2), date(2022, 1, 20)]

        due = next_due_date(date(2022, 1, 1), history, 2, today=date(2022, 1, 10))

        assert due == date(2022, 1, 4)

    def test_only_future_events_falls_back_to_creation(self):
        due = next_due_date(
            date(2022, 1, 1), [date(2022, 1, 20)], 2, today=date(2022, 1, 10)
        )

        assert due == date(2022, 1, 3)

    def test_event_on_reference_day_counts(self):
        due = next_due_date(
            date(2022, 1, 1), [date(2022, 1, 10)], 2, today=date(2022, 1, 10)
        )

        assert due == date(2022, 1, 12)

    def test_crosses_month_and_year(self):
        due = next_due_date(
            date(2021, 12, 1), [date(2021, 12, 30)], 4, today=date(2022, 1, 1)
        )

        assert due == date(2022, 1, 3)

    @pytest.mark.parametrize("interval", [0, -1, -30])
    def test_non_positive_interval_is_unknown(self, interval):
        """Invalid intervals yield None instead of a guessed date."""
        due = next_due_date(
            date(2022, 1, 1), [date(2022, 1, 2)], interval, today=date(2022, 1, 10)
        )

        assert due is None

    def test_idempotent(self):
        """Same inputs, same output."""
        args = (date(2022, 1, 1), [date(2022, 1, 3), date(2022, 1, 2)], 3, date(2022, 1, 10))

        assert next_due_date(*args) == next_due_date(*args)

    def test_last_activity_date_empty(self):
        assert last_activity_date([], today=date(2022, 1, 1)) is None


# ============================================================
# Care Scheduler Tests
# ============================================================

class TestCareScheduler:
    """Tests for the CareScheduler domain service."""

    def test_water_interval(self, sample_plant, pothos):
        scheduler = CareScheduler()

        due = scheduler.next_due(
            sample_plant, [date(2022, 1, 1)], pothos, ActivityKind.WATER, today=date(2022, 1, 2)
        )

        assert due == date(2022, 1, 3)

    def test_fertilizer_interval(self, sample_plant, pothos):
        scheduler = CareScheduler()

        due = scheduler.next_due(
            sample_plant, [], pothos, ActivityKind.FERTILIZER, today=date(2022, 1, 2)
        )

        assert due == date(2022, 1, 2)

    def test_unknown_species_is_unknown(self, sample_plant):
        """A missing profile yields None, not an exception or a default."""
        scheduler = CareScheduler()

        due = scheduler.next_due(
            sample_plant, [date(2022, 1, 1)], None, ActivityKind.WATER, today=date(2022, 1, 2)
        )

        assert due is None

    def test_schedule(self, sample_plant, pothos):
        scheduler = CareScheduler()

        schedule = scheduler.schedule(
            plant=sample_plant,
            water_history=[date(2022, 1, 3)],
            fertilizer_history=[date(2022, 1, 1)],
            profile=pothos,
            today=date(2022, 1, 4),
        )

        assert schedule.plant_id == sample_plant.id
        assert schedule.reference_date == date(2022, 1, 4)
        assert schedule.next_water == date(2022, 1, 5)
        assert schedule.next_fertilizer == date(2022, 1, 2)
        assert schedule.water_overdue is False
        assert schedule.fertilizer_overdue is True
        assert schedule.days_until_water == 1
        assert schedule.days_until_fertilizer == -2

    def test_due_today_is_not_overdue(self, sample_plant, pothos):
        schedule = CareScheduler().schedule(
            sample_plant, [date(2022, 1, 2)], [], pothos, today=date(2022, 1, 4)
        )

        assert schedule.next_water == date(2022, 1, 4)
        assert schedule.water_overdue is False
        assert schedule.days_until_water == 0

    def test_schedule_unknown_species(self, sample_plant):
        schedule = CareScheduler().schedule(
            sample_plant, [date(2022, 1, 2)], [], None, today=date(2022, 1, 4)
        )

        assert schedule.next_water is None
        assert schedule.next_fertilizer is None
        assert schedule.water_overdue is False
        assert schedule.days_until_water is None

    def test_invalid_interval_in_profile(self, sample_plant):
        broken = SpeciesProfile(
            scientific_name="Pothos",
            water_frequency=0,
            fertilizer_frequency=7,
            light_level=3,
            max_temperature=25.0,
            min_temperature=15.0,
        )

        schedule = CareScheduler().schedule(
            sample_plant, [], [], broken, today=date(2022, 1, 4)
        )

        assert schedule.next_water is None
        assert schedule.next_fertilizer == date(2022, 1, 8)

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_no_state(self, pothos):
        """One scheduler instance can serve concurrent callers."""
        scheduler = CareScheduler()
        plants = [
            Plant(id=i, user_id=1, name=f"Plant {i}", scientific_name="Pothos",
                  created_on=date(2022, 1, i))
            for i in range(1, 21)
        ]

        results = await asyncio.gather(*[
            asyncio.to_thread(
                scheduler.next_due, plant, [], pothos, ActivityKind.WATER, date(2022, 2, 1)
            )
            for plant in plants
        ])

        assert results == [date(2022, 1, i + 2) for i in range(1, 21)]
