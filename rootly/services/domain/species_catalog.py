"""
Domain service: Species catalog and ideal-condition lookups.

The catalog is static reference data built once from a sequence of species
profiles. It never changes after construction, so a single instance can be
shared freely between requests and threads.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from rootly.domain.exceptions import InvalidProfileError, SpeciesNotFoundError
from rootly.domain.models import IdealConditions, LightCategory, SpeciesProfile

logger = logging.getLogger(__name__)


LIGHT_LEVELS = MappingProxyType({
    1: LightCategory.DARK,
    2: LightCategory.SHADE,
    3: LightCategory.PART_SUN,
    4: LightCategory.FULL_SUN,
})


def describe_light(level: Optional[int]) -> LightCategory:
    """
    Map an ordinal light level to its category.

    Args:
        level: Light level, 1 (dark) to 4 (full sun)

    Returns:
        The matching category, or LightCategory.UNRECOGNIZED for any
        value outside the table
    """
    # bool is an int subclass; True must not read as "dark"
    if isinstance(level, bool) or not isinstance(level, int):
        return LightCategory.UNRECOGNIZED
    return LIGHT_LEVELS.get(level, LightCategory.UNRECOGNIZED)


def validate_profile(profile: SpeciesProfile) -> list[str]:
    """
    List everything wrong with a species profile.

    Args:
        profile: Profile to check

    Returns:
        Human-readable problems, empty if the profile is valid
    """
    problems = []
    if profile.water_frequency <= 0:
        problems.append(f"water frequency must be positive, got {profile.water_frequency}")
    if profile.fertilizer_frequency <= 0:
        problems.append(
            f"fertilizer frequency must be positive, got {profile.fertilizer_frequency}"
        )
    if describe_light(profile.light_level) is LightCategory.UNRECOGNIZED:
        problems.append(f"light level must be between 1 and 4, got {profile.light_level}")
    if profile.min_temperature > profile.max_temperature:
        problems.append(
            f"min temperature {profile.min_temperature} exceeds "
            f"max temperature {profile.max_temperature}"
        )
    return problems


def ideal_conditions(profile: Optional[SpeciesProfile]) -> IdealConditions:
    """
    Describe the light and temperature a species thrives in.

    Args:
        profile: Species profile, or None when the species is unknown

    Returns:
        IdealConditions; known=False when no profile is available
    """
    if profile is None:
        return IdealConditions(known=False)

    light = describe_light(profile.light_level)
    if profile.min_temperature > profile.max_temperature:
        logger.warning(f"Temperature range of '{profile.scientific_name}' is inverted")
        return IdealConditions(known=True, light=light)

    return IdealConditions(
        known=True,
        light=light,
        min_temperature=profile.min_temperature,
        max_temperature=profile.max_temperature,
    )


class SpeciesCatalog:
    """
    Read-only lookup of species profiles keyed by scientific name.

    Duplicate names keep their first occurrence. Invalid profiles are kept
    and reported as unrecognized by the descriptors, unless strict mode is
    requested.
    """

    def __init__(self, profiles: Iterable[SpeciesProfile], strict: bool = False):
        """
        Build the catalog.

        Args:
            profiles: Species profiles, in priority order
            strict: Raise InvalidProfileError instead of logging invalid profiles

        Raises:
            InvalidProfileError: In strict mode, on the first invalid profile
        """
        entries: dict[str, SpeciesProfile] = {}
        for profile in profiles:
            if profile.scientific_name in entries:
                logger.warning(
                    f"Duplicate species '{profile.scientific_name}' ignored"
                )
                continue

            problems = validate_profile(profile)
            if problems:
                if strict:
                    raise InvalidProfileError(profile.scientific_name, problems)
                logger.warning(
                    f"Species '{profile.scientific_name}' has an invalid profile: "
                    f"{'; '.join(problems)}"
                )

            entries[profile.scientific_name] = profile

        self._profiles = MappingProxyType(entries)
        logger.debug(f"Species catalog loaded with {len(entries)} profiles")

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, scientific_name: object) -> bool:
        return scientific_name in self._profiles

    def __iter__(self) -> Iterator[SpeciesProfile]:
        return iter(self._profiles.values())

    def lookup(self, scientific_name: str) -> Optional[SpeciesProfile]:
        """
        Find the profile for a species.

        Args:
            scientific_name: Unique species name

        Returns:
            The profile, or None if the species is unknown
        """
        profile = self._profiles.get(scientific_name)
        if profile is None:
            logger.debug(f"Species '{scientific_name}' not in catalog")
        return profile

    def require(self, scientific_name: str) -> SpeciesProfile:
        """
        Find the profile for a species, failing if it is unknown.

        Raises:
            SpeciesNotFoundError: If the species is not in the catalog
        """
        profile = self.lookup(scientific_name)
        if profile is None:
            raise SpeciesNotFoundError(scientific_name)
        return profile

    def names(self) -> list[str]:
        return sorted(self._profiles)

    def profiles(self) -> list[SpeciesProfile]:
        return [self._profiles[name] for name in self.names()]

    def conditions_for(self, scientific_name: str) -> IdealConditions:
        """Ideal conditions of a species; unknown species yield known=False."""
        return ideal_conditions(self.lookup(scientific_name))
