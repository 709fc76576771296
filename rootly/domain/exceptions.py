"""
Domain exceptions.
"""


class RootlyError(Exception):
    """Base exception for plant care errors."""
    pass


class NotFoundError(RootlyError):
    """A referenced plant or species does not exist."""
    pass


class PlantNotFoundError(NotFoundError):
    """Raised when a plant id is unknown."""

    def __init__(self, plant_id: int):
        self.plant_id = plant_id
        super().__init__(f"Plant {plant_id} not found")


class SpeciesNotFoundError(NotFoundError):
    """Raised when a scientific name is not in the catalog."""

    def __init__(self, scientific_name: str):
        self.scientific_name = scientific_name
        super().__init__(f"Species '{scientific_name}' not found")


class InvalidProfileError(RootlyError):
    """Raised when a species profile holds values outside their valid range."""

    def __init__(self, scientific_name: str, problems: list[str]):
        self.scientific_name = scientific_name
        self.problems = problems
        super().__init__(
            f"Invalid profile for '{scientific_name}': {'; '.join(problems)}"
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user id is unknown."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")
