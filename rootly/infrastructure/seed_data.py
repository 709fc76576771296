"""
Built-in species catalog.

Each entry is (scientific name, water every N days, fertilize every N days,
light level 1-4, max temperature °C, min temperature °C). The list keeps
the historical duplicates; loaders keep the first occurrence of a name.
"""
from rootly.domain.models import SpeciesProfile

_SPECIES_ROWS = [
    ("Spider Plant", 2, 2, 2, 25.0, 10.0),
    ("Snake Plant", 3, 1, 1, 30.0, 15.0),
    ("Pothos", 2, 1, 3, 25.0, 15.0),
    ("Peace Lily", 2, 1, 3, 25.0, 15.0),
    ("ZZ Plant", 4, 1, 1, 30.0, 15.0),
    ("Monstera", 2, 2, 2, 30.0, 15.0),
    ("Philodendron", 2, 2, 3, 25.0, 15.0),
    ("Rubber Plant", 2, 2, 2, 25.0, 10.0),
    ("Fiddle Leaf Fig", 2, 3, 3, 25.0, 15.0),
    ("Aloe Vera", 4, 2, 4, 35.0, 10.0),
    ("Snake Plant", 4, 2, 2, 30.0, 15.0),
    ("English Ivy", 3, 1, 3, 25.0, 15.0),
    ("Chinese Evergreen", 2, 1, 3, 25.0, 15.0),
    ("Parlor Palm", 2, 1, 3, 25.0, 15.0),
    ("Fern", 2, 2, 3, 25.0, 15.0),
    ("Jade Plant", 4, 2, 4, 35.0, 10.0),
    ("Succulent", 4, 2, 4, 35.0, 10.0),
    ("Calathea", 2, 2, 2, 25.0, 15.0),
    ("Bird of Paradise", 2, 3, 3, 30.0, 15.0),
    ("Money Tree", 3, 2, 4, 30.0, 15.0),
    ("Dracaena", 3, 2, 3, 30.0, 15.0),
    ("Pilea", 4, 1, 3, 25.0, 15.0),
    ("Spider Plant", 2, 2, 2, 25.0, 10.0),
    ("Christmas Cactus", 2, 1, 2, 25.0, 10.0),
    ("Hoya", 3, 1, 3, 25.0, 15.0),
    ("Dieffenbachia", 2, 1, 3, 25.0, 15.0),
    ("Oxalis", 2, 1, 3, 25.0, 15.0),
    ("Bromeliad", 2, 2, 2, 25.0, 15.0),
    ("Schefflera", 2, 1, 3, 25.0, 15.0),
    ("String of Pearls", 4, 1, 4, 35.0, 10.0),
]

INITIAL_SPECIES: list[SpeciesProfile] = [
    SpeciesProfile(
        scientific_name=name,
        water_frequency=water,
        fertilizer_frequency=fertilizer,
        light_level=light,
        max_temperature=max_temp,
        min_temperature=min_temp,
    )
    for name, water, fertilizer, light, max_temp, min_temp in _SPECIES_ROWS
]
