"""
The three resource families exposed by the Rick and Morty API.

Each kind owns a fixed, ordered tuple of filter fields. That order is
the order in which non-empty filters are written into a list query, so
the same filters always produce the same query string.
"""

from enum import Enum
from typing import Dict, Tuple, Type

from pydantic import BaseModel

from .schemas import Character, Episode, Location


class ResourceKind(str, Enum):
    CHARACTER = "character"
    LOCATION = "location"
    EPISODE = "episode"

    @property
    def filter_fields(self) -> Tuple[str, ...]:
        return FILTER_FIELDS[self]

    @property
    def model(self) -> Type[BaseModel]:
        return ENTITY_MODELS[self]


FILTER_FIELDS: Dict[ResourceKind, Tuple[str, ...]] = {
    ResourceKind.CHARACTER: ("name", "status", "species", "type", "gender"),
    ResourceKind.LOCATION: ("name", "type", "dimension"),
    ResourceKind.EPISODE: ("name", "episode"),
}

ENTITY_MODELS: Dict[ResourceKind, Type[BaseModel]] = {
    ResourceKind.CHARACTER: Character,
    ResourceKind.LOCATION: Location,
    ResourceKind.EPISODE: Episode,
}
