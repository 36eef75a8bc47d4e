"""
Pydantic schema definitions for the catalog module.

The entity models (``Character``, ``Location`` and ``Episode``) mirror
the JSON returned by the Rick and Morty API closely enough to render a
card or a detail view; unknown keys sent by the upstream are ignored.
``ListResult`` bundles one page of entities with the pagination block
of the list endpoint, and ``ResolvedRelation`` wraps the outcome of
following a single relation link so that a failed link never hides
its siblings.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Literal


class LinkedLocation(BaseModel):
    """The ``{name, url}`` pair a character carries for origin and location.

    ``url`` is empty when the upstream does not know the location; the
    ``name`` is then usually ``"unknown"``.
    """

    name: str = ""
    url: str = ""


class Character(BaseModel):
    id: int
    name: str
    status: str = ""
    species: str = ""
    type: str = ""
    gender: str = ""
    origin: LinkedLocation = Field(default_factory=LinkedLocation)
    location: LinkedLocation = Field(default_factory=LinkedLocation)
    image: str = ""
    # Absolute URLs of the episodes the character appears in.
    episode: List[str] = Field(default_factory=list)
    url: str = ""
    created: str = ""


class Location(BaseModel):
    id: int
    name: str
    type: str = ""
    dimension: str = ""
    residents: List[str] = Field(default_factory=list)
    url: str = ""
    created: str = ""


class Episode(BaseModel):
    id: int
    name: str
    air_date: str = ""
    # Season/episode code such as ``S01E01``.
    episode: str = ""
    characters: List[str] = Field(default_factory=list)
    url: str = ""
    created: str = ""


class PageInfo(BaseModel):
    """The ``info`` block of a list response.

    ``next`` and ``prev`` are full URLs; ``None`` means that edge of the
    list has been reached.
    """

    count: int = 0
    pages: int = 0
    next: Optional[str] = None
    prev: Optional[str] = None


EntityT = TypeVar("EntityT", bound=BaseModel)


class ListResult(BaseModel, Generic[EntityT]):
    """One page of entities plus pagination metadata."""

    items: List[EntityT] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)

    @classmethod
    def empty(cls) -> "ListResult":
        return cls(items=[], page_info=PageInfo())


RelationFailure = Literal["NoRelation", "ResolutionFailed"]


class ResolvedRelation(BaseModel, Generic[EntityT]):
    """The hydrated target of a relation link, or the reason there is none.

    Exactly one of ``entity`` and ``error`` is set. ``ref`` keeps the
    original link for diagnostics, including when it failed.
    """

    ref: Optional[str] = None
    entity: Optional[EntityT] = None
    error: Optional[RelationFailure] = None

    @model_validator(mode="after")
    def _entity_xor_error(self) -> "ResolvedRelation":
        if (self.entity is None) == (self.error is None):
            raise ValueError("exactly one of entity and error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogPage(BaseModel, Generic[EntityT]):
    """A list page as handed to the front-end.

    ``filters`` echoes every filter field of the resource (empty when
    unused) so the form can be re-populated. ``next_page`` and
    ``prev_page`` are ``None`` when the matching control is disabled.
    """

    page: int
    filters: Dict[str, str]
    items: List[EntityT]
    page_info: PageInfo
    next_page: Optional[int] = None
    prev_page: Optional[int] = None


class CharacterDetail(BaseModel):
    character: Character
    origin: ResolvedRelation[Location]
    location: ResolvedRelation[Location]


class EpisodeDetail(BaseModel):
    episode: Episode
    characters: List[ResolvedRelation[Character]]


class LocationDetail(BaseModel):
    location: Location
    residents: List[ResolvedRelation[Character]]


class ApiEndpoints(BaseModel):
    """Endpoint map served by the API root."""

    characters: str
    locations: str
    episodes: str
