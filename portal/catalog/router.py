"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /                    : endpoint map of the upstream API
- GET  /characters          : filtered, paginated characters
- GET  /characters/{id}     : one character with its origin and location
- GET  /locations           : filtered, paginated locations
- GET  /locations/{id}      : one location with its residents
- GET  /episodes            : filtered, paginated episodes
- GET  /episodes/{id}       : one episode with its characters
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, Query

from .cursor import cursor_page
from .errors import FetchError
from .query import clean_filters, normalize_page
from .relations import resolve_many
from .resources import ResourceKind
from .rickmorty_service import fetch_api_root, fetch_detail, load_list
from .schemas import (
    ApiEndpoints,
    CatalogPage,
    Character,
    CharacterDetail,
    Episode,
    EpisodeDetail,
    Location,
    LocationDetail,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _catalog_page(resource: ResourceKind, filters: Dict[str, Optional[str]], page: Optional[str]) -> CatalogPage:
    current = normalize_page(page)
    cleaned = clean_filters(resource, filters)
    result = load_list(resource, cleaned, current)
    return CatalogPage[resource.model](
        page=current,
        filters=cleaned,
        items=result.items,
        page_info=result.page_info,
        next_page=cursor_page(result.page_info.next),
        prev_page=cursor_page(result.page_info.prev),
    )


@router.get("/", response_model=ApiEndpoints)
def api_root() -> ApiEndpoints:
    try:
        return fetch_api_root()
    except FetchError as exc:
        logger.error("API root unavailable: %s", exc)
        raise HTTPException(status_code=502, detail="Upstream API unavailable") from exc


@router.get("/characters", response_model=CatalogPage[Character])
def list_characters(
    name: Optional[str] = Query(default=None, description="Name of character"),
    status: Optional[str] = Query(default=None, description="alive, dead or unknown"),
    species: Optional[str] = Query(default=None, description="Species of character"),
    type: Optional[str] = Query(default=None, description="Type of character"),
    gender: Optional[str] = Query(default=None, description="female, male, genderless or unknown"),
    page: Optional[str] = Query(default=None, description="Current page (1-indexed)"),
) -> CatalogPage:
    filters = {"name": name, "status": status, "species": species, "type": type, "gender": gender}
    return _catalog_page(ResourceKind.CHARACTER, filters, page)


@router.get("/characters/{character_id}", response_model=CharacterDetail)
def get_character(character_id: str) -> CharacterDetail:
    character = fetch_detail(ResourceKind.CHARACTER, character_id)
    if character is None:
        raise HTTPException(status_code=404, detail="Character not found")
    origin, location = resolve_many([character.origin.url, character.location.url], Location)
    return CharacterDetail(character=character, origin=origin, location=location)


@router.get("/locations", response_model=CatalogPage[Location])
def list_locations(
    name: Optional[str] = Query(default=None, description="Name of location"),
    type: Optional[str] = Query(default=None, description="Type of location"),
    dimension: Optional[str] = Query(default=None, description="Dimension of location"),
    page: Optional[str] = Query(default=None, description="Current page (1-indexed)"),
) -> CatalogPage:
    filters = {"name": name, "type": type, "dimension": dimension}
    return _catalog_page(ResourceKind.LOCATION, filters, page)


@router.get("/locations/{location_id}", response_model=LocationDetail)
def get_location(location_id: str) -> LocationDetail:
    location = fetch_detail(ResourceKind.LOCATION, location_id)
    if location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    residents = resolve_many(location.residents, Character)
    return LocationDetail(location=location, residents=residents)


@router.get("/episodes", response_model=CatalogPage[Episode])
def list_episodes(
    name: Optional[str] = Query(default=None, description="Name of episode"),
    episode: Optional[str] = Query(default=None, description="Episode code, e.g. S01E01"),
    page: Optional[str] = Query(default=None, description="Current page (1-indexed)"),
) -> CatalogPage:
    filters = {"name": name, "episode": episode}
    return _catalog_page(ResourceKind.EPISODE, filters, page)


@router.get("/episodes/{episode_id}", response_model=EpisodeDetail)
def get_episode(episode_id: str) -> EpisodeDetail:
    episode = fetch_detail(ResourceKind.EPISODE, episode_id)
    if episode is None:
        raise HTTPException(status_code=404, detail="Episode not found")
    characters = resolve_many(episode.characters, Character)
    return EpisodeDetail(episode=episode, characters=characters)
