"""
Catalog package for the Rick and Morty portal.

This package exposes a read-only REST API over the public Rick and
Morty API so that a front-end can render lists of characters,
locations and episodes with filters and pagination, and detail pages
whose related entities (an episode's cast, a character's origin) are
already resolved. Every request goes straight to the upstream API;
nothing is stored locally.
"""

from .router import router as catalog_router  # noqa: F401
