"""
Resolution of relation links into hydrated entities.

Entities embed absolute URLs to the entities they relate to: an
episode lists its characters, a character points to its origin and
current location. ``resolve_many()`` follows a batch of such links
concurrently and returns one ``ResolvedRelation`` per input link, in
input order. A link that cannot be followed yields a failure marker in
its own slot and never affects the others.
"""

from __future__ import annotations

import logging
import urllib.parse
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Type

from pydantic import BaseModel

from ..config import get_settings
from .errors import FetchError
from .rickmorty_service import fetch_entity
from .schemas import ResolvedRelation


logger = logging.getLogger(__name__)


def is_relation_ref(ref: Optional[str]) -> bool:
    """Return True when ``ref`` is a link worth dereferencing.

    A usable link is an absolute http(s) URL with a host and a
    non-empty last path segment that is not a ``null`` placeholder. With
    ``legacy_null_substring_check`` enabled, any link containing
    ``"null"`` is rejected as well.
    """
    if not ref or not isinstance(ref, str):
        return False
    if get_settings().legacy_null_substring_check and "null" in ref:
        return False
    parts = urllib.parse.urlsplit(ref.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return False
    last_segment = parts.path.rsplit("/", 1)[-1]
    return bool(last_segment) and last_segment.lower() not in ("null", "undefined")


def resolve_many(refs: Sequence[Optional[str]], model: Type[BaseModel]) -> List[ResolvedRelation]:
    """Hydrate every link in ``refs`` as ``model``.

    All usable links are fetched at once, one worker each, and the
    result is assembled after every fetch has finished. Unusable links
    become ``NoRelation`` without a request; failed fetches become
    ``ResolutionFailed`` and keep the original link.
    """
    relation = ResolvedRelation[model]
    results: List[Optional[ResolvedRelation]] = [None] * len(refs)
    pending: Dict[int, str] = {}
    for index, ref in enumerate(refs):
        if is_relation_ref(ref):
            pending[index] = ref.strip()
        else:
            logger.debug("No %s relation at position %d: %r", model.__name__, index, ref)
            results[index] = relation(ref=ref, error="NoRelation")

    if pending:
        with ThreadPoolExecutor(max_workers=len(pending), thread_name_prefix="relation") as pool:
            futures: Dict[int, Future] = {
                index: pool.submit(fetch_entity, url, model) for index, url in pending.items()
            }
            for index, future in futures.items():
                try:
                    entity = future.result()
                except FetchError as exc:
                    logger.warning("Could not resolve %s: %s", pending[index], exc)
                    results[index] = relation(ref=pending[index], error="ResolutionFailed")
                else:
                    results[index] = relation(ref=pending[index], entity=entity)

    return results


def resolve_one(ref: Optional[str], model: Type[BaseModel]) -> ResolvedRelation:
    return resolve_many([ref], model)[0]
