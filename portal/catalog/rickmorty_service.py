"""
Rick and Morty API integration for the catalogue. It exposes the
functions the routes build on:

* ``fetch_list()``: read one page of a list endpoint and return a
  ``ListResult`` or the ``FetchError`` that prevented it.

* ``load_list()``: build the query for a filter set and page, fetch
  it, and fall back to an empty ``ListResult`` on any failure so the
  page still renders.

* ``fetch_entity()`` / ``fetch_detail()``: read a single resource by
  URL or by identifier.

* ``fetch_api_root()``: read the endpoint map served at the API root.

Requests are anonymous GETs made with the standard library, with one
attempt each and an explicit timeout taken from the settings. Nothing
is cached: every call goes to the network.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from ..config import get_settings
from .errors import DecodeError, FetchError, NetworkError, UpstreamError
from .query import FilterSet, build_query
from .resources import ResourceKind
from .schemas import ApiEndpoints, ListResult, PageInfo


logger = logging.getLogger(__name__)


def _base_url() -> str:
    return get_settings().api_base_url.rstrip("/")


def _http_get_json(url: str) -> Any:
    """Perform an HTTP GET and return the parsed JSON body.

    Raises ``UpstreamError`` for a non-2xx status, ``NetworkError`` for
    transport failures, timeouts and URLs that cannot be sent, and
    ``DecodeError`` when the body is not JSON.
    """
    settings = get_settings()
    try:
        request = urllib.request.Request(
            url,
            headers={
                'User-Agent': settings.user_agent,
                'Accept': 'application/json',
            },
        )
        with urllib.request.urlopen(request, timeout=settings.request_timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                logger.warning("Rick and Morty API request to %s returned status %s", url, status)
                raise UpstreamError(url, status)
            body = response.read()
    except urllib.error.HTTPError as exc:
        logger.warning("Rick and Morty API request to %s returned status %s", url, exc.code)
        raise UpstreamError(url, exc.code) from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        # ValueError covers URLs http.client cannot encode into a request line.
        logger.error("Error fetching %s: %s", url, exc)
        raise NetworkError(url, f"Error fetching {url}: {exc}") from exc
    try:
        return json.loads(body.decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as exc:
        logger.error("Undecodable body from %s: %s", url, exc)
        raise DecodeError(url, f"Undecodable body from {url}: {exc}") from exc


def _parse_list(resource: ResourceKind, url: str, data: Any) -> ListResult:
    if not isinstance(data, dict):
        raise DecodeError(url, f"Expected an object from {url}")
    info = data.get('info')
    results = data.get('results')
    if not isinstance(info, dict) or not isinstance(results, list):
        raise DecodeError(url, f"Missing info/results in response from {url}")
    try:
        return ListResult[resource.model](
            items=results,
            page_info=PageInfo.model_validate(info),
        )
    except ValidationError as exc:
        logger.error("Unexpected %s list payload from %s: %s", resource.value, url, exc)
        raise DecodeError(url, f"Unexpected payload from {url}") from exc


def fetch_list(resource: ResourceKind, query: str) -> Union[ListResult, FetchError]:
    """Fetch one page of ``resource`` for a pre-built query string.

    Failures are returned, not raised, so the caller chooses the
    fallback.
    """
    url = f"{_base_url()}/{resource.value}"
    if query:
        url = f"{url}?{query}"
    try:
        data = _http_get_json(url)
        return _parse_list(resource, url, data)
    except FetchError as exc:
        return exc


def load_list(resource: ResourceKind, filters: Optional[FilterSet], page: Any = 1) -> ListResult:
    """Return the requested page, or an empty result when it cannot be fetched.

    An empty result has no items, a count of zero and no cursors, which
    disables both pagination controls.
    """
    outcome = fetch_list(resource, build_query(resource, filters, page))
    if isinstance(outcome, FetchError):
        logger.warning(
            "Serving empty %s list after %s: %s", resource.value, outcome.kind.value, outcome
        )
        return ListResult[resource.model].empty()
    return outcome


def fetch_entity(url: str, model: Type[BaseModel]) -> BaseModel:
    """Fetch a single resource by absolute URL and validate it as ``model``."""
    data = _http_get_json(url)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.error("Unexpected %s payload from %s: %s", model.__name__, url, exc)
        raise DecodeError(url, f"Unexpected payload from {url}") from exc


def fetch_detail(resource: ResourceKind, entity_id: Union[int, str]) -> Optional[BaseModel]:
    """Return the entity with ``entity_id``, or ``None`` when it cannot be read.

    An identifier that is not a positive integer is treated as not
    found without making a request.
    """
    raw_id = str(entity_id).strip()
    if not raw_id.isdecimal() or int(raw_id) < 1:
        return None
    url = f"{_base_url()}/{resource.value}/{int(raw_id)}"
    try:
        return fetch_entity(url, resource.model)
    except FetchError as exc:
        logger.info("%s %s not available: %s", resource.value, raw_id, exc)
        return None


def fetch_api_root() -> ApiEndpoints:
    """Return the endpoint map of the API root. Raises ``FetchError``."""
    url = _base_url()
    data = _http_get_json(url)
    try:
        return ApiEndpoints.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(url, f"Unexpected payload from {url}") from exc
