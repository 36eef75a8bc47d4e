"""
Query string construction for the list endpoints.

``build_query()`` turns a page number and a mapping of filter fields
into the query string sent to ``<base>/<resource>``. Only fields that
belong to the resource and carry a non-blank value are written, in the
resource's declared field order, after the ``page`` term.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .resources import ResourceKind


logger = logging.getLogger(__name__)

FilterSet = Mapping[str, Optional[str]]


def normalize_page(value: Any) -> int:
    """Return ``value`` as a 1-indexed page number, or 1 when it is not one."""
    if isinstance(value, bool):
        return 1
    try:
        page = int(str(value).strip()) if value is not None else 1
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def clean_filters(resource: ResourceKind, filters: Optional[FilterSet]) -> Dict[str, str]:
    """Return every filter field of ``resource`` with its stripped value.

    Missing fields come back as ``""``. Names the resource does not
    declare are dropped.
    """
    filters = filters or {}
    unknown = [key for key in filters if key not in resource.filter_fields]
    if unknown:
        logger.debug("Ignoring unknown %s filters: %s", resource.value, ", ".join(unknown))
    return {field: (filters.get(field) or "").strip() for field in resource.filter_fields}


def build_query(resource: ResourceKind, filters: Optional[FilterSet], page: Any = 1) -> str:
    params: List[Tuple[str, Any]] = [("page", normalize_page(page))]
    for field, value in clean_filters(resource, filters).items():
        if value:
            params.append((field, value))
    return urllib.parse.urlencode(params)
