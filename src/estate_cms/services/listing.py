"""
estate_cms.services.listing

Listing pipeline: filter spec -> predicate -> data store -> envelope.

Responsibilities:
- Build the list query from request parameters.
- Force the active predicate onto public listings.
- Shape `{success, data, pagination}` responses.

Authorization happens before this runs (route dependencies), so a denied request never
reaches `find`/`count`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from estate_cms.observability.logging import get_logger
from estate_cms.query.filters import FilterSpec, Sort, build
from estate_cms.query.predicates import Eq, Predicate, all_of

log = get_logger(__name__)

PUBLISHED = Eq("is_active", True)


class DataStore(Protocol):
    async def find(
        self, predicate: Predicate, sort: Sort, skip: int, limit: int
    ) -> Sequence[Any]: ...

    async def count(self, predicate: Predicate) -> int: ...


async def list_page(
    store: DataStore,
    spec: FilterSpec,
    params: Mapping[str, str],
    *,
    serialize: Callable[[Any], dict[str, Any]],
    public: bool = False,
) -> dict[str, Any]:
    query = build(spec, params)
    # Public listings AND the active predicate on top of whatever the caller asked for.
    predicate = all_of(PUBLISHED, query.predicate) if public else query.predicate

    ignored = sorted(set(params) - spec.recognized)
    if ignored:
        log.debug("listing.ignored_params", entity=spec.entity, params=ignored)

    page = query.pagination
    rows = await store.find(predicate, query.sort, page.skip, page.limit)
    total = await store.count(predicate)
    return {
        "success": True,
        "data": [serialize(r) for r in rows],
        "pagination": page.meta(total),
    }


# --- Module Notes -----------------------------------------------------------
# `store` is any object with async find/count; tests pass recording fakes through
# FastAPI dependency overrides.
