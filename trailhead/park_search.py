"""Choose and run the provider query path for a park search.

Criteria are never combined. ``QUERY_RULES`` is checked top to bottom and the
first matching rule decides the query path:

1. ``q`` or ``state_code`` present -> combined text/state search, provider paginates.
2. ``activity`` present -> full activity listing, sliced locally.
3. otherwise -> unfiltered listing, provider paginates.

So a search with both ``q`` and ``activity`` ignores ``activity``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from trailhead.data_sources.base import ParksProvider
from trailhead.data_sources.records import Park
from trailhead.domain import ParkCriteria, QueryMode
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="park_search")

T = TypeVar("T")

QUERY_RULES: Tuple[Tuple[QueryMode, Callable[[ParkCriteria], bool]], ...] = (
    (QueryMode.TEXT_OR_STATE, lambda c: c.q is not None or c.state_code is not None),
    (QueryMode.ACTIVITY, lambda c: bool(c.activity)),
    (QueryMode.LISTING, lambda c: True),
)


@dataclass
class ParkSearchResult:
    """One page of parks plus how it was produced."""
    parks: List[Park]
    mode: QueryMode
    start: int
    limit: int
    next_start: Optional[int] = None


def paginate(items: Sequence[T], start: int, limit: int) -> List[T]:
    """Return ``items[start:start+limit]``; out-of-range ``start`` gives an empty page."""
    if start < 0 or limit < 0:
        raise ValueError("start and limit must be non-negative")
    return list(items[start:start + limit])


def select_query_mode(criteria: ParkCriteria) -> QueryMode:
    """First rule in ``QUERY_RULES`` that matches ``criteria``."""
    for mode, matches in QUERY_RULES:
        if matches(criteria):
            return mode
    return QueryMode.LISTING


def find_parks(criteria: ParkCriteria, parks: ParksProvider) -> ParkSearchResult:
    """Run the park search selected by ``criteria``."""
    mode = select_query_mode(criteria)
    logger.info(
        "Park search",
        extra={"mode": mode.value, "q": criteria.q, "state_code": criteria.state_code,
               "activity": criteria.activity, "limit": criteria.limit, "start": criteria.start},
    )

    if mode == QueryMode.TEXT_OR_STATE:
        found = parks.search_parks(criteria.q, criteria.state_code, criteria.limit, criteria.start)
    elif mode == QueryMode.ACTIVITY:
        found = paginate(parks.get_parks_by_activity(criteria.activity), criteria.start, criteria.limit)
    else:
        found = parks.get_parks(criteria.limit, criteria.start)

    next_start = criteria.start + criteria.limit if len(found) >= criteria.limit else None
    return ParkSearchResult(
        parks=list(found),
        mode=mode,
        start=criteria.start,
        limit=criteria.limit,
        next_start=next_start,
    )


def parks_by_state(state_code: str, parks: ParksProvider) -> List[Park]:
    """Every park in a state."""
    return parks.get_parks_by_state(state_code)
