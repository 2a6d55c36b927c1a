"""Caller-facing event operations.

Read operations fail closed: a store failure is logged and turned into an
empty result, so callers cannot tell it apart from "no matches". Only the save
operation raises, and only when no user is signed in.
"""

import logging
import math
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import UnauthorizedError
from .filters import EventFilterInput, normalize_filters, parse_filter_input
from .query import POPULARITY_ORDER, ApprovedEventQuery, approved_predicate, execute_event_query
from .trending import rank_trending_badges
from ..config.listing import (
    FEATURED_EVENTS_LIMIT,
    RELATED_EVENTS_LIMIT,
    SEARCH_PAGE_SIZE,
    TRENDING_BADGES_LIMIT,
    TRENDING_SAMPLE_SIZE,
)
from ..db import DatabaseError, EventStore
from ..models.event import EventStatus, MeritBadgeEvent
from ..utils.dates import today_utc

logger = logging.getLogger(__name__)

class EventService:
    """Listing, search, detail, ranking and save operations on events."""

    def __init__(
        self,
        store: Optional[EventStore] = None,
        today: Callable[[], date] = today_utc
    ):
        self.store = store or EventStore()
        self.today = today

    def list_events(
        self,
        filters: Union[EventFilterInput, Mapping[str, Any], None] = None
    ) -> Dict[str, Any]:
        """
        List approved events matching the filters.

        Returns:
            {'events': [...], 'total': int}

        Raises:
            FilterValidationError: If the filters are malformed
        """
        event_query = normalize_filters(filters, today=self.today)
        try:
            page = execute_event_query(self.store, event_query)
        except DatabaseError:
            logger.exception(f"Error listing events for {event_query.model_dump(exclude_none=True)}")
            return {'events': [], 'total': 0}

        return {
            'events': [event.to_dict() for event in page.events],
            'total': page.total,
        }

    def search_events(
        self,
        q: Optional[str] = None,
        badge_name: Optional[str] = None,
        subject_area: Optional[str] = None,
        virtual: bool = False,
        eagle: bool = False,
        timeframe: Optional[str] = None,
        page: Union[int, str] = 1,
        page_size: int = SEARCH_PAGE_SIZE
    ) -> Dict[str, Any]:
        """
        Search page listing with fixed page size.

        The virtual and eagle toggles only ever narrow the results: when off,
        both virtual and in-person (or eagle and non-eagle) classes are shown.

        Raises:
            FilterValidationError: If the page or other filters are malformed
        """
        filters = parse_filter_input({
            'query': q,
            'badgeName': badge_name,
            'subjectArea': subject_area,
            'isVirtual': True if virtual else None,
            'isEagleRequired': True if eagle else None,
            'timeframe': timeframe,
            'page': page,
            'limit': page_size,
        })
        result = self.list_events(filters)
        result.update({
            'page': filters.page,
            'pageSize': page_size,
            'totalPages': math.ceil(result['total'] / page_size),
        })
        return result

    def get_featured_events(self) -> Dict[str, Any]:
        """Upcoming approved events, soonest first."""
        builder = ApprovedEventQuery().where(MeritBadgeEvent.event_date >= self.today())
        try:
            result = builder.execute(self.store, limit=FEATURED_EVENTS_LIMIT)
        except DatabaseError:
            logger.exception("Error getting featured events")
            return {'events': []}

        return {'events': [event.to_dict() for event in result.rows]}

    def get_event(self, event_id: str) -> Dict[str, Any]:
        """
        Fetch one approved event and count the view.

        The returned event is the snapshot read before the view count was
        incremented. Unknown or unapproved IDs and store failures all give
        {'event': None}. A failed increment is logged and ignored.
        """
        try:
            event = self.store.get(event_id)
        except DatabaseError:
            logger.exception(f"Error getting event {event_id}")
            return {'event': None}

        if event is None or event.status != EventStatus.APPROVED.value:
            return {'event': None}

        snapshot = event.to_dict()

        try:
            if not self.store.increment(event_id, 'view_count'):
                logger.warning(f"View count not incremented, event {event_id} disappeared")
        except DatabaseError:
            logger.exception(f"Error incrementing view count for event {event_id}")

        return {'event': snapshot}

    def get_related_events(
        self,
        event_id: str,
        limit: int = RELATED_EVENTS_LIMIT
    ) -> Dict[str, Any]:
        """Other approved classes for the same badge as the given event."""
        try:
            event = self.store.get(event_id)
            if event is None or event.status != EventStatus.APPROVED.value:
                return {'events': []}

            builder = ApprovedEventQuery().where(
                MeritBadgeEvent.badge_name == event.badge_name,
                MeritBadgeEvent.id != event.id,
            )
            result = builder.execute(self.store, limit=limit)
        except DatabaseError:
            logger.exception(f"Error getting related events for {event_id}")
            return {'events': []}

        return {'events': [related.to_dict() for related in result.rows]}

    def get_trending_badges(self) -> Dict[str, Any]:
        """Badges ranked by how often they appear among the most viewed events."""
        builder = ApprovedEventQuery().order_by(*POPULARITY_ORDER)
        try:
            sample = builder.execute(self.store, limit=TRENDING_SAMPLE_SIZE)
        except DatabaseError:
            logger.exception("Error getting trending badges")
            return {'badges': []}

        return {'badges': rank_trending_badges(sample.rows, limit=TRENDING_BADGES_LIMIT)}

    def toggle_save_event(self, event_id: str, current_user: Optional[Any]) -> Dict[str, bool]:
        """
        Record a save of an approved event by a signed-in user.

        Saves are a shared counter, not a per-user relation.

        Raises:
            UnauthorizedError: If no user is signed in
        """
        if not current_user:
            raise UnauthorizedError("Unauthorized")

        try:
            saved = self.store.increment(event_id, 'save_count', approved_predicate())
        except DatabaseError:
            logger.exception(f"Error saving event {event_id}")
            return {'success': False}

        if not saved:
            logger.warning(f"Save ignored, no approved event with id {event_id}")
        return {'success': saved}
