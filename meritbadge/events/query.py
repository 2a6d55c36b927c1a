"""Composition and execution of event store queries.

Every public query starts from ApprovedEventQuery, whose predicate list holds
the approved-status check from construction onwards. Callers can only append
predicates, all of which are ANDed with it.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from sqlalchemy.sql import ColumnElement

from .filters import EventQuery
from ..db.event_store import EventStore, ListResult
from ..models.event import EventStatus, MeritBadgeEvent

# Ascending by date; created_at then id keep ties in insertion order
DATE_ORDER = (
    MeritBadgeEvent.event_date.asc(),
    MeritBadgeEvent.created_at.asc(),
    MeritBadgeEvent.id.asc(),
)

# Most viewed first, same tie-break as DATE_ORDER
POPULARITY_ORDER = (
    MeritBadgeEvent.view_count.desc(),
    MeritBadgeEvent.created_at.asc(),
    MeritBadgeEvent.id.asc(),
)

@dataclass
class EventPage:
    """One page of events plus the total number of matches."""
    events: List[MeritBadgeEvent] = field(default_factory=list)
    total: int = 0

class ApprovedEventQuery:
    """Query builder restricted to approved events."""

    def __init__(self):
        self._predicates: List[ColumnElement] = [approved_predicate()]
        self._order_by: Tuple[Any, ...] = DATE_ORDER

    @property
    def predicates(self) -> Tuple[ColumnElement, ...]:
        return tuple(self._predicates)

    @property
    def ordering(self) -> Tuple[Any, ...]:
        return self._order_by

    def where(self, *predicates: ColumnElement) -> 'ApprovedEventQuery':
        """Add predicates, ANDed with everything already present."""
        self._predicates.extend(predicates)
        return self

    def order_by(self, *clauses: Any) -> 'ApprovedEventQuery':
        self._order_by = tuple(clauses)
        return self

    def execute(
        self,
        store: EventStore,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> ListResult:
        """Run the query against the store once."""
        return store.list(self.predicates, self._order_by, limit=limit, offset=offset)

def approved_predicate() -> ColumnElement:
    return MeritBadgeEvent.status == EventStatus.APPROVED.value

def build_event_query(event_query: EventQuery) -> ApprovedEventQuery:
    """Translate a canonical EventQuery into predicates on the approved base query."""
    builder = ApprovedEventQuery()

    if event_query.query:
        # Free text only searches badge names
        builder.where(MeritBadgeEvent.badge_name.icontains(event_query.query, autoescape=True))
    if event_query.badge_name:
        builder.where(MeritBadgeEvent.badge_name == event_query.badge_name)
    if event_query.subject_area:
        builder.where(MeritBadgeEvent.subject_area == event_query.subject_area)
    if event_query.is_virtual is not None:
        builder.where(MeritBadgeEvent.is_virtual == event_query.is_virtual)
    if event_query.is_eagle_required is not None:
        builder.where(MeritBadgeEvent.is_eagle_required == event_query.is_eagle_required)
    if event_query.start_date:
        builder.where(MeritBadgeEvent.event_date >= event_query.start_date)
    if event_query.end_date:
        builder.where(MeritBadgeEvent.event_date <= event_query.end_date)

    return builder

def execute_event_query(store: EventStore, event_query: EventQuery) -> EventPage:
    """
    Execute a canonical query and return the requested page.

    Raises:
        DatabaseError: If the store fails; no retry is attempted
    """
    result = build_event_query(event_query).execute(
        store,
        limit=event_query.limit,
        offset=event_query.offset,
    )
    return EventPage(events=result.rows, total=result.total)
