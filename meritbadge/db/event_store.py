"""Persistent store of merit badge events.

The store is the only place that talks to SQLAlchemy sessions on behalf of the
event services. Failures surface as DatabaseError subclasses raised by
Database.session(); callers decide whether to propagate or collapse them.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.sql import ColumnElement

from .db_core import Database, db
from ..models.event import MeritBadgeEvent

logger = logging.getLogger(__name__)

@dataclass
class ListResult:
    """A page of rows plus the size of the full filtered set."""
    rows: List[MeritBadgeEvent] = field(default_factory=list)
    total: int = 0

class EventStore:
    """Thin wrapper around the merit_badge_events table."""

    COUNTERS = ('view_count', 'save_count')

    def __init__(self, database: Optional[Database] = None):
        self.database = database or db

    def list(
        self,
        predicates: Sequence[ColumnElement] = (),
        order_by: Sequence[Any] = (),
        limit: Optional[int] = None,
        offset: int = 0
    ) -> ListResult:
        """
        Fetch one page of events matching all predicates.

        Args:
            predicates: SQL expressions combined with AND
            order_by: Ordering clauses applied to the page
            limit: Maximum number of rows to return (None for no limit)
            offset: Number of matching rows to skip

        Returns:
            ListResult with the page rows and the total count of matches
        """
        with self.database.session() as session:
            total = session.scalar(
                select(func.count()).select_from(MeritBadgeEvent).where(*predicates)
            )
            statement = select(MeritBadgeEvent).where(*predicates).order_by(*order_by)
            if offset:
                statement = statement.offset(offset)
            if limit is not None:
                statement = statement.limit(limit)
            rows = list(session.scalars(statement))
        return ListResult(rows=rows, total=total or 0)

    def get(self, event_id: str) -> Optional[MeritBadgeEvent]:
        """Fetch a single event by ID, or None when it does not exist."""
        with self.database.session() as session:
            return session.get(MeritBadgeEvent, event_id)

    def create(self, **fields: Any) -> MeritBadgeEvent:
        """Insert a new event and return it with generated defaults populated."""
        with self.database.session() as session:
            event = MeritBadgeEvent(**fields)
            session.add(event)
            session.flush()
            session.refresh(event)
            logger.info(f"Created event {event.id} for badge '{event.badge_name}'")
            return event

    def update(self, event_id: str, **fields: Any) -> Optional[MeritBadgeEvent]:
        """Apply a partial update to an event. Returns None when it does not exist."""
        unknown = [key for key in fields if key not in MeritBadgeEvent.__table__.columns]
        if unknown:
            raise ValueError(f"Unknown event fields: {', '.join(unknown)}")

        with self.database.session() as session:
            event = session.get(MeritBadgeEvent, event_id)
            if event is None:
                return None
            for key, value in fields.items():
                setattr(event, key, value)
            session.flush()
            return event

    def increment(
        self,
        event_id: str,
        counter: str,
        *conditions: ColumnElement
    ) -> bool:
        """
        Atomically add one to an engagement counter.

        The increment is a single UPDATE ... SET counter = counter + 1 so
        concurrent callers never overwrite each other.

        Args:
            event_id: Event to update
            counter: Either 'view_count' or 'save_count'
            *conditions: Extra predicates the row must satisfy

        Returns:
            True if a row was updated, False if no row matched
        """
        if counter not in self.COUNTERS:
            raise ValueError(f"Unknown counter: {counter}")

        column = getattr(MeritBadgeEvent, counter)
        statement = (
            update(MeritBadgeEvent)
            .where(MeritBadgeEvent.id == event_id, *conditions)
            .values({counter: column + 1})
            .execution_options(synchronize_session=False)
        )
        with self.database.session() as session:
            result = session.execute(statement)
            return result.rowcount > 0
