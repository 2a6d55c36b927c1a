"""Event search, detail and ranking services."""

from .exceptions import EventServiceError, FilterValidationError, UnauthorizedError
from .filters import EventFilterInput, EventQuery, normalize_filters
from .query import ApprovedEventQuery, EventPage, execute_event_query
from .service import EventService
from .trending import rank_trending_badges

__all__ = [
    'EventServiceError',
    'FilterValidationError',
    'UnauthorizedError',
    'EventFilterInput',
    'EventQuery',
    'normalize_filters',
    'ApprovedEventQuery',
    'EventPage',
    'execute_event_query',
    'EventService',
    'rank_trending_badges',
]
