"""Normalization of search filters into a canonical event query.

Raw filter input arrives from query strings with camelCase names, optional
fields and convenience shortcuts (timeframe, page). normalize_filters resolves
all of that into an EventQuery whose optional fields are either set to a valid
value or absent.
"""

from datetime import date
from typing import Any, Callable, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .exceptions import FilterValidationError
from ..config.listing import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    TIMEFRAME_MONTH,
    TIMEFRAME_WEEK,
    WEEK_TIMEFRAME_DAYS,
)
from ..utils.dates import add_days, add_months, today_utc

class EventFilterInput(BaseModel):
    """Caller supplied filter criteria, all optional."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='forbid',
    )

    query: Optional[str] = None
    badge_name: Optional[str] = None
    subject_area: Optional[str] = None
    is_virtual: Optional[bool] = None
    is_eagle_required: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    timeframe: Optional[Literal['week', 'month']] = None
    page: Optional[int] = Field(default=None, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    offset: int = Field(default=0, ge=0)

    @field_validator('query', 'badge_name', 'subject_area', 'timeframe', 'start_date', 'end_date', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode='after')
    def check_pagination(self) -> 'EventFilterInput':
        if self.page is not None and self.offset:
            raise ValueError("page and offset cannot be combined")
        return self

class EventQuery(BaseModel):
    """Canonical, fully resolved query descriptor."""
    model_config = ConfigDict(frozen=True)

    query: Optional[str] = None
    badge_name: Optional[str] = None
    subject_area: Optional[str] = None
    is_virtual: Optional[bool] = None
    is_eagle_required: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

def resolve_timeframe(timeframe: str, today: date) -> Tuple[date, date]:
    """Expand a timeframe shortcut into an inclusive (start, end) date range."""
    if timeframe == TIMEFRAME_WEEK:
        return today, add_days(today, WEEK_TIMEFRAME_DAYS)
    if timeframe == TIMEFRAME_MONTH:
        return today, add_months(today, 1)
    raise FilterValidationError(f"Unknown timeframe: {timeframe}")

def _format_errors(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item['loc'])
        message = item['msg']
        messages.append(f"{location}: {message}" if location else message)
    return '; '.join(messages)

def parse_filter_input(raw: Union[EventFilterInput, Mapping[str, Any], None]) -> EventFilterInput:
    """Validate raw filter input, raising FilterValidationError on bad values."""
    if isinstance(raw, EventFilterInput):
        return raw
    try:
        return EventFilterInput.model_validate(dict(raw or {}))
    except ValidationError as e:
        raise FilterValidationError(_format_errors(e)) from e

def normalize_filters(
    raw: Union[EventFilterInput, Mapping[str, Any], None],
    today: Optional[Union[date, Callable[[], date]]] = None
) -> EventQuery:
    """
    Convert caller filter input into a canonical EventQuery.

    Args:
        raw: EventFilterInput or a mapping using camelCase or snake_case keys
        today: Reference date (or a callable returning it) for timeframe shortcuts

    Returns:
        EventQuery with explicit limit/offset and resolved date range

    Raises:
        FilterValidationError: If the input is malformed or contradictory
    """
    filters = parse_filter_input(raw)

    if callable(today):
        today = today()
    today = today or today_utc()

    start_date, end_date = filters.start_date, filters.end_date
    # Explicit dates win over the shortcut; the two are never merged
    if start_date is None and end_date is None and filters.timeframe:
        start_date, end_date = resolve_timeframe(filters.timeframe, today)

    if start_date and end_date and start_date > end_date:
        raise FilterValidationError(
            f"startDate {start_date.isoformat()} is after endDate {end_date.isoformat()}"
        )

    offset = filters.offset
    if filters.page is not None:
        offset = (filters.page - 1) * filters.limit

    return EventQuery(
        query=filters.query,
        badge_name=filters.badge_name,
        subject_area=filters.subject_area,
        is_virtual=filters.is_virtual,
        is_eagle_required=filters.is_eagle_required,
        start_date=start_date,
        end_date=end_date,
        limit=filters.limit,
        offset=offset,
    )
