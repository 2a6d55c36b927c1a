"""Events router module."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from ..dependencies import get_event_service
from ...auth import AuthUser, clear_session_cookies, get_current_user, session_expired
from ...config.listing import SEARCH_PAGE_SIZE
from ...events.exceptions import FilterValidationError, UnauthorizedError
from ...events.service import EventService

router = APIRouter(tags=["events"])

@router.get("/events", response_model=Dict[str, Any])
async def list_events(
    query: Optional[str] = Query(default=None),
    badge_name: Optional[str] = Query(default=None, alias="badgeName"),
    subject_area: Optional[str] = Query(default=None, alias="subjectArea"),
    is_virtual: Optional[bool] = Query(default=None, alias="isVirtual"),
    is_eagle_required: Optional[bool] = Query(default=None, alias="isEagleRequired"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    timeframe: Optional[str] = Query(default=None),
    # Numbers are validated with the other filters so bad values give 400
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    service: EventService = Depends(get_event_service)
):
    """List approved events matching the given filters."""
    filters = {
        'query': query,
        'badgeName': badge_name,
        'subjectArea': subject_area,
        'isVirtual': is_virtual,
        'isEagleRequired': is_eagle_required,
        'startDate': start_date,
        'endDate': end_date,
        'timeframe': timeframe,
        'page': page,
        'limit': limit,
        'offset': offset,
    }
    try:
        # Let the filter defaults apply to anything not sent
        return service.list_events({k: v for k, v in filters.items() if v is not None})
    except FilterValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/events/search", response_model=Dict[str, Any])
async def search_events(
    q: Optional[str] = Query(default=None),
    badge_name: Optional[str] = Query(default=None, alias="badgeName"),
    subject_area: Optional[str] = Query(default=None, alias="subjectArea"),
    virtual: bool = Query(default=False),
    eagle: bool = Query(default=False),
    timeframe: Optional[str] = Query(default=None),
    page: str = Query(default="1"),
    service: EventService = Depends(get_event_service)
):
    """Search page results, twelve per page."""
    try:
        return service.search_events(
            q=q,
            badge_name=badge_name,
            subject_area=subject_area,
            virtual=virtual,
            eagle=eagle,
            timeframe=timeframe,
            page=page,
            page_size=SEARCH_PAGE_SIZE,
        )
    except FilterValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/events/featured", response_model=Dict[str, Any])
async def get_featured_events(service: EventService = Depends(get_event_service)):
    """Upcoming classes for the homepage."""
    return service.get_featured_events()

@router.get("/events/{event_id}", response_model=Dict[str, Any])
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Get a single event by ID. Unknown IDs return a null event."""
    return service.get_event(event_id)

@router.get("/events/{event_id}/related", response_model=Dict[str, Any])
async def get_related_events(event_id: str, service: EventService = Depends(get_event_service)):
    """Other classes teaching the same badge."""
    return service.get_related_events(event_id)

@router.post("/events/{event_id}/save", response_model=Dict[str, Any])
async def toggle_save_event(
    event_id: str,
    request: Request,
    current_user: Optional[AuthUser] = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    """Save an event. Requires a signed-in user."""
    try:
        return service.toggle_save_event(event_id, current_user)
    except UnauthorizedError as e:
        response = JSONResponse(status_code=401, content={"detail": str(e)})
        # Only a session Supabase rejected is cleared, never one it could not check
        if session_expired(request):
            clear_session_cookies(response)
        return response
